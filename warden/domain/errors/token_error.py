"""Token domain errors.

Reason constants for token issuance and validation failures.

Architecture:
    - Domain layer errors (no infrastructure dependencies)
    - Used in Result types as ``Failure(error=TokenError.INVALID_TOKEN)``
    - Never raised as exceptions

These reasons are internal. At the authentication boundary every one of them
is collapsed into a single "Please authenticate" failure and only the reason
is logged.
"""


class TokenError:
    """Token error constants.

    Error Categories:
        - Signature/claims: INVALID_TOKEN, EXPIRED_TOKEN, MALFORMED_TOKEN,
          WRONG_TOKEN_TYPE
        - Stored state: TOKEN_NOT_FOUND, TOKEN_ALREADY_CONSUMED
        - Session: SESSION_NOT_FOUND, SUBJECT_NOT_FOUND
    """

    INVALID_TOKEN = "Invalid token"
    EXPIRED_TOKEN = "Token expired"
    MALFORMED_TOKEN = "Malformed token"
    WRONG_TOKEN_TYPE = "Wrong token type"

    TOKEN_NOT_FOUND = "Token not found"
    TOKEN_ALREADY_CONSUMED = "Token already consumed"

    SESSION_NOT_FOUND = "Session not found"
    SUBJECT_NOT_FOUND = "Subject not found"
