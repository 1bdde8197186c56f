"""Password hashing protocol for domain layer.

The hashing primitive is an external collaborator; only this port is used by
application services.
"""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Password hashing interface.

    Implementations:
        - BcryptPasswordService: bcrypt with configurable cost factor
    """

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password (salted, one-way)."""
        ...

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Constant-time check of a plaintext password against a hash.

        Returns False (never raises) for malformed hashes.
        """
        ...
