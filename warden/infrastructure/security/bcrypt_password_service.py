"""Bcrypt password hashing service (adapter).

Implements PasswordHashingProtocol. Cost factor is configurable (10-20);
each +1 doubles hashing time.
"""

import bcrypt


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Usage:
        password_service = BcryptPasswordService(cost_factor=settings.bcrypt_rounds)
        password_hash = password_service.hash_password("SecurePass123!")
        password_service.verify_password("SecurePass123!", password_hash)
    """

    def __init__(self, cost_factor: int = 12) -> None:
        """Initialize bcrypt password service.

        Raises:
            ValueError: If cost_factor is outside 10..20.
        """
        if cost_factor < 10:
            msg = "Cost factor must be at least 10 for security"
            raise ValueError(msg)
        if cost_factor > 20:
            msg = "Cost factor above 20 is impractically slow"
            raise ValueError(msg)

        self._cost_factor = cost_factor

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password (random salt, ``$2b$`` format, 60 chars)."""
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        password_hash = bcrypt.hashpw(password.encode("utf-8"), salt)
        return password_hash.decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Constant-time verification. False for malformed hashes."""
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8")
            )
        except (ValueError, AttributeError):
            return False
