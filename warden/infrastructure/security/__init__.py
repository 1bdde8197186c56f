"""Security adapters (token signing, password hashing)."""

from warden.infrastructure.security.bcrypt_password_service import (
    BcryptPasswordService,
)
from warden.infrastructure.security.jwt_service import JWTService

__all__ = ["BcryptPasswordService", "JWTService"]
