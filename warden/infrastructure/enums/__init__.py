"""Infrastructure enums package.

Usage:
    from warden.infrastructure.enums import InfrastructureErrorCode
"""

from warden.infrastructure.enums.infrastructure_error_code import (
    InfrastructureErrorCode,
)

__all__ = ["InfrastructureErrorCode"]
