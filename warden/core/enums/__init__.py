"""Core enums package.

Usage:
    from warden.core.enums import Environment, ErrorCode
"""

from warden.core.enums.environment import Environment
from warden.core.enums.error_code import ErrorCode

__all__ = ["Environment", "ErrorCode"]
