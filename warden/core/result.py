"""Result types for railway-oriented programming.

Operations that can fail in an expected way (a rejected token, an aborted
purge sweep, a cache outage) return a Result instead of raising. Callers
branch on the variant explicitly.

Usage:
    def consume(token: str) -> Result[UUID, str]:
        if not token:
            return Failure(error=TokenError.INVALID_TOKEN)
        return Success(value=subject_id)

    match consume(token):
        case Success(value=subject_id):
            ...
        case Failure(error=reason):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
