"""Purge sweep errors."""

from dataclasses import dataclass

from warden.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class PurgeError(DomainError):
    """A purge sweep was aborted and rolled back.

    Nothing was deleted and no audit entries were consumed; the next
    scheduled run sees the same entries again.

    Attributes:
        retryable: Whether a later run can succeed without intervention.
        reason: Short machine-oriented cause (``unknown_entity_type``,
            ``database_error``).
    """

    retryable: bool = True
    reason: str | None = None
