"""Cached projection of an authenticated subject.

A SessionDescriptor is what the session cache stores per subject. Its
presence is the second half of ACCESS-token validity: a correctly signed,
unexpired ACCESS token for a subject with no descriptor is rejected.
"""

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionDescriptor:
    """Minimal user projection cached under ``session:user:{id}``.

    Attributes:
        id: Subject identifier.
        email: Subject e-mail address.
        display_name: Name shown to other users.
        roles: Role names (see UserRole).
    """

    id: UUID
    email: str
    display_name: str | None = None
    roles: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "id": str(self.id),
            "email": self.email,
            "display_name": self.display_name,
            "roles": list(self.roles),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionDescriptor":
        """Rebuild from :meth:`to_dict` output.

        Raises:
            KeyError: If ``id`` or ``email`` is missing.
            ValueError: If ``id`` is not a UUID.
        """
        return cls(
            id=UUID(data["id"]),
            email=data["email"],
            display_name=data.get("display_name"),
            roles=tuple(data.get("roles") or ()),
        )
