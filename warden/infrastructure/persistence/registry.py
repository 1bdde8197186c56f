"""Entity registry for the soft-delete gateway and the purge sweep.

Maps a stable tag (stored in the audit ledger as ``entity_type``) to the
model class and its primary-key field. Built once at startup; lookups are a
plain dictionary access, so an unknown tag or model fails loudly.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from warden.infrastructure.persistence.base import SoftDeleteMixin
from warden.infrastructure.persistence.models import StoredFile, User


@dataclass(frozen=True, slots=True)
class EntityRegistration:
    """One registered soft-deletable model.

    Attributes:
        tag: Value written to ``soft_deleted_items.entity_type``.
        model: SQLAlchemy model class (must use SoftDeleteMixin).
        id_field: Attribute recorded as ``item_id`` and matched on purge.
    """

    tag: str
    model: type[Any]
    id_field: str = "id"

    @property
    def id_column(self) -> Any:
        """The mapped column used as the item id."""
        return getattr(self.model, self.id_field)


class EntityRegistry:
    """Tag <-> model lookup.

    Raises:
        ValueError: On construction, if a tag or model is registered twice,
            or a model lacks soft-delete columns or the id field.
        LookupError: From ``for_model`` / ``for_tag`` on an unknown key.
    """

    def __init__(self, registrations: Iterable[EntityRegistration]) -> None:
        self._by_tag: dict[str, EntityRegistration] = {}
        self._by_model: dict[type[Any], EntityRegistration] = {}

        for registration in registrations:
            if not issubclass(registration.model, SoftDeleteMixin):
                raise ValueError(
                    f"{registration.model.__name__} does not support soft delete"
                )
            if not hasattr(registration.model, registration.id_field):
                raise ValueError(
                    f"{registration.model.__name__} has no field {registration.id_field!r}"
                )
            if registration.tag in self._by_tag:
                raise ValueError(f"Duplicate entity tag {registration.tag!r}")
            if registration.model in self._by_model:
                raise ValueError(
                    f"{registration.model.__name__} is registered more than once"
                )
            self._by_tag[registration.tag] = registration
            self._by_model[registration.model] = registration

    @classmethod
    def of(cls, *models: type[Any]) -> "EntityRegistry":
        """Register models under their table names with ``id`` as id field."""
        return cls(
            EntityRegistration(tag=model.__tablename__, model=model)
            for model in models
        )

    def for_model(self, model: type[Any]) -> EntityRegistration:
        try:
            return self._by_model[model]
        except KeyError:
            raise LookupError(
                f"{getattr(model, '__name__', model)!s} is not a registered entity"
            ) from None

    def for_tag(self, tag: str) -> EntityRegistration:
        try:
            return self._by_tag[tag]
        except KeyError:
            raise LookupError(f"Unknown entity type {tag!r}") from None

    def __contains__(self, item: object) -> bool:
        return item in self._by_tag or item in self._by_model

    def __iter__(self) -> Iterator[EntityRegistration]:
        return iter(self._by_tag.values())

    def __len__(self) -> int:
        return len(self._by_tag)


def default_registry() -> EntityRegistry:
    """Registry of every soft-deletable entity in the application."""
    return EntityRegistry.of(User, StoredFile)
