"""Change-set domain models and entity schema descriptors."""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import date
from typing import Generic, TypeVar

EntityT = TypeVar("EntityT")

EMPTY = ""

FieldValue = str | int | bool | date


@dataclass(frozen=True)
class FieldChange:
    """Before and after values for a single field."""

    old_value: FieldValue
    new_value: FieldValue


ChangeSet = dict[str, FieldChange]


@dataclass(frozen=True)
class FieldSpec(Generic[EntityT]):
    """A named, readable field of an entity."""

    name: str
    getter: Callable[[EntityT], FieldValue]
    kind: type


@dataclass(frozen=True)
class EntitySchema(Generic[EntityT]):
    """Ordered field listing for an audited entity type."""

    fields: tuple[FieldSpec[EntityT], ...]

    @property
    def field_names(self) -> list[str]:
        """Return field names in declaration order."""
        return [spec.name for spec in self.fields]

    def values(self, entity: EntityT) -> Iterator[tuple[str, FieldValue]]:
        """Yield (name, value) pairs for an entity in declaration order."""
        for spec in self.fields:
            yield spec.name, spec.getter(entity)

    def kind_of(self, name: str) -> type | None:
        """Return the declared value type for a field, if known."""
        for spec in self.fields:
            if spec.name == name:
                return spec.kind
        return None
