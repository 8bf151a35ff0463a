"""Field-level change sets for audited entity mutations."""

import json
import logging
from datetime import date
from typing import TypeVar

from user_management.domain.changes import (
    EMPTY,
    ChangeSet,
    EntitySchema,
    FieldChange,
    FieldValue,
)

EntityT = TypeVar("EntityT")

_logger = logging.getLogger(__name__)

_OLD_KEY = "OldValue"
_NEW_KEY = "NewValue"


def initial_values(schema: EntitySchema[EntityT], entity: EntityT) -> ChangeSet:
    """Return every field of a newly created entity with an empty old value."""
    return {
        name: FieldChange(old_value=EMPTY, new_value=value)
        for name, value in schema.values(entity)
    }


def changed_values(
    schema: EntitySchema[EntityT],
    old: EntityT | None,
    new: EntityT | None,
) -> ChangeSet:
    """Return only the fields whose values differ between two entity states."""
    if old is None or new is None:
        return {}
    changes: ChangeSet = {}
    for spec in schema.fields:
        old_value = spec.getter(old)
        new_value = spec.getter(new)
        if not values_equal(old_value, new_value):
            changes[spec.name] = FieldChange(old_value=old_value, new_value=new_value)
    return changes


def final_values(schema: EntitySchema[EntityT], entity: EntityT) -> ChangeSet:
    """Return every field of a deleted entity with an empty new value."""
    return {
        name: FieldChange(old_value=value, new_value=EMPTY)
        for name, value in schema.values(entity)
    }


def values_equal(left: FieldValue, right: FieldValue) -> bool:
    """Compare two field values by type and value."""
    return type(left) is type(right) and left == right


def serialize_changes(changes: ChangeSet) -> str:
    """Serialize a change set to indented JSON, preserving field order."""
    payload = {
        name: {
            _OLD_KEY: _to_json_value(change.old_value),
            _NEW_KEY: _to_json_value(change.new_value),
        }
        for name, change in changes.items()
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def parse_changes(
    payload: str | None, schema: EntitySchema[EntityT]
) -> ChangeSet | None:
    """Parse serialized change set JSON.

    Returns None when the payload is missing or malformed so callers can
    show the raw details instead of failing.
    """
    if not payload:
        return None
    try:
        data = json.loads(payload)
    except ValueError:
        _logger.warning("Audit details are not valid JSON")
        return None
    if not isinstance(data, dict):
        return None
    changes: ChangeSet = {}
    for name, entry in data.items():
        if not isinstance(entry, dict):
            return None
        if _OLD_KEY not in entry and _NEW_KEY not in entry:
            return None
        kind = schema.kind_of(name)
        try:
            changes[name] = FieldChange(
                old_value=_from_json_value(entry.get(_OLD_KEY, EMPTY), kind),
                new_value=_from_json_value(entry.get(_NEW_KEY, EMPTY), kind),
            )
        except ValueError:
            _logger.warning("Audit details hold an unreadable value for %s", name)
            return None
    return changes


def _to_json_value(value: FieldValue) -> object:
    if isinstance(value, date):
        return value.isoformat()
    return value


def _from_json_value(value: object, kind: type | None) -> object:
    if value == EMPTY:
        return EMPTY
    if kind is date:
        if not isinstance(value, str):
            raise ValueError(f"Expected ISO date string, got {value!r}")
        return date.fromisoformat(value)
    return value
