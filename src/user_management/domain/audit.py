"""Audit log domain models."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from user_management.domain.changes import ChangeSet


class AuditAction(StrEnum):
    """Kinds of mutation recorded in the audit log."""

    CREATE = "Create"
    UPDATE = "Update"
    DELETE = "Delete"


@dataclass(frozen=True)
class AuditLogEntry:
    """Append-only record of one change set."""

    id: int
    action: AuditAction
    user_id: int
    user_display_name: str
    timestamp: datetime
    details: str


@dataclass(frozen=True)
class AuditLogDetail:
    """Audit entry with its details parsed back into a change set."""

    entry: AuditLogEntry
    changes: ChangeSet | None
