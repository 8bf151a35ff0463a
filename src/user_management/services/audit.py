"""Audit logging service."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from user_management.domain.audit import AuditAction, AuditLogDetail, AuditLogEntry
from user_management.domain.users import USER_SCHEMA, User
from user_management.services.changes import parse_changes

_logger = logging.getLogger(__name__)


class AuditRepository(Protocol):
    """Persistence interface for audit log entries."""

    def append_entry(  # noqa: PLR0913
        self,
        action: AuditAction,
        user_id: int,
        user_display_name: str,
        timestamp: datetime,
        details: str,
    ) -> AuditLogEntry:
        """Append an audit log row and return it with its assigned id."""

    def list_entries(self) -> list[AuditLogEntry]:
        """Return all audit log entries."""

    def list_entries_for_user(self, user_id: int) -> list[AuditLogEntry]:
        """Return audit log entries recorded for a user."""

    def get_entry(self, entry_id: int) -> AuditLogEntry | None:
        """Return an audit log entry by id, if present."""


@dataclass
class AuditService:
    """Service for recording and reading audit log entries."""

    repository: AuditRepository

    def log(
        self, action: AuditAction, user_id: int, details: str, user: User
    ) -> AuditLogEntry:
        """Append an audit entry for a user mutation.

        ``details`` is the already serialized change set and is stored as-is.
        """
        entry = self.repository.append_entry(
            action=action,
            user_id=user_id,
            user_display_name=user.display_name,
            timestamp=datetime.now(tz=UTC),
            details=details,
        )
        _logger.info(
            "Audit entry recorded: id=%s action=%s user_id=%s",
            entry.id,
            action,
            user_id,
        )
        return entry

    def list_logs(self) -> list[AuditLogEntry]:
        """Return all audit entries."""
        return self.repository.list_entries()

    def list_logs_for_user(self, user_id: int) -> list[AuditLogEntry]:
        """Return audit entries for a single user."""
        return self.repository.list_entries_for_user(user_id)

    def get_log(self, entry_id: int) -> AuditLogEntry | None:
        """Return an audit entry by id."""
        return self.repository.get_entry(entry_id)

    def get_log_detail(self, entry_id: int) -> AuditLogDetail | None:
        """Return an audit entry with its details parsed, if it exists."""
        entry = self.repository.get_entry(entry_id)
        if entry is None:
            return None
        return AuditLogDetail(
            entry=entry, changes=parse_changes(entry.details, USER_SCHEMA)
        )
