"""Supabase repository for audit log entries."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from user_management.domain.audit import AuditAction, AuditLogEntry
from user_management.services.audit import AuditRepository


@dataclass
class SupabaseAuditRepository(AuditRepository):
    """Supabase-backed audit repository."""

    client: Client
    table_name: str = "user_audit_logs"

    def append_entry(  # noqa: PLR0913
        self,
        action: AuditAction,
        user_id: int,
        user_display_name: str,
        timestamp: datetime,
        details: str,
    ) -> AuditLogEntry:
        """Insert an audit log row."""
        response = (
            self.client.table(self.table_name)
            .insert(
                {
                    "action": str(action),
                    "user_id": user_id,
                    "user_display_name": user_display_name,
                    "timestamp": timestamp.isoformat(),
                    "details": details,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create audit log entry in Supabase")
        return _row_to_entry(response.data[0])

    def list_entries(self) -> list[AuditLogEntry]:
        """Return all audit entries, oldest first."""
        response = (
            self.client.table(self.table_name)
            .select("*")
            .order("timestamp")
            .execute()
        )
        return [_row_to_entry(row) for row in response.data or []]

    def list_entries_for_user(self, user_id: int) -> list[AuditLogEntry]:
        """Return audit entries for a user, oldest first."""
        response = (
            self.client.table(self.table_name)
            .select("*")
            .eq("user_id", user_id)
            .order("timestamp")
            .execute()
        )
        return [_row_to_entry(row) for row in response.data or []]

    def get_entry(self, entry_id: int) -> AuditLogEntry | None:
        """Return an audit entry by id."""
        response = (
            self.client.table(self.table_name)
            .select("*")
            .eq("id", entry_id)
            .limit(1)
            .execute()
        )
        if response.data:
            return _row_to_entry(response.data[0])
        return None


def _row_to_entry(row: dict[str, object]) -> AuditLogEntry:
    return AuditLogEntry(
        id=int(row["id"]),
        action=AuditAction(row["action"]),
        user_id=int(row["user_id"]),
        user_display_name=str(row.get("user_display_name") or ""),
        timestamp=datetime.fromisoformat(str(row["timestamp"])),
        details=str(row.get("details") or ""),
    )
