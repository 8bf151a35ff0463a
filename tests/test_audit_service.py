"""Tests for the audit service."""

from datetime import UTC, datetime

from user_management.domain.audit import AuditAction
from user_management.domain.changes import FieldChange
from user_management.services.audit import AuditService
from tests.conftest import InMemoryAuditRepository, make_castor


def test_log_appends_entry_with_display_name_and_utc_timestamp() -> None:
    repository = InMemoryAuditRepository()
    service = AuditService(repository)
    before = datetime.now(tz=UTC)

    entry = service.log(AuditAction.UPDATE, 3, '{"a": 1}', make_castor())

    assert repository.entries == [entry]
    assert entry.user_display_name == "Castor Troy"
    assert entry.details == '{"a": 1}'
    assert entry.timestamp.tzinfo is UTC
    assert before <= entry.timestamp <= datetime.now(tz=UTC)


def test_log_stores_payload_without_validating_it() -> None:
    repository = InMemoryAuditRepository()
    service = AuditService(repository)

    service.log(AuditAction.CREATE, 3, "not json", make_castor())

    assert repository.entries[0].details == "not json"


def test_list_logs_for_user_filters_by_user_id() -> None:
    service = AuditService(InMemoryAuditRepository())
    service.log(AuditAction.CREATE, 3, "{}", make_castor())
    service.log(AuditAction.CREATE, 4, "{}", make_castor(id=4))

    assert [entry.user_id for entry in service.list_logs()] == [3, 4]
    assert [entry.user_id for entry in service.list_logs_for_user(4)] == [4]


def test_get_log_detail_parses_changes() -> None:
    service = AuditService(InMemoryAuditRepository())
    entry = service.log(
        AuditAction.UPDATE,
        3,
        '{"is_active": {"OldValue": false, "NewValue": true}}',
        make_castor(),
    )

    detail = service.get_log_detail(entry.id)

    assert detail is not None
    assert detail.entry == entry
    assert detail.changes == {
        "is_active": FieldChange(old_value=False, new_value=True)
    }


def test_get_log_detail_tolerates_malformed_details() -> None:
    service = AuditService(InMemoryAuditRepository())
    entry = service.log(AuditAction.UPDATE, 3, "{broken", make_castor())

    detail = service.get_log_detail(entry.id)

    assert detail is not None
    assert detail.changes is None


def test_get_log_detail_missing_entry() -> None:
    service = AuditService(InMemoryAuditRepository())

    assert service.get_log_detail(42) is None
    assert service.get_log(42) is None
