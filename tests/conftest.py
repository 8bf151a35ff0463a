"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime

import pytest

from user_management.config import Settings
from user_management.containers import AppContainer
from user_management.domain.audit import AuditAction, AuditLogEntry
from user_management.domain.users import NewUser, User
from user_management.services.audit import AuditRepository, AuditService
from user_management.services.users import UserRepository, UserService


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[int, User] = field(default_factory=dict)
    next_id: int = 1
    deleted: list[int] = field(default_factory=list)

    def list_users(self) -> list[User]:
        return sorted(self.users.values(), key=lambda user: user.id)

    def get_user(self, user_id: int) -> User | None:
        return self.users.get(user_id)

    def create_user(self, user: NewUser) -> User:
        created = User(
            id=self.next_id,
            forename=user.forename,
            surname=user.surname,
            email=user.email,
            is_active=user.is_active,
            date_of_birth=user.date_of_birth,
        )
        self.users[created.id] = created
        self.next_id += 1
        return created

    def update_user(self, user: User) -> None:
        self.users[user.id] = replace(user)

    def delete_user(self, user_id: int) -> None:
        self.users.pop(user_id, None)
        self.deleted.append(user_id)


@dataclass
class InMemoryAuditRepository(AuditRepository):
    """In-memory audit repository for tests."""

    entries: list[AuditLogEntry] = field(default_factory=list)

    def append_entry(  # noqa: PLR0913
        self,
        action: AuditAction,
        user_id: int,
        user_display_name: str,
        timestamp: datetime,
        details: str,
    ) -> AuditLogEntry:
        entry = AuditLogEntry(
            id=len(self.entries) + 1,
            action=action,
            user_id=user_id,
            user_display_name=user_display_name,
            timestamp=timestamp,
            details=details,
        )
        self.entries.append(entry)
        return entry

    def list_entries(self) -> list[AuditLogEntry]:
        return list(self.entries)

    def list_entries_for_user(self, user_id: int) -> list[AuditLogEntry]:
        return [entry for entry in self.entries if entry.user_id == user_id]

    def get_entry(self, entry_id: int) -> AuditLogEntry | None:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None


def make_castor(**overrides: object) -> User:
    """Return the Castor Troy user, optionally with changed fields."""
    user = User(
        id=3,
        forename="Castor",
        surname="Troy",
        email="ctroy@example.com",
        is_active=False,
        date_of_birth=date(1964, 9, 22),
    )
    return replace(user, **overrides)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def audit_repository() -> InMemoryAuditRepository:
    return InMemoryAuditRepository()


@pytest.fixture
def audit_service(audit_repository: InMemoryAuditRepository) -> AuditService:
    return AuditService(audit_repository)


@pytest.fixture
def user_service(
    user_repository: InMemoryUserRepository, audit_service: AuditService
) -> UserService:
    return UserService(user_repository, audit_service)


@pytest.fixture
def container(
    settings: Settings,
    user_service: UserService,
    audit_service: AuditService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        user_service=user_service,
        audit_service=audit_service,
    )
