"""User-related business logic."""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Protocol

from user_management.domain.audit import AuditAction
from user_management.domain.users import USER_SCHEMA, NewUser, User
from user_management.services.audit import AuditService
from user_management.services.changes import (
    changed_values,
    final_values,
    initial_values,
    serialize_changes,
)

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def list_users(self) -> list[User]:
        """Return all users."""

    def get_user(self, user_id: int) -> User | None:
        """Return the persisted state of a user, if present."""

    def create_user(self, user: NewUser) -> User:
        """Create a user and return it with its assigned id."""

    def update_user(self, user: User) -> None:
        """Overwrite the persisted fields of an existing user."""

    def delete_user(self, user_id: int) -> None:
        """Delete a user by id."""


@dataclass
class _UserLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    holders: int = 0


@dataclass
class UserService:
    """Application service for audited user lifecycle actions."""

    repository: UserRepository
    audit_service: AuditService
    _locks: dict[int, _UserLock] = field(default_factory=dict, repr=False)
    _locks_guard: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def list_users(self) -> list[User]:
        """Return all users."""
        return self.repository.list_users()

    def filter_by_active(self, is_active: bool) -> list[User]:
        """Return users whose active flag matches."""
        return [user for user in self.list_users() if user.is_active == is_active]

    def get_user(self, user_id: int) -> User | None:
        """Return a user by id."""
        return self.repository.get_user(user_id)

    def create_user(self, new_user: NewUser) -> User:
        """Persist a new user and record its initial values."""
        created = self.repository.create_user(new_user)
        details = serialize_changes(initial_values(USER_SCHEMA, created))
        self.audit_service.log(AuditAction.CREATE, created.id, details, created)
        return created

    def update_user(self, user: User) -> bool:
        """Persist changes to an existing user and record what changed.

        Returns False when no user with the id exists. Nothing is logged when
        the submitted values match the stored ones.
        """
        with self._user_lock(user.id):
            original = self.repository.get_user(user.id)
            if original is None:
                _logger.info("Update skipped, unknown user: user_id=%s", user.id)
                return False
            self.repository.update_user(user)
            changes = changed_values(USER_SCHEMA, original, user)
            if not changes:
                _logger.info("Update without changes: user_id=%s", user.id)
                return True
            details = serialize_changes(changes)
            self.audit_service.log(AuditAction.UPDATE, user.id, details, user)
        return True

    def delete_user(self, user_id: int) -> bool:
        """Delete a user and record its final values.

        Returns False when no user with the id exists.
        """
        with self._user_lock(user_id):
            user = self.repository.get_user(user_id)
            if user is None:
                _logger.info("Delete skipped, unknown user: user_id=%s", user_id)
                return False
            changes = final_values(USER_SCHEMA, user)
            self.repository.delete_user(user_id)
            details = serialize_changes(changes)
            self.audit_service.log(AuditAction.DELETE, user_id, details, user)
        return True

    @contextmanager
    def _user_lock(self, user_id: int) -> Iterator[None]:
        with self._locks_guard:
            entry = self._locks.setdefault(user_id, _UserLock())
            entry.holders += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._locks_guard:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._locks[user_id]
