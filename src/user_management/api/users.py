"""User management API endpoints."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from user_management.api.schemas import UserForm, UserUpdateForm  # noqa: TC001

if TYPE_CHECKING:
    from user_management.containers import AppContainer
    from user_management.domain.audit import AuditLogEntry
    from user_management.domain.changes import ChangeSet, FieldValue
    from user_management.domain.users import User

router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
async def list_users(
    request: Request, is_active: bool | None = None
) -> dict[str, object]:
    """Return all users, optionally filtered by active state."""
    container: AppContainer = request.app.state.container
    if is_active is None:
        users = container.user_service.list_users()
    else:
        users = container.user_service.filter_by_active(is_active)
    return {"users": [_serialize_user(user) for user in users]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(form: UserForm, request: Request) -> dict[str, object]:
    """Create a user and record the initial values."""
    container: AppContainer = request.app.state.container
    created = container.user_service.create_user(form.to_new_user())
    return {"user": _serialize_user(created)}


@router.get("/logs")
async def list_logs(request: Request) -> dict[str, object]:
    """Return every audit log entry."""
    container: AppContainer = request.app.state.container
    return {
        "logs": [
            _serialize_entry(entry) for entry in container.audit_service.list_logs()
        ]
    }


@router.get("/logs/{log_id}")
async def log_detail(log_id: int, request: Request) -> dict[str, object]:
    """Return an audit entry with its parsed change set, when readable."""
    container: AppContainer = request.app.state.container
    detail = container.audit_service.get_log_detail(log_id)
    if detail is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {
        "log": _serialize_entry(detail.entry),
        "changes": _serialize_change_set(detail.changes)
        if detail.changes is not None
        else None,
    }


@router.get("/{user_id}")
async def user_detail(user_id: int, request: Request) -> dict[str, object]:
    """Return a user with their audit history."""
    container: AppContainer = request.app.state.container
    user = container.user_service.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    logs = container.audit_service.list_logs_for_user(user_id)
    return {
        "user": _serialize_user(user),
        "logs": [_serialize_entry(entry) for entry in logs],
    }


@router.put("/{user_id}")
async def update_user(
    user_id: int, form: UserUpdateForm, request: Request
) -> dict[str, object]:
    """Update a user and record the changed fields."""
    if user_id != form.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST)
    container: AppContainer = request.app.state.container
    user = form.to_user()
    if not container.user_service.update_user(user):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"user": _serialize_user(user)}


@router.delete("/{user_id}")
async def delete_user(user_id: int, request: Request) -> dict[str, object]:
    """Delete a user and record the final values."""
    container: AppContainer = request.app.state.container
    if not container.user_service.delete_user(user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"deleted": user_id}


def _serialize_user(user: User) -> dict[str, object]:
    return {
        "id": user.id,
        "forename": user.forename,
        "surname": user.surname,
        "email": user.email,
        "is_active": user.is_active,
        "date_of_birth": user.date_of_birth.isoformat(),
    }


def _serialize_entry(entry: AuditLogEntry) -> dict[str, object]:
    return {
        "id": entry.id,
        "action": str(entry.action),
        "user_id": entry.user_id,
        "user": entry.user_display_name,
        "timestamp": entry.timestamp.isoformat(),
        "details": entry.details,
    }


def _serialize_change_set(changes: ChangeSet) -> dict[str, dict[str, FieldValue]]:
    return {
        name: {
            "old_value": _json_value(change.old_value),
            "new_value": _json_value(change.new_value),
        }
        for name, change in changes.items()
    }


def _json_value(value: FieldValue) -> FieldValue:
    return value.isoformat() if isinstance(value, date) else value
