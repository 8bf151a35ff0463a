"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from user_management.adapters.supabase_audit_repository import (
    SupabaseAuditRepository,
)
from user_management.adapters.supabase_user_repository import SupabaseUserRepository
from user_management.config import Settings
from user_management.services.audit import AuditService
from user_management.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    audit_service: AuditService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(
        supabase_client, table_name=resolved_settings.users_table
    )
    audit_repository = SupabaseAuditRepository(
        supabase_client, table_name=resolved_settings.audit_table
    )
    audit_service = AuditService(audit_repository)
    user_service = UserService(user_repository, audit_service)

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        audit_service=audit_service,
    )
