"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from user_management.domain.users import NewUser, User
from user_management.services.users import UserRepository

_USER_COLUMNS = "id, forename, surname, email, is_active, date_of_birth"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client
    table_name: str = "users"

    def list_users(self) -> list[User]:
        """Return all users ordered by id."""
        response = (
            self.client.table(self.table_name)
            .select(_USER_COLUMNS)
            .order("id")
            .execute()
        )
        return [_row_to_user(row) for row in response.data or []]

    def get_user(self, user_id: int) -> User | None:
        """Return the stored row for a user, if present."""
        response = (
            self.client.table(self.table_name)
            .select(_USER_COLUMNS)
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if response.data:
            return _row_to_user(response.data[0])
        return None

    def create_user(self, user: NewUser) -> User:
        """Insert a user row and return it with the assigned id."""
        response = (
            self.client.table(self.table_name)
            .insert(
                {
                    "forename": user.forename,
                    "surname": user.surname,
                    "email": user.email,
                    "is_active": user.is_active,
                    "date_of_birth": user.date_of_birth.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _row_to_user(response.data[0])

    def update_user(self, user: User) -> None:
        """Overwrite the editable columns for a user."""
        self.client.table(self.table_name).update(
            {
                "forename": user.forename,
                "surname": user.surname,
                "email": user.email,
                "is_active": user.is_active,
                "date_of_birth": user.date_of_birth.isoformat(),
            }
        ).eq("id", user.id).execute()

    def delete_user(self, user_id: int) -> None:
        """Delete the row for a user."""
        self.client.table(self.table_name).delete().eq("id", user_id).execute()


def _row_to_user(row: dict[str, object]) -> User:
    return User(
        id=int(row["id"]),
        forename=str(row.get("forename") or ""),
        surname=str(row.get("surname") or ""),
        email=str(row.get("email") or ""),
        is_active=bool(row.get("is_active")),
        date_of_birth=date.fromisoformat(str(row["date_of_birth"])),
    )
