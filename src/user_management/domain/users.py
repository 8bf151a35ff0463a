"""User domain models."""

from dataclasses import dataclass
from datetime import date

from user_management.domain.changes import EntitySchema, FieldSpec


@dataclass(frozen=True)
class NewUser:
    """User details submitted for creation, before an id is assigned."""

    forename: str
    surname: str
    email: str
    is_active: bool
    date_of_birth: date


@dataclass(frozen=True)
class User:
    """Represents a user stored in the database."""

    id: int
    forename: str
    surname: str
    email: str
    is_active: bool
    date_of_birth: date

    @property
    def display_name(self) -> str:
        """Return the forename and surname joined by a space."""
        return f"{self.forename} {self.surname}"


USER_SCHEMA: EntitySchema[User] = EntitySchema(
    fields=(
        FieldSpec("id", lambda user: user.id, int),
        FieldSpec("forename", lambda user: user.forename, str),
        FieldSpec("surname", lambda user: user.surname, str),
        FieldSpec("email", lambda user: user.email, str),
        FieldSpec("is_active", lambda user: user.is_active, bool),
        FieldSpec("date_of_birth", lambda user: user.date_of_birth, date),
    )
)
