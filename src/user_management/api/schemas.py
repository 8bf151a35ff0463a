"""Pydantic models for user management requests."""

from datetime import date

from pydantic import BaseModel, Field

from user_management.domain.users import NewUser, User

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserForm(BaseModel):
    """User fields submitted by the admin UI."""

    forename: str = Field(min_length=1, max_length=50)
    surname: str = Field(min_length=1, max_length=50)
    email: str = Field(pattern=_EMAIL_PATTERN)
    is_active: bool = True
    date_of_birth: date

    def to_new_user(self) -> NewUser:
        """Build a user ready for creation."""
        return NewUser(
            forename=self.forename,
            surname=self.surname,
            email=self.email,
            is_active=self.is_active,
            date_of_birth=self.date_of_birth,
        )


class UserUpdateForm(UserForm):
    """User fields submitted when editing an existing user."""

    id: int

    def to_user(self) -> User:
        """Build the edited user state."""
        return User(
            id=self.id,
            forename=self.forename,
            surname=self.surname,
            email=self.email,
            is_active=self.is_active,
            date_of_birth=self.date_of_birth,
        )
