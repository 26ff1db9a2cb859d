"""User domain entity."""

from datetime import date

from pydantic import Field

from fitness_users.entities._base import Entity


class User(Entity):
    """User entity representing a person tracked by the service.

    This is the domain model the service layer works with. It carries no
    validation beyond types; the email uniqueness rule is enforced by
    ``UserService``.
    """

    first_name: str = Field(description="User's first name")
    last_name: str = Field(description="User's last name")
    birthdate: date = Field(description="User's date of birth")
    email: str = Field(description="User's email address, unique across users")
