"""User database table model."""

from datetime import date

from sqlmodel import Field

from fitness_users.entities._base import EntityTable


class UserTable(EntityTable, table=True):
    """Database persistence model for users.

    This represents how the User entity is stored in the database.
    The unique index on ``email`` backs the service-level uniqueness check
    when two writers race on the same address.
    """

    __tablename__ = "users"
    # Deleted ids are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    first_name: str
    last_name: str
    birthdate: date
    email: str = Field(unique=True, index=True)
