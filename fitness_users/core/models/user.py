"""Request and response shapes exposed over HTTP for users."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """Serialises to camelCase keys and accepts either spelling on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserView(_CamelModel):
    """Full view of a user."""

    id: int
    first_name: str
    last_name: str
    birthdate: date
    email: str


class SimpleUserView(_CamelModel):
    """Simplified view: id and names only."""

    id: int
    first_name: str
    last_name: str


class UserEmailView(_CamelModel):
    """Email view: id and email only."""

    id: int
    email: str


class UserCreateRequest(_CamelModel):
    """Payload for creating a user.

    Unknown keys are rejected, so a body that tries to pre-assign an ``id``
    fails validation instead of being silently dropped.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )

    first_name: str
    last_name: str
    birthdate: date
    email: str


class UserUpdateRequest(_CamelModel):
    """Partial update payload; ``None`` means leave the stored value alone."""

    first_name: str | None = Field(default=None)
    last_name: str | None = Field(default=None)
    birthdate: date | None = Field(default=None)
    email: str | None = Field(default=None)

    def supplied_fields(self) -> dict:
        """Return the non-null fields keyed by attribute name."""
        return self.model_dump(exclude_none=True)
