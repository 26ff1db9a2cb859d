"""Conversions between the User entity and its wire shapes."""

from fitness_users.core.models.user import (
    SimpleUserView,
    UserCreateRequest,
    UserEmailView,
    UserView,
)
from fitness_users.entities.user import User


class UserMapper:
    """Pure entity <-> view conversions. Holds no state and validates nothing."""

    @staticmethod
    def to_view(user: User) -> UserView:
        return UserView(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            birthdate=user.birthdate,
            email=user.email,
        )

    @staticmethod
    def to_simple_view(user: User) -> SimpleUserView:
        return SimpleUserView(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
        )

    @staticmethod
    def to_email_view(user: User) -> UserEmailView:
        return UserEmailView(id=user.id, email=user.email)

    @staticmethod
    def to_entity(request: UserCreateRequest) -> User:
        """Build an unsaved entity; the id is always left for the store to assign."""
        return User(
            first_name=request.first_name,
            last_name=request.last_name,
            birthdate=request.birthdate,
            email=request.email,
        )
