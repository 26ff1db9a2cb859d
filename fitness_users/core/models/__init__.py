from .user import (
    SimpleUserView,
    UserCreateRequest,
    UserEmailView,
    UserUpdateRequest,
    UserView,
)

__all__ = [
    "SimpleUserView",
    "UserCreateRequest",
    "UserEmailView",
    "UserUpdateRequest",
    "UserView",
]
