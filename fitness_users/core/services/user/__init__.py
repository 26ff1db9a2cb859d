from .user_mapper import UserMapper
from .user_service import UserService

__all__ = ["UserMapper", "UserService"]
