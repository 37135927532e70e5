"""User API models package."""

from user_api.models.error import ErrorResponse, MessageResponse
from user_api.models.user import User, UserCreate, UserUpdate

__all__ = [
    "ErrorResponse",
    "MessageResponse",
    "User",
    "UserCreate",
    "UserUpdate",
]
