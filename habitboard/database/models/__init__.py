from .user import UserProfile, DEFAULT_AVATAR
from .habit import Habit

__all__ = [
    "UserProfile",
    "DEFAULT_AVATAR",
    "Habit",
]
