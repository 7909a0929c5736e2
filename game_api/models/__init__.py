from game_api.models.user import User
from game_api.models.progress import UserProgress

__all__ = ["User", "UserProgress"]
