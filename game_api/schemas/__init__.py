from game_api.schemas.progress import MessageSchema, ProgressOutSchema, SaveProgressSchema
from game_api.schemas.user import LoginSchema, RegisterSchema, UserOutSchema

__all__ = [
    "LoginSchema",
    "MessageSchema",
    "ProgressOutSchema",
    "RegisterSchema",
    "SaveProgressSchema",
    "UserOutSchema",
]
