"""SQLAlchemy declarative base and model imports for Alembic."""
from game_api.db.session import Base

# Import all models so Alembic can see them
from game_api.models.progress import UserProgress  # noqa: F401
from game_api.models.user import User  # noqa: F401

__all__ = ["Base", "User", "UserProgress"]
