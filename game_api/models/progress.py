"""Progress model: best star count and completion flag per (user, level)."""
from sqlalchemy import Boolean, Column, ForeignKey, Integer, UniqueConstraint, text
from sqlalchemy.orm import relationship

from game_api.db.session import Base


class UserProgress(Base):
    __tablename__ = "user_progress"
    __table_args__ = (UniqueConstraint("user_id", "level_number"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    level_number = Column(Integer, nullable=False)
    stars = Column(Integer, default=0, server_default=text("0"))  # never decreases
    completed = Column(Boolean, default=True, server_default=text("1"))

    user = relationship("User", back_populates="progress")
