"""User model: player account with a bcrypt password digest."""
from sqlalchemy import Column, Integer, Text
from sqlalchemy.orm import relationship

from game_api.db.session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(Text, unique=True, nullable=False)
    password = Column(Text, nullable=False)  # bcrypt digest, never plaintext
    email = Column(Text, unique=True, nullable=True)

    progress = relationship("UserProgress", back_populates="user", order_by="UserProgress.id")
