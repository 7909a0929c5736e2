"""Pydantic schemas for registration, login and user reads."""
from pydantic import BaseModel


class RegisterSchema(BaseModel):
    # Optional so a missing field reaches the handler's own message
    username: str | None = None
    password: str | None = None
    email: str | None = None


class LoginSchema(BaseModel):
    username: str | None = None
    password: str | None = None


class UserOutSchema(BaseModel):
    """Public user fields; the password digest is never included."""

    id: int
    username: str
    email: str | None = None

    class Config:
        from_attributes = True
