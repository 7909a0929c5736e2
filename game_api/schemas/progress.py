"""Pydantic schemas for level progress."""
from typing import Annotated

from fastapi import Path
from pydantic import BaseModel, Field

# SQLite INTEGER is a signed 64-bit value
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

StoreInt = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]
UserIdPath = Annotated[int, Path(ge=INT64_MIN, le=INT64_MAX)]


class SaveProgressSchema(BaseModel):
    user_id: StoreInt
    level_number: StoreInt
    stars: StoreInt


class ProgressOutSchema(BaseModel):
    level_number: int
    stars: int
    completed: bool

    class Config:
        from_attributes = True


class MessageSchema(BaseModel):
    message: str
