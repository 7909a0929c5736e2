"""User routes: read one user, delete a user with all of their progress."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from game_api.core.errors import NotFoundError, StoreError
from game_api.db.session import get_db
from game_api.models.progress import UserProgress
from game_api.models.user import User
from game_api.schemas.progress import MessageSchema, UserIdPath
from game_api.schemas.user import UserOutSchema

router = APIRouter(tags=["users"])
logger = logging.getLogger(__name__)


@router.get("/user/{user_id}", response_model=UserOutSchema)
async def get_user(
    user_id: UserIdPath,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    try:
        result = await db.execute(select(User).where(User.id == user_id))
    except SQLAlchemyError as exc:
        raise StoreError.from_exc(exc) from exc

    user = result.scalar_one_or_none()
    if user is None:
        raise NotFoundError("User not found")
    return UserOutSchema.model_validate(user)


@router.delete("/user/{user_id}", response_model=MessageSchema)
async def delete_user(
    user_id: UserIdPath,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Delete progress rows then the user row in one transaction.

    An unknown id deletes nothing and still reports success.
    """
    try:
        async with db.begin():
            await db.execute(delete(UserProgress).where(UserProgress.user_id == user_id))
            await db.execute(delete(User).where(User.id == user_id))
    except SQLAlchemyError as exc:
        raise StoreError.from_exc(exc) from exc

    logger.info("Deleted user id=%s", user_id)
    return MessageSchema(message="User deleted")
