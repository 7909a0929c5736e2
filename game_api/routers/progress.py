"""Progress routes: list a user's levels, save a level result."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from game_api.core.errors import StoreError
from game_api.db.session import get_db
from game_api.schemas.progress import MessageSchema, ProgressOutSchema, SaveProgressSchema, UserIdPath
from game_api.services.progress import list_progress, save_best_score

router = APIRouter(tags=["progress"])


@router.get("/progress/{user_id}", response_model=list[ProgressOutSchema])
async def get_progress(
    user_id: UserIdPath,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Levels of one user in the order they were first saved; empty if none."""
    try:
        records = await list_progress(db, user_id)
    except SQLAlchemyError as exc:
        raise StoreError.from_exc(exc) from exc
    return [ProgressOutSchema.model_validate(r) for r in records]


@router.post("/save-progress", response_model=MessageSchema)
async def save_progress(
    body: SaveProgressSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Keep the best star count per level."""
    try:
        message = await save_best_score(db, body.user_id, body.level_number, body.stars)
    except SQLAlchemyError as exc:
        raise StoreError.from_exc(exc) from exc
    return MessageSchema(message=message)
