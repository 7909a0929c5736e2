"""Upsert-by-maximum for level progress: scores never regress."""
import logging

from sqlalchemy import select, update
from sqlalchemy.engine import Row
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from game_api.models.progress import UserProgress

logger = logging.getLogger(__name__)

MSG_NEW = "New progress saved successfully"
MSG_UPDATED = "Progress updated with higher score"
MSG_KEPT = "Existing score is higher, no changes made"


async def get_level_progress(db: AsyncSession, user_id: int, level_number: int) -> Row | None:
    """Return the (stars, completed) row for one level, or None."""
    result = await db.execute(
        select(UserProgress.stars, UserProgress.completed).where(
            UserProgress.user_id == user_id,
            UserProgress.level_number == level_number,
        )
    )
    return result.first()


async def list_progress(db: AsyncSession, user_id: int) -> list[UserProgress]:
    """All progress records of a user in insertion order."""
    result = await db.execute(
        select(UserProgress).where(UserProgress.user_id == user_id).order_by(UserProgress.id)
    )
    return list(result.scalars().all())


async def _save_once(db: AsyncSession, user_id: int, level_number: int, stars: int) -> str:
    existing = await get_level_progress(db, user_id, level_number)

    if existing is None:
        db.add(UserProgress(user_id=user_id, level_number=level_number, stars=stars, completed=True))
        await db.commit()
        logger.info("user %s level %s: first save, %s stars", user_id, level_number, stars)
        return MSG_NEW

    if stars <= existing.stars:
        return MSG_KEPT

    # Guarded on the stored value so an interleaved higher score is never overwritten.
    result = await db.execute(
        update(UserProgress)
        .where(
            UserProgress.user_id == user_id,
            UserProgress.level_number == level_number,
            UserProgress.stars < stars,
        )
        .values(stars=stars, completed=True)
    )
    await db.commit()
    if result.rowcount == 0:
        return MSG_KEPT
    logger.info("user %s level %s: stars %s -> %s", user_id, level_number, existing.stars, stars)
    return MSG_UPDATED


async def save_best_score(db: AsyncSession, user_id: int, level_number: int, stars: int) -> str:
    """Insert the level's progress if absent, else raise the stars when strictly higher.

    Returns one of ``MSG_NEW``, ``MSG_UPDATED`` or ``MSG_KEPT``. Store
    errors (e.g. an unknown ``user_id`` violating the foreign key) propagate.
    """
    try:
        return await _save_once(db, user_id, level_number, stars)
    except IntegrityError:
        await db.rollback()
        # Lost the insert race to a concurrent first save: retry as an update.
        if await get_level_progress(db, user_id, level_number) is None:
            raise
        return await _save_once(db, user_id, level_number, stars)
