"""Auth routes: register and login. JSON in, public user fields out."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from game_api.core.errors import AuthError, ConflictError, ServerError, ValidationError
from game_api.core.security import dummy_verify, hash_password, verify_password
from game_api.db.session import get_db
from game_api.models.user import User
from game_api.schemas.user import LoginSchema, RegisterSchema, UserOutSchema

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)

# Same text for unknown user and wrong password
INVALID_CREDENTIALS = "Invalid username or password"


async def _taken(db: AsyncSession, column, value: str) -> bool:
    result = await db.execute(select(User.id).where(column == value))
    return result.first() is not None


@router.post("/register", response_model=UserOutSchema)
async def register(
    db: Annotated[AsyncSession, Depends(get_db)],
    body: RegisterSchema | None = None,
):
    """Create a player account; username is checked before email."""
    body = body or RegisterSchema()
    if not body.username or not body.password or not body.email:
        raise ValidationError("Please fill all fields")

    try:
        hashed = await run_in_threadpool(hash_password, body.password)
        if await _taken(db, User.username, body.username):
            raise ConflictError("Username already exists")
        if await _taken(db, User.email, body.email):
            raise ConflictError("Email already registered")
    except (SQLAlchemyError, ValueError) as exc:
        raise ServerError("Server error. Please try again later.") from exc

    user = User(username=body.username, password=hashed, email=body.email)
    db.add(user)
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        raise ServerError("Registration failed. Please try again later.") from exc

    logger.info("Registered user %s (id=%s)", user.username, user.id)
    return UserOutSchema(id=user.id, username=user.username, email=user.email)


@router.post("/login", response_model=UserOutSchema)
async def login(
    db: Annotated[AsyncSession, Depends(get_db)],
    body: LoginSchema | None = None,
):
    """Check username and password; answers the same way for either bad factor."""
    body = body or LoginSchema()
    if not body.username or not body.password:
        raise ValidationError("Please enter username and password")

    try:
        result = await db.execute(select(User).where(User.username == body.username))
        user = result.scalar_one_or_none()
        if user is None:
            await run_in_threadpool(dummy_verify)
            matched = False
        else:
            matched = await run_in_threadpool(verify_password, body.password, user.password)
    except (SQLAlchemyError, ValueError) as exc:
        raise ServerError("Server error. Please try again.") from exc

    if not matched:
        logger.warning("Failed login for username %r", body.username)
        raise AuthError(INVALID_CREDENTIALS)

    return UserOutSchema(id=user.id, username=user.username, email=user.email)
