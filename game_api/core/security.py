"""Password hashing (bcrypt via passlib)."""
from passlib.context import CryptContext

from game_api.core.config import get_settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=get_settings().bcrypt_rounds,
)


def hash_password(password: str) -> str:
    """Return a salted bcrypt digest; a fresh salt is drawn on every call."""
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Check ``plain`` against ``hashed``.

    A malformed digest raises ``ValueError`` from passlib; callers treat
    that as a server failure, not as a wrong password.
    """
    return pwd_context.verify(plain, hashed)


def dummy_verify() -> None:
    """Spend the time of one verification; used when the username is unknown."""
    pwd_context.dummy_verify()
