import logging

import bcrypt
from fastapi.concurrency import run_in_threadpool

from blogapi.config import settings
from blogapi.models.user import User

logger = logging.getLogger(__name__)

MAX_PASSWORD_BYTES = 72


class AuthenticationError(Exception):
    """Credentials were rejected. The message says why, for the logs only."""


def get_password_hash(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


async def hash_password(password: str) -> str:
    # bcrypt is deliberately slow; keep it off the event loop
    return await run_in_threadpool(get_password_hash, password)


async def authenticate_user(users, username: str, password: str) -> User:
    """Return the user owning ``username`` (an email) if ``password`` matches.

    Raises ``AuthenticationError`` with "Incorrect username" or
    "Incorrect password". Any other error is left to propagate.
    """
    user = await users.find_by_email(username.strip())
    if user is None:
        raise AuthenticationError("Incorrect username")

    # Sign-up never stores a password this long
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise AuthenticationError("Incorrect password")

    if not await run_in_threadpool(verify_password, password, user.password):
        raise AuthenticationError("Incorrect password")

    return user
