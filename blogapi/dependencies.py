"""FastAPI dependency providers.

Tests swap these out through ``app.dependency_overrides``.
"""
import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from blogapi.config import settings
from blogapi.database import AsyncSessionLocal
from blogapi.models.base import is_valid_id
from blogapi.models.user import User
from blogapi.repositories.comment_repository import CommentRepository
from blogapi.repositories.message_repository import MessageRepository
from blogapi.repositories.post_repository import PostRepository
from blogapi.repositories.user_repository import UserRepository
from blogapi.sessions import SessionStore, build_session_store

logger = logging.getLogger(__name__)


def get_user_repository() -> UserRepository:
    return UserRepository(AsyncSessionLocal)


def get_post_repository() -> PostRepository:
    return PostRepository(AsyncSessionLocal)


def get_comment_repository() -> CommentRepository:
    return CommentRepository(AsyncSessionLocal)


def get_message_repository() -> MessageRepository:
    return MessageRepository(AsyncSessionLocal)


@lru_cache()
def get_session_store() -> SessionStore:
    return build_session_store()


def valid_user_id(user_id: str) -> str:
    """Reject path identifiers that could never have been issued."""
    if not is_valid_id(user_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid ID")
    return user_id


def session_token(request: Request) -> Optional[str]:
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


async def get_current_user(
    token: Optional[str] = Depends(session_token),
    sessions: SessionStore = Depends(get_session_store),
    users: UserRepository = Depends(get_user_repository),
) -> Optional[User]:
    """Reload the user bound to the caller's session, if any."""
    if not token:
        return None

    user_id = await sessions.get(token)
    if user_id is None:
        return None

    user = await users.find_by_id(user_id)
    if user is None:
        logger.info("Dropping session of deleted user %s", user_id)
        await sessions.destroy(token)
    return user


async def require_user(current_user: Optional[User] = Depends(get_current_user)) -> User:
    if current_user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return current_user
