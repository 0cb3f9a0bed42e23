"""Server-side sessions keyed by an opaque token held in a cookie."""
import logging
import secrets
import time
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

from blogapi.config import settings

logger = logging.getLogger(__name__)

KEY_PREFIX = "session:"


def new_token() -> str:
    return secrets.token_urlsafe(32)


class SessionStore(ABC):
    @abstractmethod
    async def create(self, user_id: str) -> str:
        """Start a session for ``user_id`` and return its token."""

    @abstractmethod
    async def get(self, token: str) -> Optional[str]:
        """User id bound to ``token``, or ``None`` if unknown or expired."""

    @abstractmethod
    async def destroy(self, token: str) -> None:
        ...


class MemorySessionStore(SessionStore):
    """Sessions held in this process only."""

    def __init__(self, ttl_seconds: int = settings.SESSION_TTL_SECONDS, clock=time.monotonic):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._sessions: Dict[str, Tuple[str, float]] = {}

    async def create(self, user_id: str) -> str:
        token = new_token()
        self._sessions[token] = (user_id, self.clock() + self.ttl_seconds)
        return token

    async def get(self, token: str) -> Optional[str]:
        entry = self._sessions.get(token)
        if entry is None:
            return None
        user_id, expires_at = entry
        if self.clock() >= expires_at:
            del self._sessions[token]
            return None
        return user_id

    async def destroy(self, token: str) -> None:
        self._sessions.pop(token, None)

    def __len__(self) -> int:
        return len(self._sessions)


class RedisSessionStore(SessionStore):
    """Sessions shared between processes through Redis; expiry is left to Redis."""

    def __init__(self, client, ttl_seconds: int = settings.SESSION_TTL_SECONDS):
        self.client = client
        self.ttl_seconds = ttl_seconds

    async def create(self, user_id: str) -> str:
        token = new_token()
        await self.client.setex(KEY_PREFIX + token, self.ttl_seconds, user_id)
        return token

    async def get(self, token: str) -> Optional[str]:
        return await self.client.get(KEY_PREFIX + token)

    async def destroy(self, token: str) -> None:
        await self.client.delete(KEY_PREFIX + token)


def build_session_store(backend: str = settings.SESSION_BACKEND) -> SessionStore:
    logger.info("Using %s session store", backend)
    if backend == "memory":
        return MemorySessionStore()
    if backend == "redis":
        from blogapi.database import get_redis
        return RedisSessionStore(get_redis())
    raise ValueError(f"Unknown session backend: {backend!r}")
