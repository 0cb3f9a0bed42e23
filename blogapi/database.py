import logging

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from blogapi.config import settings
import redis.asyncio as redis

logger = logging.getLogger(__name__)

async_engine = create_async_engine(settings.DATABASE_URL, echo=settings.DEBUG)
AsyncSessionLocal = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

def get_redis():
    return redis.from_url(settings.REDIS_URL, decode_responses=True)

async def create_tables(engine=async_engine):
    from blogapi.models.base import Base
    from blogapi.models import user, post, comment, message

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ready")
