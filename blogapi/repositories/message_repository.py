from typing import List
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from blogapi.models.message import Message
from blogapi.repositories.base_repository import SQLRepository

class MessageRepository(SQLRepository[Message]):
    model = Message

    async def list_recent(self, limit: int = 100) -> List[Message]:
        """Newest messages first, with their authors loaded"""
        async with self.session_factory() as db:
            result = await db.execute(
                select(Message).options(
                    selectinload(Message.author)
                ).order_by(Message.created_at.desc())
                .limit(limit)
            )
            return list(result.scalars().all())
