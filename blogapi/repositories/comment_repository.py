from typing import List
from sqlalchemy import select

from blogapi.models.comment import Comment
from blogapi.repositories.base_repository import SQLRepository

class CommentRepository(SQLRepository[Comment]):
    model = Comment

    async def ids_for_user(self, user_id: str) -> List[str]:
        async with self.session_factory() as db:
            result = await db.execute(
                select(Comment.id).where(Comment.user_id == user_id).order_by(Comment.created_at.asc())
            )
            return list(result.scalars().all())
