from typing import List
from sqlalchemy import select

from blogapi.models.post import Post
from blogapi.repositories.base_repository import SQLRepository

class PostRepository(SQLRepository[Post]):
    model = Post

    async def ids_for_user(self, user_id: str) -> List[str]:
        async with self.session_factory() as db:
            result = await db.execute(
                select(Post.id).where(Post.user_id == user_id).order_by(Post.created_at.asc())
            )
            return list(result.scalars().all())
