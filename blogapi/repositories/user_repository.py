from typing import Optional, List
from sqlalchemy import select, delete

from blogapi.models.message import Message
from blogapi.models.user import User
from blogapi.repositories.base_repository import SQLRepository

class UserRepository(SQLRepository[User]):
    model = User

    async def find_by_email(self, email: str) -> Optional[User]:
        async with self.session_factory() as db:
            result = await db.execute(select(User).where(User.email == email.lower()))
            return result.scalar_one_or_none()

    async def list_by_name(self) -> List[User]:
        return await self.find(order_by=("last_name", "first_name"))

    async def delete(self, record_id: str) -> Optional[User]:
        """Remove a user together with their messages, in one transaction.

        Posts and comments are not touched; callers refuse the delete while any exist.
        """
        async with self.session_factory() as db:
            await db.execute(
                delete(Message)
                .where(Message.user_id == record_id)
                .execution_options(synchronize_session=False)
            )
            result = await db.execute(
                delete(User)
                .where(User.id == record_id)
                .returning(User)
                .execution_options(synchronize_session=False)
            )
            user = result.scalar_one_or_none()
            await db.commit()
        return user
