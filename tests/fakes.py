"""In-memory stand-ins for the SQL repositories."""
from typing import Any, Dict, List, Optional, Sequence

from blogapi.models.base import utcnow
from blogapi.models.comment import Comment
from blogapi.models.message import Message
from blogapi.models.post import Post
from blogapi.models.user import User


class InMemoryRepository:
    model = None

    def __init__(self):
        self.records: Dict[str, Any] = {}

    def _apply_defaults(self, record) -> None:
        for column in self.model.__table__.columns:
            if getattr(record, column.key) is None and column.default is not None:
                default = column.default
                value = default.arg(None) if default.is_callable else default.arg
                setattr(record, column.key, value)

    async def find_by_id(self, record_id: str):
        return self.records.get(record_id)

    async def find(self, order_by: Sequence[str] = (), **filters: Any) -> List[Any]:
        found = [
            record for record in self.records.values()
            if all(getattr(record, key) == value for key, value in filters.items())
        ]
        for name in reversed(order_by):
            key = name.lstrip("-")
            found.sort(key=lambda record: getattr(record, key), reverse=name.startswith("-"))
        return found

    async def create(self, values: Dict[str, Any]):
        record = self.model(**values)
        self._apply_defaults(record)
        self.records[record.id] = record
        return record

    async def update(self, record_id: str, values: Dict[str, Any]):
        record = self.records.get(record_id)
        if record is None:
            return None
        for key, value in values.items():
            setattr(record, key, value)
        record.updated_at = utcnow()
        return record

    async def delete(self, record_id: str):
        return self.records.pop(record_id, None)

    def __len__(self) -> int:
        return len(self.records)


class FakeUserRepository(InMemoryRepository):
    model = User

    def __init__(self):
        super().__init__()
        self.messages = None

    async def delete(self, record_id: str):
        user = await super().delete(record_id)
        if user is not None and self.messages is not None:
            for message in await self.messages.find(user_id=record_id):
                await self.messages.delete(message.id)
        return user

    async def find_by_email(self, email: str) -> Optional[User]:
        email = email.lower()
        return next((user for user in self.records.values() if user.email == email), None)

    async def list_by_name(self) -> List[User]:
        return await self.find(order_by=("last_name", "first_name"))


class FakePostRepository(InMemoryRepository):
    model = Post

    async def ids_for_user(self, user_id: str) -> List[str]:
        return [post.id for post in await self.find(user_id=user_id)]


class FakeCommentRepository(InMemoryRepository):
    model = Comment

    async def ids_for_user(self, user_id: str) -> List[str]:
        return [comment.id for comment in await self.find(user_id=user_id)]


class FakeMessageRepository(InMemoryRepository):
    model = Message

    def __init__(self, users: FakeUserRepository):
        super().__init__()
        self.users = users
        users.messages = self

    async def create(self, values: Dict[str, Any]):
        message = await super().create(values)
        message.author = self.users.records.get(message.user_id)
        return message

    async def list_recent(self, limit: int = 100) -> List[Message]:
        return (await self.find(order_by=("-created_at",)))[:limit]
