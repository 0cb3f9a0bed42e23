from .base import Base
from .user import User, UserStatus
from .post import Post
from .comment import Comment
from .message import Message

__all__ = [
    "Base",
    "User",
    "UserStatus",
    "Post",
    "Comment",
    "Message"
]
