from sqlalchemy import Column, String, Enum
from sqlalchemy.orm import relationship
from enum import Enum as PyEnum
from .base import BaseModel

class UserStatus(PyEnum):
    ADMIN = "admin"
    MEMBER = "member"
    GUEST = "guest"

class User(BaseModel):
    __tablename__ = "users"

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt hash
    status = Column(Enum(UserStatus), nullable=False, default=UserStatus.GUEST)

    posts = relationship("Post", back_populates="author")
    comments = relationship("Comment", back_populates="author")
    messages = relationship("Message", back_populates="author", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def username(self) -> str:
        return self.email
