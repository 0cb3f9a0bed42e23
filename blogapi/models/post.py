from sqlalchemy import Column, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel

class Post(BaseModel):
    __tablename__ = "posts"

    user_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    text = Column(Text, nullable=False)

    author = relationship("User", back_populates="posts")
    comments = relationship("Comment", back_populates="post")
