from sqlalchemy import Column, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel

class Comment(BaseModel):
    __tablename__ = "comments"

    user_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    post_id = Column(String(32), ForeignKey("posts.id"), nullable=False, index=True)
    text = Column(Text, nullable=False)

    author = relationship("User", back_populates="comments")
    post = relationship("Post", back_populates="comments")
