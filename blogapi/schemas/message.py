from pydantic import BaseModel, Field, field_validator
from datetime import datetime

from blogapi.sanitize import clean

class MessageBase(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    text: str = Field(..., min_length=3)

class MessageCreate(MessageBase):
    @field_validator("title", "text", mode="before")
    @classmethod
    def sanitize(cls, value):
        return clean(value)

class MessageResponse(MessageBase):
    id: str
    user_id: str
    username: str
    created_at: datetime

    class Config:
        from_attributes = True
