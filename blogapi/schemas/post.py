from pydantic import BaseModel, Field, field_validator

from blogapi.models.base import is_valid_id
from blogapi.sanitize import clean

class PostCreate(BaseModel):
    user_id: str
    title: str = Field(..., min_length=3, max_length=200)
    text: str = Field(..., min_length=3)

    @field_validator("title", "text", mode="before")
    @classmethod
    def sanitize(cls, value):
        return clean(value)

    @field_validator("user_id")
    @classmethod
    def well_formed_id(cls, value: str) -> str:
        if not is_valid_id(value):
            raise ValueError("Invalid ID")
        return value

class CommentCreate(BaseModel):
    user_id: str
    post_id: str
    text: str = Field(..., min_length=1)

    @field_validator("text", mode="before")
    @classmethod
    def sanitize(cls, value):
        return clean(value)

    @field_validator("user_id", "post_id")
    @classmethod
    def well_formed_id(cls, value: str) -> str:
        if not is_valid_id(value):
            raise ValueError("Invalid ID")
        return value
