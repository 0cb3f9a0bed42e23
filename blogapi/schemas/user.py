import re
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from blogapi.models.user import UserStatus

EMAIL_PATTERN = re.compile(r"^\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*\.\w{2,3}$", re.ASCII)

# Shown instead of pydantic's generic message when a field is missing or empty.
REQUIRED_MESSAGES = {
    "first_name": "First name is required.",
    "last_name": "Last name is required.",
    "email": "Email is required.",
    "password": "Password is required.",
}

class UserBase(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=1, max_length=255)
    status: UserStatus = UserStatus.GUEST

    @field_validator("email")
    @classmethod
    def email_shape(cls, value: str) -> str:
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Please fill a valid email address")
        return value.lower()

class UserCreate(UserBase):
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        # bcrypt only looks at the first 72 bytes
        if len(value.encode("utf-8")) > 72:
            raise ValueError("Password must be at most 72 bytes")
        return value

class UserReplace(UserBase):
    """Full set of editable fields, used to re-validate a merged update."""

class UserResponse(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str
    username: str
    status: UserStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class UserDetailResponse(UserResponse):
    posts_id: List[str] = Field(default_factory=list, alias="postsId")
    comments_id: List[str] = Field(default_factory=list, alias="commentsId")

    class Config:
        from_attributes = True
        populate_by_name = True


def field_error(path: str, msg: str, value: Any = None) -> Dict[str, Any]:
    return {"type": "field", "location": "body", "path": path, "msg": msg, "value": value}


def field_errors(exc: ValidationError, values: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Flatten a pydantic ``ValidationError`` into one entry per failing field."""
    errors = []
    for error in exc.errors():
        path = ".".join(str(part) for part in error["loc"])
        if error["type"] in ("missing", "string_too_short") and path in REQUIRED_MESSAGES:
            msg = REQUIRED_MESSAGES[path]
        elif error["type"] == "value_error":
            msg = str(error["ctx"]["error"])
        else:
            msg = error["msg"]
        value = None if path == "password" else values.get(path)
        errors.append(field_error(path, msg, value))
    return errors


def attempted_user(values: Dict[str, Any], user_id: Optional[str] = None) -> Dict[str, Any]:
    """The record a request tried to save, without the password."""
    record = {key: value for key, value in values.items() if key != "password"}
    if isinstance(record.get("status"), UserStatus):
        record["status"] = record["status"].value
    if user_id is not None:
        record["id"] = user_id
    if "email" in record:
        record["username"] = record["email"]
    return record

class UserUpdateResult(BaseModel):
    updated_user: Optional[UserResponse] = Field(None, alias="updatedUser")
    updated: bool

    class Config:
        populate_by_name = True

class UserDeleteResult(BaseModel):
    user: Optional[UserResponse] = None
    deleted: bool
