import asyncio
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from blogapi.auth import hash_password
from blogapi.dependencies import (
    get_comment_repository,
    get_post_repository,
    get_user_repository,
    valid_user_id,
)
from blogapi.repositories.comment_repository import CommentRepository
from blogapi.repositories.post_repository import PostRepository
from blogapi.repositories.user_repository import UserRepository
from blogapi.sanitize import clean_fields
from blogapi.schemas.user import (
    UserCreate,
    UserDeleteResult,
    UserDetailResponse,
    UserReplace,
    UserResponse,
    UserUpdateResult,
    attempted_user,
    field_error,
    field_errors,
)

logger = logging.getLogger(__name__)

router = APIRouter()

EDITABLE_FIELDS = ("first_name", "last_name", "email", "status")

EMAIL_TAKEN = "Email is already registered."

DEPENDENTS_ERRORS = {
    (True, True): "All posts and comments associated with user must be deleted prior to deleting user.",
    (True, False): "All posts associated with user must be deleted prior to deleting user.",
    (False, True): "All comments associated with user must be deleted prior to deleting user.",
}


def invalid_user(values: Dict[str, Any], errors: List[dict], user_id: Optional[str] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder({"user": attempted_user(values, user_id), "errors": errors}),
    )


def user_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")


@router.get("", response_model=List[UserResponse])
async def list_users(users: UserRepository = Depends(get_user_repository)):
    return await users.list_by_name()


@router.get("/{user_id}", response_model=UserDetailResponse)
async def get_user(
    user_id: str = Depends(valid_user_id),
    users: UserRepository = Depends(get_user_repository),
    posts: PostRepository = Depends(get_post_repository),
    comments: CommentRepository = Depends(get_comment_repository),
):
    user, post_ids, comment_ids = await asyncio.gather(
        users.find_by_id(user_id),
        posts.ids_for_user(user_id),
        comments.ids_for_user(user_id),
    )
    if user is None:
        raise user_not_found()

    return UserDetailResponse(
        **UserResponse.model_validate(user).model_dump(),
        posts_id=post_ids,
        comments_id=comment_ids,
    )


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: Dict[str, Any] = Body(default={}),
    users: UserRepository = Depends(get_user_repository),
):
    values = clean_fields(payload, EDITABLE_FIELDS)
    if "password" in payload:
        values["password"] = payload["password"]

    try:
        user_data = UserCreate(**values)
    except ValidationError as exc:
        return invalid_user(values, field_errors(exc, values))

    if await users.find_by_email(user_data.email) is not None:
        return invalid_user(values, [field_error("email", EMAIL_TAKEN, user_data.email)])

    record = user_data.model_dump()
    record["password"] = await hash_password(user_data.password)
    user = await users.create(record)
    logger.info("Created user %s", user.id)
    return user


@router.patch("/{user_id}", response_model=UserUpdateResult)
async def update_user(
    payload: Dict[str, Any] = Body(default={}),
    user_id: str = Depends(valid_user_id),
    users: UserRepository = Depends(get_user_repository),
):
    original = await users.find_by_id(user_id)
    if original is None:
        raise user_not_found()

    # Missing or blank fields keep the stored value
    changes = clean_fields(payload, EDITABLE_FIELDS)
    merged = {field: changes.get(field) or getattr(original, field) for field in EDITABLE_FIELDS}

    try:
        replacement = UserReplace(**merged)
    except ValidationError as exc:
        return invalid_user(merged, field_errors(exc, merged), user_id)

    if replacement.email != original.email:
        owner = await users.find_by_email(replacement.email)
        if owner is not None and owner.id != user_id:
            return invalid_user(merged, [field_error("email", EMAIL_TAKEN, replacement.email)], user_id)

    updated = await users.update(user_id, replacement.model_dump())
    if updated is not None:
        logger.info("Updated user %s", user_id)

    return UserUpdateResult(
        updated_user=UserResponse.model_validate(updated) if updated is not None else None,
        updated=updated is not None,
    )


@router.delete("/{user_id}", response_model=UserDeleteResult)
async def delete_user(
    user_id: str = Depends(valid_user_id),
    users: UserRepository = Depends(get_user_repository),
    posts: PostRepository = Depends(get_post_repository),
    comments: CommentRepository = Depends(get_comment_repository),
):
    user, user_posts, user_comments = await asyncio.gather(
        users.find_by_id(user_id),
        posts.find(user_id=user_id),
        comments.find(user_id=user_id),
    )
    if user is None:
        raise user_not_found()

    if user_posts or user_comments:
        body = {"user": UserResponse.model_validate(user)}
        if user_posts:
            body["postsId"] = [post.id for post in user_posts]
        if user_comments:
            body["commentsId"] = [comment.id for comment in user_comments]
        body["error"] = DEPENDENTS_ERRORS[(bool(user_posts), bool(user_comments))]
        logger.info(
            "Refused to delete user %s: %d posts, %d comments",
            user_id, len(user_posts), len(user_comments),
        )
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=jsonable_encoder(body))

    deleted = await users.delete(user_id)
    if deleted is not None:
        logger.info("Deleted user %s", user_id)

    return UserDeleteResult(
        user=UserResponse.model_validate(deleted) if deleted is not None else None,
        deleted=deleted is not None,
    )
