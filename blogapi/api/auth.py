import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

from blogapi.auth import AuthenticationError, authenticate_user, hash_password
from blogapi.config import settings
from blogapi.dependencies import get_current_user, get_session_store, get_user_repository, session_token
from blogapi.models.user import User
from blogapi.pages import home_page, log_in_page, sign_up_page
from blogapi.repositories.user_repository import UserRepository
from blogapi.sanitize import clean
from blogapi.schemas.user import UserCreate, UserResponse, field_errors
from blogapi.sessions import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter()


def redirect_home() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/")
async def home(current_user: Optional[User] = Depends(get_current_user)):
    return home_page(current_user)


@router.get("/log-in")
async def log_in_form(current_user: Optional[User] = Depends(get_current_user)):
    return log_in_page(current_user)


@router.get("/sign-up")
async def sign_up_form(current_user: Optional[User] = Depends(get_current_user)):
    return sign_up_page(current_user)


@router.post("/sign-up")
async def sign_up(
    first_name: str = Form(""),
    last_name: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    users: UserRepository = Depends(get_user_repository),
):
    submitted = {"first_name": first_name, "last_name": last_name, "email": email}
    values = {field: clean(value) for field, value in submitted.items()}
    values["password"] = password

    try:
        user_data = UserCreate(**values)
    except ValidationError as exc:
        errors = [error["msg"] for error in field_errors(exc, values)]
        return sign_up_page(None, errors, submitted, status.HTTP_422_UNPROCESSABLE_ENTITY)

    if await users.find_by_email(user_data.email) is not None:
        return sign_up_page(
            None, ["Email is already registered."], submitted, status.HTTP_422_UNPROCESSABLE_ENTITY
        )

    record = user_data.model_dump()
    record["password"] = await hash_password(user_data.password)
    user = await users.create(record)
    logger.info("Signed up user %s", user.id)
    return redirect_home()


@router.post("/log-in")
async def log_in(
    username: str = Form(""),
    password: str = Form(""),
    token: Optional[str] = Depends(session_token),
    users: UserRepository = Depends(get_user_repository),
    sessions: SessionStore = Depends(get_session_store),
):
    response = redirect_home()

    try:
        user = await authenticate_user(users, username, password)
    except AuthenticationError as exc:
        logger.info("Failed log in for %r: %s", username, exc)
        return response

    if token:
        await sessions.destroy(token)
    new_token = await sessions.create(user.id)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=new_token,
        max_age=settings.SESSION_TTL_SECONDS,
        httponly=True,
        secure=settings.SECURE_COOKIES,
        samesite="lax",
    )
    logger.info("User %s logged in", user.id)
    return response


@router.get("/log-out")
async def log_out(
    token: Optional[str] = Depends(session_token),
    sessions: SessionStore = Depends(get_session_store),
):
    if token:
        user_id = await sessions.get(token)
        await sessions.destroy(token)
        logger.info("User %s logged out", user_id)
    response = redirect_home()
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response


@router.get("/me")
async def who_am_i(current_user: Optional[User] = Depends(get_current_user)):
    return {
        "authenticated": current_user is not None,
        "user": UserResponse.model_validate(current_user) if current_user is not None else None,
    }
