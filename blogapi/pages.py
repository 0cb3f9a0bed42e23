"""Bare HTML pages for the browser-facing auth flow."""
from html import escape
from typing import Iterable, Optional

from fastapi.responses import HTMLResponse

from blogapi.config import settings
from blogapi.models.user import User

PAGE = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>{title} | {app_name}</title></head>
<body>
<nav>{nav}</nav>
<h1>{title}</h1>
{content}
</body>
</html>
"""


def nav(current_user: Optional[User]) -> str:
    if current_user is None:
        return '<a href="/">Home</a> <a href="/log-in">Log in</a> <a href="/sign-up">Sign up</a>'
    return '<a href="/">Home</a> <a href="/log-out">Log out</a>'


def page(title: str, content: str, current_user: Optional[User] = None, status_code: int = 200) -> HTMLResponse:
    html = PAGE.format(
        title=escape(title),
        app_name=escape(settings.APP_NAME),
        nav=nav(current_user),
        content=content,
    )
    return HTMLResponse(content=html, status_code=status_code)


def error_list(errors: Iterable[str]) -> str:
    items = "".join(f"<li>{escape(error)}</li>" for error in errors)
    return f'<ul class="errors">{items}</ul>' if items else ""


def home_page(current_user: Optional[User]) -> HTMLResponse:
    if current_user is None:
        content = "<p>You are not logged in.</p>"
    else:
        # Stored names are already escaped on the way in
        content = f"<p>Welcome back, {current_user.first_name} ({current_user.username}).</p>"
    return page("Home", content, current_user)


def log_in_page(current_user: Optional[User]) -> HTMLResponse:
    content = """<form method="post" action="/log-in">
<label>Email <input name="username" type="email" required></label>
<label>Password <input name="password" type="password" required></label>
<button type="submit">Log in</button>
</form>"""
    return page("Log in", content, current_user)


def sign_up_page(
    current_user: Optional[User],
    errors: Iterable[str] = (),
    values: Optional[dict] = None,
    status_code: int = 200,
) -> HTMLResponse:
    values = values or {}

    def field(name: str, label: str, kind: str = "text") -> str:
        value = "" if kind == "password" else escape(str(values.get(name) or ""))
        return f'<label>{label} <input name="{name}" type="{kind}" value="{value}" required></label>'

    content = "\n".join([
        error_list(errors),
        '<form method="post" action="/sign-up">',
        field("first_name", "First name"),
        field("last_name", "Last name"),
        field("email", "Email", "email"),
        field("password", "Password", "password"),
        '<button type="submit">Sign up</button>',
        "</form>",
    ])
    return page("Sign up", content, current_user, status_code)
