import pytest
from pydantic import ValidationError

from blogapi.models.user import UserStatus
from blogapi.schemas.user import UserCreate, attempted_user, field_errors

VALID = {"first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com", "password": "secret123"}


@pytest.mark.parametrize("email", [
    "ada@example.com",
    "ada.lovelace@example.co.uk",
    "ada-l@mail.example.org",
    "a_b@example.io",
])
def test_valid_emails(email):
    assert UserCreate(**{**VALID, "email": email}).email == email


@pytest.mark.parametrize("email", [
    "ada",
    "ada@",
    "@example.com",
    "ada@example",
    "ada@example.comm",
    "ada..l@example.com",
    "ada@exa mple.com",
    "josé@example.com",
    "ada@exämple.com",
    "ada@example.сom",
])
def test_invalid_emails(email):
    with pytest.raises(ValidationError):
        UserCreate(**{**VALID, "email": email})


def test_email_is_lowercased():
    assert UserCreate(**{**VALID, "email": "Ada@Example.COM"}).email == "ada@example.com"


def test_status_defaults_to_guest():
    assert UserCreate(**VALID).status is UserStatus.GUEST


def test_password_longer_than_bcrypt_limit():
    with pytest.raises(ValidationError) as info:
        UserCreate(**{**VALID, "password": "x" * 73})
    errors = field_errors(info.value, {})
    assert errors[0]["path"] == "password"
    assert errors[0]["msg"] == "Password must be at most 72 bytes"
    assert errors[0]["value"] is None


def test_field_errors_use_required_messages():
    values = {"first_name": "", "email": "ada@example.com", "password": "pw"}
    with pytest.raises(ValidationError) as info:
        UserCreate(**values)
    errors = field_errors(info.value, values)
    assert [(e["path"], e["msg"], e["value"]) for e in errors] == [
        ("first_name", "First name is required.", ""),
        ("last_name", "Last name is required.", None),
    ]


def test_attempted_user_hides_password():
    record = attempted_user({**VALID, "status": UserStatus.MEMBER}, "abc")
    assert "password" not in record
    assert record["status"] == "member"
    assert record["id"] == "abc"
    assert record["username"] == "ada@example.com"
