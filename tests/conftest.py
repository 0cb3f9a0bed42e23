import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SESSION_BACKEND", "memory")

import asyncio
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from blogapi.dependencies import (
    get_comment_repository,
    get_message_repository,
    get_post_repository,
    get_session_store,
    get_user_repository,
)
from blogapi.main import create_app
from blogapi.sessions import MemorySessionStore

from tests.fakes import (
    FakeCommentRepository,
    FakeMessageRepository,
    FakePostRepository,
    FakeUserRepository,
)


@pytest.fixture
def repos():
    users = FakeUserRepository()
    return SimpleNamespace(
        users=users,
        posts=FakePostRepository(),
        comments=FakeCommentRepository(),
        messages=FakeMessageRepository(users),
    )


@pytest.fixture
def sessions():
    return MemorySessionStore()


@pytest.fixture
def client(repos, sessions):
    # No context manager: the lifespan hook would try to create real tables
    app = create_app()
    app.dependency_overrides[get_user_repository] = lambda: repos.users
    app.dependency_overrides[get_post_repository] = lambda: repos.posts
    app.dependency_overrides[get_comment_repository] = lambda: repos.comments
    app.dependency_overrides[get_message_repository] = lambda: repos.messages
    app.dependency_overrides[get_session_store] = lambda: sessions
    return TestClient(app)


@pytest.fixture
def make_user(repos):
    def make(**overrides):
        values = {
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada@example.com",
            "password": "not-a-real-hash",
        }
        values.update(overrides)
        return asyncio.run(repos.users.create(values))
    return make
