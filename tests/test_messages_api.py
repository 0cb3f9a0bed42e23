import asyncio
from datetime import datetime


def log_in_as(client, repos, make_user):
    from blogapi.auth import get_password_hash

    user = make_user(password=get_password_hash("secret123"))
    res = client.post(
        "/log-in",
        data={"username": user.email, "password": "secret123"},
        follow_redirects=False,
    )
    assert res.status_code == 303
    return user


def test_posting_requires_log_in(client, repos):
    res = client.post("/messages", json={"title": "Hello", "text": "Anyone here?"})
    assert res.status_code == 401
    assert len(repos.messages) == 0


def test_post_message(client, repos, make_user):
    user = log_in_as(client, repos, make_user)

    res = client.post("/messages", json={"title": "  Hello ", "text": "Tea & cake?"})
    assert res.status_code == 201, res.text
    body = res.json()
    assert body["user_id"] == user.id
    assert body["username"] == user.email
    assert body["title"] == "Hello"
    assert body["text"] == "Tea &amp; cake?"
    assert len(repos.messages) == 1


def test_message_fields_need_three_characters(client, repos, make_user):
    log_in_as(client, repos, make_user)

    res = client.post("/messages", json={"title": "Hi", "text": " ok "})
    assert res.status_code == 422
    fields = {error["loc"][-1] for error in res.json()["detail"]}
    assert fields == {"title", "text"}
    assert len(repos.messages) == 0


def test_list_messages_newest_first(client, repos, make_user):
    user = make_user()
    for day, title in [(1, "Oldest"), (3, "Newest"), (2, "Middle")]:
        asyncio.run(repos.messages.create({
            "user_id": user.id,
            "title": title,
            "text": "Body text",
            "created_at": datetime(2024, 1, day),
        }))

    res = client.get("/messages")
    assert res.status_code == 200
    body = res.json()
    assert [m["title"] for m in body] == ["Newest", "Middle", "Oldest"]
    assert all(m["username"] == user.email for m in body)
