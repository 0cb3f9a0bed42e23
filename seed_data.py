#!/usr/bin/env python3

import asyncio
import sys
import os

sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from blogapi.auth import hash_password
from blogapi.database import create_tables, AsyncSessionLocal
from blogapi.models.user import UserStatus
from blogapi.repositories.user_repository import UserRepository
from blogapi.repositories.post_repository import PostRepository
from blogapi.repositories.comment_repository import CommentRepository
from blogapi.repositories.message_repository import MessageRepository
from blogapi.schemas.message import MessageCreate
from blogapi.schemas.post import PostCreate, CommentCreate

DEMO_PASSWORD = "password123"

async def create_demo_users():
    user_repo = UserRepository(AsyncSessionLocal)

    users_data = [
        {"first_name": "Alice", "last_name": "Archer", "email": "alice@example.com", "status": UserStatus.ADMIN},
        {"first_name": "Bob", "last_name": "Baker", "email": "bob@example.com", "status": UserStatus.MEMBER},
        {"first_name": "Charlie", "last_name": "Cole", "email": "charlie@example.com", "status": UserStatus.MEMBER},
        {"first_name": "Diana", "last_name": "Dunn", "email": "diana@example.com", "status": UserStatus.GUEST},
    ]

    users = []
    for user_data in users_data:
        existing_user = await user_repo.find_by_email(user_data["email"])
        if existing_user:
            users.append(existing_user)
            print(f"User {existing_user.email} exists (ID: {existing_user.id})")
            continue

        user = await user_repo.create({**user_data, "password": await hash_password(DEMO_PASSWORD)})
        users.append(user)
        print(f"Created user: {user.email} (ID: {user.id})")

    return users

async def create_demo_content(users):
    post_repo = PostRepository(AsyncSessionLocal)
    comment_repo = CommentRepository(AsyncSessionLocal)
    message_repo = MessageRepository(AsyncSessionLocal)

    alice, bob, charlie = users[0], users[1], users[2]

    post_data = PostCreate(user_id=alice.id, title="Hello, world", text="First post on the new blog.")
    post = await post_repo.create(post_data.model_dump())
    print(f"Created post '{post.title}' by {alice.email} (ID: {post.id})")

    for author, text in [(bob, "Congrats on the launch!"), (charlie, "Looking forward to more.")]:
        comment_data = CommentCreate(user_id=author.id, post_id=post.id, text=text)
        comment = await comment_repo.create(comment_data.model_dump())
        print(f"Created comment by {author.email} (ID: {comment.id})")

    message_data = MessageCreate(title="Meetup", text="Anyone up for coffee on Friday?")
    message = await message_repo.create({"user_id": bob.id, **message_data.model_dump()})
    print(f"Created message '{message.title}' by {bob.email} (ID: {message.id})")

async def main():
    print("Creating demo data...\n")

    try:
        await create_tables()
        users = await create_demo_users()
        await create_demo_content(users)

        print("\nDemo data created. Every demo user logs in with password: " + DEMO_PASSWORD)
        print("Diana has no posts or comments, so she is the one DELETE /users/{id} will remove.")

    except Exception as e:
        print(f"Error creating demo data: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)

if __name__ == "__main__":
    asyncio.run(main())
