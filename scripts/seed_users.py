#!/usr/bin/env python3
"""Reset the users table and create the demo accounts.

Usage:
    uv run python scripts/seed_users.py
"""

import asyncio

from authflow.config import Settings
from authflow.infrastructure.database import Database
from authflow.modules.auth import UserRepository, hash_password

DEMO_USERS = [
    ("test@example.com", "Password123!"),
    ("user@demo.com", "DemoPass123!"),
    ("admin@test.com", "AdminPass123!"),
]


async def seed() -> None:
    settings = Settings()
    db = Database(settings.database_path)
    await db.connect()

    try:
        repo = UserRepository(db)
        print("Seeding database with test users...")
        await repo.delete_all()

        users = [
            await repo.create(email, hash_password(password, settings.bcrypt_rounds))
            for email, password in DEMO_USERS
        ]

        print(f"Created {len(users)} test users:")
        for index, user in enumerate(users, start=1):
            print(f"{index}. {user.email} (ID: {user.id})")
    finally:
        await db.disconnect()


if __name__ == "__main__":
    asyncio.run(seed())
