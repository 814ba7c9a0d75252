#!/usr/bin/env python3
"""CLI script to create a user account.

Usage:
    uv run python scripts/create_user.py user@example.com 'Password123!'
"""

import argparse
import asyncio
import sys

from authflow.config import ConfigurationError, Settings
from authflow.infrastructure.database import Database
from authflow.modules.auth import AuthError, UserRepository
from authflow.modules.auth.service import build_auth_service


async def create_user(email: str, password: str) -> None:
    """Register a user through the credential service.

    Args:
        email: User's email address.
        password: User's password (will be hashed).
    """
    settings = Settings()
    db = Database(settings.database_path)
    await db.connect()

    try:
        auth_service = build_auth_service(UserRepository(db), settings)
        result = await auth_service.register_account(email, password, password)

        print(f"✓ Created user: {result.user.email}")
        print(f"  User ID: {result.user.id}")

    except (AuthError, ConfigurationError) as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        await db.disconnect()


def main() -> None:
    """Parse arguments and create user."""
    parser = argparse.ArgumentParser(
        description="Create a user account",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  uv run python scripts/create_user.py user@example.com 'Password123!'
  DATABASE_PATH=./data/dev.db uv run python scripts/create_user.py a@b.co 'Secret99!'
        """,
    )

    parser.add_argument("email", help="User's email address")
    parser.add_argument("password", help="User's password (min 8 characters)")

    args = parser.parse_args()
    asyncio.run(create_user(args.email, args.password))


if __name__ == "__main__":
    main()
