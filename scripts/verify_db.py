#!/usr/bin/env python3
"""Check that the database is reachable and show what it holds.

Exit codes:
    0: Connected and queried successfully
    1: Connection or query failed
"""

import asyncio
import sqlite3
import sys

from authflow.config import Settings
from authflow.infrastructure.database import Database
from authflow.modules.auth import UserRepository


async def verify() -> int:
    settings = Settings()
    db = Database(settings.database_path)

    try:
        await db.connect()
        repo = UserRepository(db)
        user = await repo.first()
        total = await repo.count()
    except (sqlite3.Error, OSError) as e:
        print(f"Failed to connect to the database: {e}", file=sys.stderr)
        return 1
    finally:
        await db.disconnect()

    if user is None:
        print(f"Connected to {db.path}; no users yet.")
    else:
        print(f"Connected to {db.path}; first user: {user.email} (ID: {user.id})")
    print(f"Total users: {total}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(verify()))
