#!/usr/bin/env python3
"""
Create an admin account for the store console.

Uses the same DB setup as db.py (DB_URL from .env).

Usage:
    python tools/create_admin.py admin@lisaperfume.com --name "Store Admin"
    (the password is prompted for, or read from ADMIN_PASSWORD)
"""

import argparse
import asyncio
import getpass
import os
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
os.chdir(project_root)

from db import create_db_and_tables, get_db_session
from enums.user_role import UserRole
from exceptions import UserAlreadyExistsException
from services.auth import AuthService


async def create_admin(email: str, password: str, name: str | None) -> int:
    await create_db_and_tables()
    async with get_db_session() as session:
        try:
            user = await AuthService.create_user(email, password, session, name=name, role=UserRole.ADMIN)
        except UserAlreadyExistsException as e:
            print(f"❌ {e}")
            return 1
    print(f"✅ Admin {user.email} created (id {user.id})")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Create an admin account for the store console")
    parser.add_argument("email")
    parser.add_argument("--name", default=None)
    args = parser.parse_args()

    password = os.environ.get("ADMIN_PASSWORD") or getpass.getpass("Password: ")
    if len(password) < 8:
        print("❌ Password must be at least 8 characters")
        return 1
    return asyncio.run(create_admin(args.email, password, args.name))


if __name__ == "__main__":
    sys.exit(main())
