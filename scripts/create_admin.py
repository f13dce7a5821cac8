"""Create an admin account, or reset its password if it already exists.

Usage: python scripts/create_admin.py <username> [--password PASSWORD]
"""

import argparse
import asyncio
import getpass
import sys

from sqlalchemy import select

sys.path.insert(0, ".")

from psisite.db import get_db_context, init_db
from psisite.models import AdminUser
from psisite.services.password import hash_password, validate_password
from psisite.settings import settings


async def create_admin(username: str, password: str) -> None:
    await init_db()

    async with get_db_context() as session:
        result = await session.execute(select(AdminUser).where(AdminUser.username == username))
        admin = result.scalar_one_or_none()
        if admin:
            admin.hashed_password = hash_password(password)
            admin.clear_session()
            print(f"Password updated for {username}")
        else:
            session.add(AdminUser(username=username, hashed_password=hash_password(password)))
            print(f"Admin {username} created")


def main() -> int:
    parser = argparse.ArgumentParser(description="Create or update a site admin")
    parser.add_argument("username")
    parser.add_argument("--password", help="prompted for when omitted")
    args = parser.parse_args()

    password = args.password or getpass.getpass("Senha: ")
    error = validate_password(password, settings.password_min_length)
    if error:
        print(error, file=sys.stderr)
        return 1

    asyncio.run(create_admin(args.username.strip(), password))
    return 0


if __name__ == "__main__":
    sys.exit(main())
