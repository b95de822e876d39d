#!/usr/bin/env python3
"""
Command-line administration for the E-Commerce API.

Creates the database tables and bootstraps admin accounts, since the HTTP API
only ever registers plain ``user`` accounts.
"""

import argparse
import asyncio
import getpass
import sys

from app.core.database import async_session_maker, close_db, create_db_and_tables
from app.core.logging import setup_logging
from app.core.security import hash_password
from app.dao.user_dao import user_dao
from app.models.enums import UserRole

logger = setup_logging()


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="E-Commerce API administration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ecommerce-admin init-db
  ecommerce-admin create-admin --username root --email root@example.com \\
      --full-name "Store Admin" --phone 0900000000
        """
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Create all database tables")

    admin = subparsers.add_parser("create-admin", help="Create an admin account")
    admin.add_argument("--username", required=True)
    admin.add_argument("--email", required=True)
    admin.add_argument("--full-name", required=True)
    admin.add_argument("--phone", required=True)
    admin.add_argument(
        "--password",
        help="Account password (prompted for when omitted)"
    )

    return parser.parse_args(argv)


async def create_admin(username: str, email: str, password: str, full_name: str, phone: str) -> str:
    async with async_session_maker() as db:
        if await user_dao.get_by_username(db, username) or await user_dao.get_by_email(db, email):
            raise ValueError("A user with this username or email already exists")
        user = await user_dao.create(db, obj_in={
            "username": username,
            "email": email,
            "password": hash_password(password),
            "fullName": full_name,
            "phone": phone,
            "role": UserRole.ADMIN,
            "isVerified": True,
        })
        return user.id


async def run(args: argparse.Namespace) -> int:
    try:
        await create_db_and_tables()
        if args.command == "create-admin":
            password = args.password or getpass.getpass("Password: ")
            user_id = await create_admin(args.username, args.email, password, args.full_name, args.phone)
            logger.info("Admin account created", user_id=user_id, username=args.username)
        else:
            logger.info("Database tables created")
        return 0
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        await close_db()


def main(argv=None) -> int:
    return asyncio.run(run(parse_args(argv)))


if __name__ == "__main__":
    sys.exit(main())
