#!/usr/bin/env python3
"""Create an administrator account.

The password is read from ``--password`` or prompted for, and must pass the
same strength policy as self-service registration.
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import sys

from catering.app.auth import hash_password, validate_password_strength
from catering.app.db import create_schema, dispose, get_sessionmaker
from catering.app.domain.errors import ConflictError
from catering.app.domain.status import Role
from catering.app.repos_sqlalchemy import UsersRepoSQL


async def create_admin(session, username: str, email: str, password: str):
    """Insert an admin user; raises ``ValueError`` for a weak password."""

    check = validate_password_strength(password)
    if not check.is_valid:
        raise ValueError("; ".join(check.errors))
    return await UsersRepoSQL(session).create(
        {
            "username": username,
            "email": email,
            "password_hash": hash_password(password),
            "role": Role.ADMIN.value,
        }
    )


async def main(username: str, email: str, password: str) -> int:
    await create_schema()
    try:
        async with get_sessionmaker()() as session:
            user = await create_admin(session, username, email, password)
    except (ValueError, ConflictError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        await dispose()
    print(f"created admin {user.username} (id={user.id})")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create an administrator")
    parser.add_argument("--username", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password")
    args = parser.parse_args()
    password = args.password or getpass.getpass("Password: ")
    raise SystemExit(asyncio.run(main(args.username, args.email, password)))
