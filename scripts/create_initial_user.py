"""Utility script to create the first administrator account."""

from __future__ import annotations

import argparse
from getpass import getpass

from bcet_connect.application.use_cases.users import create_user
from bcet_connect.domain.entities import ROLE_ADMIN, USER_ROLES
from bcet_connect.domain.errors import AppError
from bcet_connect.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create an initial user for the BCET Connect API.",
    )
    parser.add_argument("--name", default="Administrator", help="Full name of the user")
    parser.add_argument("--email", default="admin@bcet.edu", help="Login email of the user")
    parser.add_argument(
        "--role",
        default=ROLE_ADMIN,
        choices=USER_ROLES,
        help="Role granted to the user (default: admin)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Password of the user. Prompted interactively when omitted.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    password = args.password or getpass("Password for the new user: ")
    if not password:
        raise SystemExit("A password is required.")

    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(
            session,
            name=args.name,
            email=args.email,
            password=password,
            role=args.role,
        )
    except AppError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the user: {exc.message}") from exc
    else:
        print(
            "User created:\n"
            f"  ID: {user.id}\n"
            f"  Name: {user.name}\n"
            f"  Email: {user.email}\n"
            f"  Role: {user.role}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
