"""Utility script to create the first administrator account."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from eventlink.application.use_cases.users import register_user
from eventlink.domain.entities import ROLE_ADMIN, USER_ROLES
from eventlink.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create an initial administrator for the EventLink API.",
    )
    parser.add_argument("--email", default="admin@eventlink.one", help="Login email")
    parser.add_argument("--first-name", default="EventLink", help="First name")
    parser.add_argument("--last-name", default="Admin", help="Last name")
    parser.add_argument(
        "--role",
        default=ROLE_ADMIN,
        choices=USER_ROLES,
        help="Role of the new account (default: admin)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Password; prompted interactively when omitted.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    password = args.password or getpass("Password for the new user: ")
    if not password:
        raise SystemExit("No password provided.")

    initialize_database()

    session = SessionLocal()
    try:
        user = register_user(
            session,
            email=args.email,
            password=password,
            role=args.role,
            first_name=args.first_name,
            last_name=args.last_name,
            allowed_roles=USER_ROLES,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the user: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Database error while saving the user: {exc}") from exc
    else:
        print(
            "User created:\n"
            f"  ID: {user.id}\n"
            f"  Name: {user.full_name}\n"
            f"  Email: {user.email}\n"
            f"  Role: {user.role}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
