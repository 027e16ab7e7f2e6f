"""Utility script to create the first super admin in the database."""

from __future__ import annotations

import argparse
from getpass import getpass

from classroom.application.use_cases.users.create_user import create_user
from classroom.domain.entities import ROLE_SUPER_ADMIN
from classroom.domain.errors import PersistenceError
from classroom.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create the initial super admin for LinuxWorld Classroom.",
    )
    parser.add_argument(
        "--name",
        default="Administrator",
        help="Full name of the user (default: Administrator)",
    )
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="Email address of the user (default: admin@example.com)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Password of the user. Prompted interactively when omitted.",
    )
    parser.add_argument(
        "--must-change-password",
        action="store_true",
        help="Force a password change on first sign in.",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Password for the new user: ")
    if not password:
        raise SystemExit("No password was provided.")

    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(
            session,
            name=args.name,
            email=args.email,
            password=password,
            role=ROLE_SUPER_ADMIN,
            mode=None,
            is_approved=True,
            must_change_password=args.must_change_password,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the user: {exc}") from exc
    except PersistenceError as exc:
        raise SystemExit(f"Could not store the user: {exc}") from exc
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
