#!/usr/bin/env python3
"""
ShopDesk -- command-line helpers for the auth backend.

Usage:
  python main.py serve
  python main.py serve --host 0.0.0.0 --port 5000
  python main.py create-user --name "Site Admin" --email admin@example.com --role admin \
      --gender Other --dob 1990-01-01 --mobile 0000000000 --address "Head office"

create-user is how the first admin account is made: self-registration always
creates customers, and only an admin can grant another role over the API.
If --password is omitted it is prompted for (not echoed).

Environment variables:
  SECRET_KEY    Token signing key (>= 32 chars). Required unless DEBUG=true.
  DATABASE_URL  SQLAlchemy URL of the user database.
"""

import argparse
import getpass
from typing import Optional

from auth.accounts import create_account
from auth.models import Role
from auth.store import UserStore
from core.config import get_settings
from core.errors import ConflictError


def _create_user(args: argparse.Namespace) -> int:
    settings = get_settings()
    password = args.password or getpass.getpass("Password: ")
    if not password:
        print("  [!] Password must not be empty.")
        return 1

    store = UserStore(args.database_url or settings.database_url)
    try:
        user_id = create_account(
            store,
            name=args.name,
            email=args.email,
            password=password,
            gender=args.gender,
            date_of_birth=args.dob,
            mobile_number=args.mobile,
            address=args.address,
            role=args.role,
            rounds=settings.bcrypt_rounds,
        )
    except ConflictError:
        print(f"  [!] A user with email '{args.email}' already exists.")
        return 1
    finally:
        store.close()

    print(f"Created {args.role} user {args.email} (id {user_id}).")
    return 0


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("asgi:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="shopdesk",
        description="ShopDesk auth backend utilities.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    create = sub.add_parser("create-user", help="Create a user with any role directly in the database")
    create.add_argument("--name", required=True)
    create.add_argument("--email", required=True)
    create.add_argument("--password", help="Prompted for when omitted")
    create.add_argument(
        "--role",
        choices=[r.value for r in Role],
        default=Role.admin.value,
        help="Role to grant (default: admin)",
    )
    create.add_argument("--gender", required=True)
    create.add_argument("--dob", required=True, metavar="DATE", help="Date of birth, e.g. 1990-01-01")
    create.add_argument("--mobile", required=True, metavar="NUMBER")
    create.add_argument("--address", required=True)
    create.add_argument("--database-url", metavar="URL", help="Override DATABASE_URL")
    create.set_defaults(func=_create_user)

    serve = sub.add_parser("serve", help="Run the API with uvicorn")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=5000)
    serve.add_argument("--reload", action="store_true", help="Reload on code changes (development)")
    serve.set_defaults(func=_serve)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
