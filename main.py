#!/usr/bin/env python3
"""
POS backend -- command line entry point.

Usage:
  python main.py serve
  python main.py serve --host 0.0.0.0 --port 8000 --reload
  python main.py create-admin --email owner@shop.com
  python main.py create-admin --email owner@shop.com --password 'long-enough-secret'
  python main.py migrate-passwords

Environment variables (see core/config.py):
  SECRET_KEY     Required unless DEBUG=true. At least 32 characters.
  DATABASE_URL   SQLAlchemy URL. Defaults to a SQLite file beside the code.
"""

from __future__ import annotations

import argparse
import getpass
import logging
import sys
from typing import Optional

from auth import service
from auth.passwords import hash_password, is_bcrypt_hash
from auth.schemas import RoleEnum
from auth.store import UserStore
from core.errors import AppError

logger = logging.getLogger("pos.cli")


def create_admin(store: UserStore, email: str, password: str) -> int:
    """Register an admin through the normal registration flow.

    This is the only way to create the first admin: POST /api/admin requires
    an admin caller. Returns a process exit code.
    """
    try:
        user = service.register(store, {"email": email, "password": password, "role": RoleEnum.admin.value})
    except AppError as exc:
        print(f"  [!] {exc.message}")
        for line in exc.details or []:
            print(f"      {line}")
        return 1
    print(f"  Admin {user.email} created (id {user.id}).")
    return 0


def migrate_passwords(store: UserStore) -> dict[str, int]:
    """Hash any stored password that is still plaintext.

    Safe to run repeatedly: digests already in bcrypt form are skipped.
    Returns counts of migrated, already-hashed, and failed records.
    """
    counts = {"migrated": 0, "already_hashed": 0, "failed": 0}
    users = store.list_users()
    for user in users:
        if is_bcrypt_hash(user.hashed_password):
            counts["already_hashed"] += 1
            continue
        try:
            store.update_password(user.id, hash_password(user.hashed_password))
        except Exception:
            logger.exception("Could not migrate password for user %s", user.id)
            counts["failed"] += 1
            continue
        counts["migrated"] += 1
    logger.info("Password migration finished: %s", counts)
    return counts


def _serve(host: str, port: int, reload: bool) -> None:
    import uvicorn

    uvicorn.run("asgi:app", host=host, port=port, reload=reload)


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="pos",
        description="Point-of-sale backend: API server and account maintenance.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py serve --reload
  python main.py create-admin --email owner@shop.com
  python main.py migrate-passwords
        """,
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    serve = sub.add_parser("serve", help="Run the HTTP API with uvicorn")
    serve.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    serve.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes (development only)")

    admin = sub.add_parser("create-admin", help="Create an admin account")
    admin.add_argument("--email", required=True, help="Admin email address")
    admin.add_argument(
        "--password",
        help="Admin password (8-100 characters). Prompted for when omitted.",
    )

    sub.add_parser("migrate-passwords", help="Hash any plaintext passwords left in the user table")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s %(message)s")

    if args.command == "serve":
        _serve(args.host, args.port, args.reload)
        return 0

    store = UserStore()

    if args.command == "create-admin":
        password = args.password or getpass.getpass("Admin password: ")
        return create_admin(store, args.email, password)

    counts = migrate_passwords(store)
    print("Password migration summary")
    print("─" * 40)
    print(f"  Migrated:        {counts['migrated']}")
    print(f"  Already hashed:  {counts['already_hashed']}")
    print(f"  Failed:          {counts['failed']}")
    print(f"  Total processed: {sum(counts.values())}")
    return 1 if counts["failed"] else 0


if __name__ == "__main__":
    sys.exit(main())
