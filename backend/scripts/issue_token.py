#!/usr/bin/env python3
"""Ensure a user exists and print a bearer token for it (local development)."""
import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from auth import create_access_token  # noqa: E402
from db import SessionLocal, init_db  # noqa: E402
from repositories.user_repository import get_or_create_user  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("user_id", help="public id of the user the token is issued for")
    parser.add_argument("--minutes", type=int, default=None, help="token lifetime in minutes")
    args = parser.parse_args(argv)

    init_db()
    db = SessionLocal()
    try:
        user = get_or_create_user(db, args.user_id)
    finally:
        db.close()
    print(create_access_token(user.public_id, args.minutes))
    return 0


if __name__ == "__main__":
    sys.exit(main())
