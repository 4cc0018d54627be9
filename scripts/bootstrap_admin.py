#!/usr/bin/env python3
"""
One-time setup: make an existing account the first admin.

Run after the first user has registered and migrations are applied:

    python scripts/bootstrap_admin.py admin@example.com

Refuses to run once any admin exists; further admins are appointed through
the API by an admin.
"""
import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database import get_session_context
from services.errors import HandoverError
from services.user_service import UserService


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Promote a registered user to the first admin")
    parser.add_argument("email", help="Email address of the registered user")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        with get_session_context() as db:
            user = UserService.bootstrap_admin(db, args.email)
            print(f"Admin ensured: {user.email} (id {user.id})")
    except HandoverError as e:
        print(f"Bootstrap refused: {e.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
