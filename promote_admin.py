#!/usr/bin/env python3
"""
Grant or revoke the admin role of a user in the Lead Provider database.

Roles cannot be changed through the HTTP API.  Run this script on the
server to promote the first administrator (or demote one).  The user
must log in again to receive a token carrying the new role.

Usage:
    python promote_admin.py --db ./leadprovider_api/leadprovider.db --email admin@example.com
    python promote_admin.py --email someone@example.com --role user

If --db is omitted, the DATABASE_URL environment variable (or its
default) is used.
"""

import argparse
import asyncio
import os
import sys
from typing import List, Optional

from leadprovider_api.app.core.config import settings
from leadprovider_api.app.core.errors import ServiceError
from leadprovider_api.app.services.auth_service import AuthService


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Set the role of a Lead Provider user (SQLite).")
    ap.add_argument("--db", help="Path to SQLite DB file; defaults to DATABASE_URL")
    ap.add_argument("--email", required=True, help="Email of the user to update (exact match)")
    ap.add_argument("--role", default="admin", choices=["admin", "user"], help="Role to assign (default: admin)")
    args = ap.parse_args(argv)

    if args.db:
        if not os.path.exists(args.db):
            print(f"[!] DB not found: {args.db}", file=sys.stderr)
            return 1
        settings.database_url = os.path.abspath(args.db)

    try:
        user = asyncio.run(AuthService.set_role(args.email, args.role))
    except ServiceError as exc:
        print(f"[!] {exc.message}", file=sys.stderr)
        return 2
    print(f"[+] Role of {user.email} set to {user.role}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
