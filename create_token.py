"""Print a session token for an existing user, e.g. for testing the API with curl.

Usage:
    python create_token.py admin@example.com [lifetime_in_seconds]
"""
import asyncio
import sys

from leadprovider_api.app.core.security import create_access_token
from leadprovider_api.app.services.auth_service import AuthService


def main() -> int:
    if len(sys.argv) < 2:
        print(__doc__, file=sys.stderr)
        return 1
    email = sys.argv[1]
    lifetime = int(sys.argv[2]) if len(sys.argv) > 2 else None
    user = asyncio.run(AuthService.get_user_by_email(email))
    if user is None:
        print(f"No user found with email: {email}", file=sys.stderr)
        return 2
    token = create_access_token({"userId": user.id, "email": user.email, "role": user.role}, expires_delta=lifetime)
    print(token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
