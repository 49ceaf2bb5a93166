"""
Business logic for registration and login.

Users are stored in the ``users`` table with a salted PBKDF2 password
hash.  Both operations hand back a signed session token; the service
keeps no session state between calls.
"""

import logging
import sqlite3
from typing import Optional

from ..core.db import get_connection
from ..core.errors import AuthError, ConflictError, NotFoundError, PersistenceError, ValidationError
from ..core.security import create_session_token, hash_password, verify_password
from ..schemas.user import ROLE_USER, ROLES, UserRead


logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


def _require_credentials(email: Optional[str], password: Optional[str]) -> None:
    if not email or not password:
        raise ValidationError("Email and password are required")


class AuthService:
    """Registers and authenticates users and issues session tokens."""

    @classmethod
    async def register(cls, email: Optional[str], password: Optional[str]) -> str:
        """Create a user with role ``user`` and return a session token.

        Raises ``ValidationError`` when a field is missing or empty and
        ``ConflictError`` when the email is already registered.  Emails
        are compared exactly as stored.
        """
        _require_credentials(email, password)
        logger.info("Registering user %s", email)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            existing = cursor.execute("SELECT id FROM users WHERE email = ?", (email,)).fetchone()
            if existing:
                raise ConflictError("User with this email already exists")
            cursor.execute(
                "INSERT INTO users (email, password_hash, role) VALUES (?, ?, ?)",
                (email, hash_password(password), ROLE_USER),
            )
            user_id = cursor.lastrowid
            conn.commit()
        except sqlite3.IntegrityError as exc:
            # Lost a race against a concurrent registration of the same email
            conn.rollback()
            raise ConflictError("User with this email already exists") from exc
        except sqlite3.Error as exc:
            conn.rollback()
            logger.exception("Registration failed for %s", email)
            raise PersistenceError("Server error during registration") from exc
        finally:
            conn.close()
        return create_session_token(user_id, email, ROLE_USER)

    @classmethod
    async def login(cls, email: Optional[str], password: Optional[str]) -> str:
        """Check credentials and return a session token carrying the stored role.

        An unknown email and a wrong password produce the same
        ``AuthError`` so callers cannot probe which accounts exist.
        """
        _require_credentials(email, password)
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT id, email, password_hash, role FROM users WHERE email = ?",
                (email,),
            ).fetchone()
        except sqlite3.Error as exc:
            logger.exception("Login lookup failed for %s", email)
            raise PersistenceError("Server error during login") from exc
        finally:
            conn.close()
        if not row or not verify_password(password, row["password_hash"]):
            logger.info("Failed login attempt for %s", email)
            raise AuthError(INVALID_CREDENTIALS)
        return create_session_token(row["id"], row["email"], row["role"])

    @classmethod
    async def get_user_by_email(cls, email: str) -> Optional[UserRead]:
        """Retrieve a user by exact email."""
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT id, email, role, created_at FROM users WHERE email = ?",
                (email,),
            ).fetchone()
        finally:
            conn.close()
        if row:
            return UserRead(id=row["id"], email=row["email"], role=row["role"], created_at=row["created_at"])
        return None

    @classmethod
    async def set_role(cls, email: str, role: str) -> UserRead:
        """Change a user's role.

        Roles are never changed through the HTTP API; this is used by the
        ``promote_admin.py`` maintenance script.  Tokens issued before the
        change keep their old role until they expire.
        """
        if role not in ROLES:
            raise ValidationError(f"Unknown role: {role}")
        conn = get_connection()
        try:
            cursor = conn.execute("UPDATE users SET role = ? WHERE email = ?", (role, email))
            if cursor.rowcount == 0:
                raise NotFoundError(f"No user found with email: {email}")
            conn.commit()
        finally:
            conn.close()
        logger.info("Role of %s set to %s", email, role)
        return await cls.get_user_by_email(email)
