"""
Security helpers for password hashing and JWT authentication.

This module implements a lightweight JSON Web Token (JWT) mechanism
using HMAC‑SHA256 signatures and base64url encoding.  Tokens embed the
session claims (``userId``, ``email``, ``role``) and an expiration
timestamp (``exp``).  A secret key from the application settings is
used to sign and verify the token.  Helper functions are also provided
for hashing passwords using PBKDF2‑HMAC with SHA‑256, along with salt
generation and verification.

Tokens are the only source of identity: nothing is looked up on the
server while verifying a request, and there is no revocation list.
"""

import base64
import hashlib
import hmac
import json
import os
import time
from typing import Any, Callable, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .errors import AuthError, ForbiddenError
from ..schemas.user import SessionContext


PBKDF2_ITERATIONS = 100_000


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = '=' * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    """Compute HMAC‑SHA256 signature of a message using the given secret."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, Any], expires_delta: Optional[int] = None) -> str:
    """Create a signed JWT token with the given payload.

    The payload is extended with an ``exp`` field representing the
    expiration time as a UNIX timestamp.  The token is a string of the
    form ``header.payload.signature``, where each part is base64url
    encoded.  Clients must include this token in the ``Authorization``
    header as ``Bearer <token>``.

    Parameters
    ----------
    data : dict
        Claims to embed in the token (e.g. ``{"userId": 1, "email": ...}``).
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.
    """
    to_encode = data.copy()
    exp_seconds = expires_delta if expires_delta is not None else settings.access_token_expire_minutes * 60
    to_encode["exp"] = int(time.time()) + exp_seconds
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(',', ':')).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(',', ':')).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def create_session_token(user_id: int, email: str, role: str) -> str:
    """Issue the session token handed out by register and login."""
    return create_access_token({"userId": user_id, "email": email, "role": role})


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify and decode a JWT token.

    Splits the token into header, payload and signature, verifies the
    HMAC signature and checks the ``exp`` field.  Returns the payload
    dictionary if validation succeeds, otherwise ``None``.
    """
    parts = token.split('.')
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    expected_sig = _sign(signing_input, settings.secret_key)
    try:
        actual_sig = _b64_url_decode(signature_b64)
        # Constant‑time comparison to prevent timing attacks
        if not hmac.compare_digest(expected_sig, actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
        if data.get("exp") is None or int(data["exp"]) < int(time.time()):
            return None
    except (ValueError, TypeError, AttributeError):
        # ValueError also covers binascii, JSON and unicode decode errors
        return None
    return data


def session_from_token(token: str) -> SessionContext:
    """Turn a bearer token into a ``SessionContext`` or raise ``AuthError``."""
    payload = decode_access_token(token)
    if not payload or payload.get("userId") is None or not payload.get("email"):
        raise AuthError("Invalid or expired token")
    return SessionContext(
        user_id=payload["userId"],
        email=payload["email"],
        role=payload.get("role") or "user",
    )


security = HTTPBearer(auto_error=False)


def get_session(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> SessionContext:
    """Dependency that verifies the bearer token of the current request.

    Raises ``AuthError`` (401) when the ``Authorization`` header is
    missing or the token is invalid or expired.  The returned context
    lives only for the duration of the request.
    """
    if credentials is None:
        raise AuthError("Not authenticated")
    return session_from_token(credentials.credentials)


def optional_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[SessionContext]:
    """Like ``get_session`` but returns ``None`` instead of raising."""
    if credentials is None:
        return None
    try:
        return session_from_token(credentials.credentials)
    except AuthError:
        return None


# ---------------------------------------------------------------------------
# Role-based access control
# ---------------------------------------------------------------------------

def require_roles(*roles: str) -> Callable[..., SessionContext]:
    """Dependency factory to enforce that the current user has one of ``roles``.

    Use this in FastAPI endpoints via ``Depends(require_roles("admin"))``.
    Every failure behind a role gate is reported as 403, including a
    missing or invalid token, so callers without the role cannot tell
    the two cases apart.
    """

    def _role_dependency(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    ) -> SessionContext:
        try:
            session = get_session(credentials)
        except AuthError as exc:
            raise AuthError(exc.message, status_code=403) from exc
        if session.role not in roles:
            raise ForbiddenError("Admin access required")
        return session

    return _role_dependency


require_admin = require_roles("admin")


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256.

    A 16‑byte random salt is generated for each password.  The result
    contains the salt and hash separated by ``$`` (salt in hex, then
    hash in hex).
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac('sha256', password.encode('utf-8'), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored salt+hash string.

    Splits the stored string into salt and hash, recomputes the
    PBKDF2‑HMAC digest and compares it using constant‑time comparison.
    Malformed stored values never match.
    """
    try:
        salt_hex, hash_hex = hashed_password.split('$', 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except (ValueError, AttributeError):
        return False
    dk = hashlib.pbkdf2_hmac('sha256', plain_password.encode('utf-8'), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)
