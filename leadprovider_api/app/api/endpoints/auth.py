"""
Authentication endpoints.

Provide registration, login and a session probe.  Tokens are returned
in the response body; the client stores them and sends them back as
``Authorization: Bearer <token>``.  Logging out is a client-side
discard of the token.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from leadprovider_api.app.core.security import optional_session
from leadprovider_api.app.schemas.user import Credentials, SessionContext, SessionStatus, TokenResponse
from leadprovider_api.app.services.auth_service import AuthService


router = APIRouter()


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(credentials: Credentials) -> TokenResponse:
    """Register a new user and log them in.

    Responds 400 when email or password is missing and 409 when the
    email is already taken.
    """
    token = await AuthService.register(credentials.email, credentials.password)
    return TokenResponse(message="User registered successfully", token=token)


@router.post("/login", response_model=TokenResponse)
async def login(credentials: Credentials) -> TokenResponse:
    """Exchange email and password for a session token (401 on failure)."""
    token = await AuthService.login(credentials.email, credentials.password)
    return TokenResponse(message="Login successful", token=token)


@router.get("/session", response_model=SessionStatus, response_model_exclude_none=True)
async def session(current: Optional[SessionContext] = Depends(optional_session)) -> SessionStatus:
    """Report whether the presented token is valid.

    Never fails: a missing, malformed or expired token yields
    ``{"loggedIn": false}``.
    """
    if current is None:
        return SessionStatus(loggedIn=False)
    return SessionStatus(loggedIn=True, userId=current.user_id, email=current.email, role=current.role)
