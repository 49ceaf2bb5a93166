"""
Pydantic models for user data and sessions.

Credentials are accepted with optional fields so that missing values
reach the service layer, which reports them with a uniform
``{"message": ...}`` body instead of a schema validation error.
"""

from typing import Optional

from pydantic import BaseModel, Field


ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_ADMIN)


class Credentials(BaseModel):
    """Body of the register and login requests."""

    email: Optional[str] = Field(None, example="user@example.com")
    password: Optional[str] = Field(None, example="strongpassword")


class TokenResponse(BaseModel):
    message: str = Field(..., example="Login successful")
    token: str


class UserRead(BaseModel):
    """A stored user, without the password hash."""

    id: int
    email: str
    role: str = Field(ROLE_USER, example=ROLE_USER)
    created_at: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }


class SessionContext(BaseModel):
    """Identity extracted from a verified session token.

    Built once per request by the security dependencies and passed
    explicitly to the endpoints that need it.
    """

    user_id: int
    email: str
    role: str = ROLE_USER

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


class SessionStatus(BaseModel):
    loggedIn: bool
    userId: Optional[int] = None
    email: Optional[str] = None
    role: Optional[str] = None
