# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field
from uuid import UUID
from typing import Optional


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase JWT.

    This is the minimal user info available from the token itself.
    """
    id: UUID
    email: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class Credentials(BaseModel):
    """Email and password for sign-up and sign-in."""
    email: str = Field(..., min_length=3, max_length=320, examples=["you@example.com"])
    password: str = Field(..., min_length=1)


class SignUpResponse(BaseModel):
    """Response after an account was created."""
    message: str = "Sign up successful! You can log in now."
    user_id: Optional[str] = None


class SignInResponse(BaseModel):
    """
    Session issued by a password sign-in.

    The client sends `access_token` as a Bearer token on protected requests
    and goes to `redirect` next.
    """
    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None
    token_type: str = "bearer"
    user_id: str
    email: Optional[str] = None
    redirect: str = "/dashboard"


class SessionInfo(BaseModel):
    """The session behind the current request."""
    valid: bool = True
    user_id: str
    email: Optional[str] = None
