# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Sign-up and password sign-in are passed through to Supabase Auth.
# The other routes report on the session behind the current request.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.auth.dependencies import get_current_user
from app.auth.models import (
    AuthUser,
    Credentials,
    SessionInfo,
    SignInResponse,
    SignUpResponse,
)
from app.dependencies import BackendDep
from app.exceptions import AuthFailedError

logger = logging.getLogger(__name__)

router = APIRouter()


def _auth_error_message(exc: Exception) -> str:
    """Message of an auth service error, as shown to the user."""
    return getattr(exc, "message", None) or str(exc) or "Something went wrong"


@router.post("/sign-up", response_model=SignUpResponse)
async def sign_up(credentials: Credentials, backend: BackendDep):
    """
    Create an account with email and password.

    Depending on the project settings the user may have to confirm their
    email before signing in.
    """
    try:
        response = backend.auth.sign_up({
            "email": credentials.email,
            "password": credentials.password,
        })
    except Exception as e:
        logger.warning(f"Sign up failed for {credentials.email}: {e}")
        raise AuthFailedError(_auth_error_message(e))

    user = getattr(response, "user", None)
    logger.info(f"Signed up user: {getattr(user, 'id', None)}")

    return SignUpResponse(user_id=str(user.id) if user else None)


@router.post("/sign-in", response_model=SignInResponse)
async def sign_in(
    credentials: Credentials,
    backend: BackendDep,
    redirect: Annotated[str, Query(description="Where to go after signing in")] = "/dashboard",
):
    """
    Sign in with email and password.

    Returns the session tokens and the path to continue to (the `redirect`
    parameter the auth gate handed out, `/dashboard` by default).
    """
    try:
        response = backend.auth.sign_in_with_password({
            "email": credentials.email,
            "password": credentials.password,
        })
    except Exception as e:
        logger.warning(f"Sign in failed for {credentials.email}: {e}")
        raise AuthFailedError(_auth_error_message(e))

    session = getattr(response, "session", None)
    if not session:
        raise AuthFailedError("No session returned")

    user = response.user or session.user

    return SignInResponse(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_at=session.expires_at,
        user_id=str(user.id),
        email=user.email,
        # Only same-site paths are accepted as a continuation
        redirect=redirect if redirect.startswith("/") and not redirect.startswith("//") else "/dashboard",
    )


@router.get("/me", response_model=SessionInfo)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> SessionInfo:
    """
    Get the user behind the current session.

    Raises:
        401: If not authenticated
    """
    return SessionInfo(user_id=str(user.id), email=user.email)


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email
    }
