# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# The session gate. Every protected endpoint depends on get_current_user,
# which verifies the Supabase access token sent as a Bearer token.
#
# Supports both:
# - ES256 (new Supabase JWT signing keys) via JWKS
# - HS256 (legacy Supabase JWT secret) as fallback
#
# A missing, expired or unverifiable token is treated as "no session": the
# caller gets 401 with a login redirect back to the refused path.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
import time
from typing import Optional
from uuid import UUID

import httpx
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError

from app.config import settings
from app.auth.models import AuthUser
from app.exceptions import AuthRequiredError

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor; a missing header is handled by the gate itself
security = HTTPBearer(auto_error=False)

# Audience Supabase puts in user access tokens
TOKEN_AUDIENCE = "authenticated"

# Cache for JWKS keys
_jwks_cache: dict = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # 1 hour


def _get_jwks_url() -> str:
    """Get the JWKS URL from Supabase URL."""
    supabase_url = settings.SUPABASE_URL.rstrip('/')
    return f"{supabase_url}/auth/v1/.well-known/jwks.json"


def _fetch_jwks() -> dict:
    """Fetch JWKS from Supabase with caching."""
    global _jwks_cache, _jwks_cache_time

    current_time = time.time()

    if _jwks_cache and (current_time - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    try:
        jwks_url = _get_jwks_url()
        response = httpx.get(jwks_url, timeout=10)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = current_time
        logger.debug(f"Fetched JWKS from {jwks_url}")
        return _jwks_cache
    except Exception as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        # Stale keys are better than none
        if _jwks_cache:
            return _jwks_cache
        return {"keys": []}


def _get_signing_key(token: str) -> tuple[str | dict, str]:
    """
    Get the appropriate signing key for a token.

    Returns:
        Tuple of (key, algorithm) to use for verification
    """
    try:
        unverified_header = jwt.get_unverified_header(token)
    except JWTError:
        return settings.SUPABASE_JWT_SECRET, "HS256"

    alg = unverified_header.get("alg", "HS256")
    kid = unverified_header.get("kid")

    if alg == "HS256":
        return settings.SUPABASE_JWT_SECRET, "HS256"

    if kid:
        for key in _fetch_jwks().get("keys", []):
            if key.get("kid") == kid:
                return key, alg

    logger.warning(f"Could not find key for alg={alg}, kid={kid}, falling back to HS256")
    return settings.SUPABASE_JWT_SECRET, "HS256"


def verify_access_token(token: str) -> AuthUser:
    """
    Verify a Supabase access token and extract the user.

    Raises:
        JWTError: If the signature, expiry or audience check fails
        ValueError: If the token has no usable subject
    """
    signing_key, algorithm = _get_signing_key(token)

    payload = jwt.decode(
        token,
        signing_key,
        algorithms=[algorithm],
        audience=TOKEN_AUDIENCE,
    )

    user_id = payload.get("sub")
    if not user_id:
        raise ValueError("missing user ID")

    # Raises ValueError on a malformed subject
    return AuthUser(id=UUID(user_id), email=payload.get("email"))


def _return_path(request: Request) -> str:
    """The refused path, with its query string, as a login return target."""
    path = request.url.path
    if request.url.query:
        path += f"?{request.url.query}"
    return path


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthUser:
    """
    Require a live session and return its user.

    Returns:
        AuthUser: The authenticated user

    Raises:
        AuthRequiredError: 401 with a login redirect if there is no valid session

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if credentials is None:
        raise AuthRequiredError(return_path=_return_path(request), reason="no session")

    try:
        user = verify_access_token(credentials.credentials)
    except (JWTError, ValueError) as e:
        logger.warning(f"Session check failed: {e}")
        raise AuthRequiredError(return_path=_return_path(request), reason="invalid session")

    logger.debug(f"Authenticated user: {user.id}")
    return user


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[AuthUser]:
    """
    Optionally get the current user.

    Returns None if no token is provided or the token is invalid, instead of
    refusing the request. Used by public views that show more to owners.
    """
    if credentials is None:
        return None

    try:
        return verify_access_token(credentials.credentials)
    except (JWTError, ValueError):
        return None
