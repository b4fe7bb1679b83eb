"""
Authentication dependencies for FastAPI.

This module is the request gate for protected routes: it extracts the bearer
token, verifies it, checks the revocation list, and resolves the admin the
token was issued to.
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from rth_backend.fastapi.core.exceptions import AuthenticationError
from rth_backend.fastapi.core.retry import RetryPolicy
from rth_backend.fastapi.crud.admin import get_admin
from rth_backend.fastapi.crud.token_blacklist import is_token_revoked
from rth_backend.fastapi.dependencies.database import get_sync_db
from rth_backend.fastapi.models.admin import Admin
from rth_backend.security.auth import ADMIN_ID_CLAIM, TokenIssuer

logger = logging.getLogger(__name__)

# Missing credentials are reported by get_current_admin, not by the scheme
security = HTTPBearer(auto_error=False)


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_retry_policy(request: Request) -> RetryPolicy:
    return request.app.state.retry_policy


async def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[str]:
    """Return the bearer token from the Authorization header, or None."""
    if credentials is None or not credentials.credentials:
        return None
    return credentials.credentials


async def get_current_admin(
    request: Request,
    token: Optional[str] = Depends(get_bearer_token),
    db: Session = Depends(get_sync_db),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> Admin:
    """
    Admit the request only for a valid, unrevoked token of an existing admin.

    The resolved admin is also stored on ``request.state.admin``.

    Raises:
        AuthenticationError: With code MISSING_TOKEN, INVALID_OR_EXPIRED_TOKEN,
            REVOKED_TOKEN or UNKNOWN_ADMIN

    Usage:
        @app.get("/admin-only")
        async def admin_route(current_admin: Admin = Depends(get_current_admin)):
            return {"admin": current_admin.username}
    """
    if not token:
        raise AuthenticationError("Token tidak ditemukan", code="MISSING_TOKEN")

    payload = issuer.verify(token)

    if is_token_revoked(db, token):
        logger.info("Rejected revoked token on %s", request.url.path)
        raise AuthenticationError("Token sudah tidak berlaku", code="REVOKED_TOKEN")

    admin = get_admin(db, payload[ADMIN_ID_CLAIM])
    if admin is None:
        raise AuthenticationError("Admin tidak ditemukan", code="UNKNOWN_ADMIN")

    request.state.admin = admin
    return admin


# Convenience dependency for protected routes
RequireAdmin = Depends(get_current_admin)
