"""
Admin authentication and management endpoints.

This module provides FastAPI endpoints for admin login, logout, profile,
password change and admin creation.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rth_backend.fastapi.core.exceptions import AuthenticationError, NotFoundError, ValidationError
from rth_backend.fastapi.core.retry import RetryPolicy
from rth_backend.fastapi.crud.admin import AdminCRUD, find_admin_with_retry
from rth_backend.fastapi.crud.token_blacklist import revoke_token
from rth_backend.fastapi.dependencies.database import get_sync_db
from rth_backend.fastapi.models.admin import Admin
from rth_backend.fastapi.schemas.admin import (
    AdminCreate, AdminCreated, AdminCreateResponse, AdminLogin,
    AdminLoginResponse, AdminProfile, AdminProfileResponse, AdminPublic,
    ChangePasswordRequest, MessageResponse
)
from rth_backend.security.auth import TokenIssuer
from rth_backend.security.dependencies import (
    RequireAdmin, get_bearer_token, get_retry_policy, get_token_issuer
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["authentication"])


@router.post("/login", response_model=AdminLoginResponse, summary="Admin Login")
async def login(
    admin_login: AdminLogin,
    db: Session = Depends(get_sync_db),
    issuer: TokenIssuer = Depends(get_token_issuer),
    retry_policy: RetryPolicy = Depends(get_retry_policy),
):
    """
    Authenticate an admin and return a JWT access token.

    **Process:**
    1. Require both username and password
    2. Look up the admin by trimmed, lowercased username (retrying store outages)
    3. Verify the password against the stored hash
    4. Record the login time (best effort)
    5. Return the token with the public admin fields

    **Errors:**
    - **400**: Username or password missing
    - **401**: Unknown username ("Username salah") or wrong password ("Password salah")
    - **500**: Database unavailable after retries
    """
    username = admin_login.username.strip()
    logger.info("Login attempt for %s", username)

    admin = await find_admin_with_retry(db, username, retry_policy)
    if not admin:
        logger.info("Login failed for %s: unknown username", username)
        raise AuthenticationError("Username salah", code="UNKNOWN_USERNAME")

    crud = AdminCRUD(db)
    if not crud.verify_password(admin, admin_login.password):
        logger.info("Login failed for %s: wrong password", username)
        raise AuthenticationError("Password salah", code="WRONG_PASSWORD")

    try:
        crud.update_last_login(admin)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Could not update last login for %s", admin.username)

    token = issuer.issue(admin.id)
    logger.info("Login successful for %s", admin.username)

    return AdminLoginResponse(
        data={"token": token, "admin": AdminPublic.model_validate(admin)}
    )


@router.get("/profile", response_model=AdminProfileResponse, summary="Get Current Admin")
async def get_profile(current_admin: Admin = RequireAdmin):
    """
    Get the authenticated admin's profile.

    **Errors:**
    - **401**: Missing, invalid, expired or revoked token
    """
    return AdminProfileResponse(data={"admin": AdminProfile.model_validate(current_admin)})


@router.post("/logout", response_model=MessageResponse, summary="Admin Logout")
async def logout(
    token: Optional[str] = Depends(get_bearer_token),
    db: Session = Depends(get_sync_db),
):
    """
    Revoke the presented bearer token.

    Succeeds whether or not a token was sent; revoking the same token twice
    is harmless.
    """
    if token:
        revoke_token(db, token)
    return MessageResponse(message="Logout berhasil")


@router.post("/change-password", response_model=MessageResponse, summary="Change Password")
async def change_password(
    payload: ChangePasswordRequest,
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireAdmin,
):
    """
    Change the authenticated admin's password.

    **Errors:**
    - **400**: Missing fields, new password shorter than 6 characters, or wrong current password
    - **401**: Not authenticated
    - **404**: Admin no longer exists
    """
    crud = AdminCRUD(db)
    admin = crud.get_admin(current_admin.id)
    if not admin:
        raise NotFoundError("Admin tidak ditemukan")

    if not crud.verify_password(admin, payload.current_password):
        raise ValidationError("Password lama tidak benar", code="WRONG_CURRENT_PASSWORD")

    crud.change_password(admin, payload.new_password)
    return MessageResponse(message="Password berhasil diubah")


@router.post(
    "/admins",
    response_model=AdminCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Admin",
)
async def create_admin(
    admin_create: AdminCreate,
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireAdmin,
):
    """
    Create a new admin account.

    **Permissions:** any authenticated admin; the caller's role is not checked.

    **Errors:**
    - **400**: Missing fields, password shorter than 6 characters, or username taken
    - **401**: Not authenticated
    """
    admin = AdminCRUD(db).create_admin(
        admin_create.username,
        admin_create.password,
        email=admin_create.email,
        role=admin_create.role,
    )
    logger.info("Admin %s created by %s", admin.username, current_admin.username)
    return AdminCreateResponse(data={"admin": AdminCreated.model_validate(admin)})
