"""
Admin schemas for request/response validation.

Request bodies are validated once at the API boundary; the messages raised
by the validators are returned to the client unchanged. Response models
emit the camelCase keys the dashboard frontend reads.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from rth_backend.fastapi.models.admin import AdminRole
from rth_backend.security.password import MIN_PASSWORD_LENGTH


# Request schemas
class AdminLogin(BaseModel):
    """Schema for admin login request."""

    username: Optional[str] = Field(None, examples=["admin"])
    password: Optional[str] = Field(None, examples=["rahasia123"])

    @model_validator(mode="after")
    def require_credentials(self):
        if not (self.username or "").strip() or not self.password:
            raise ValueError("Username dan password harus diisi")
        return self


class ChangePasswordRequest(BaseModel):
    """Schema for the change-password request."""

    current_password: Optional[str] = Field(None, alias="currentPassword")
    new_password: Optional[str] = Field(None, alias="newPassword")

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="after")
    def check_passwords(self):
        if not self.current_password or not self.new_password:
            raise ValueError("Password lama dan password baru harus diisi")
        if len(self.new_password) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password baru minimal {MIN_PASSWORD_LENGTH} karakter")
        return self


class AdminCreate(BaseModel):
    """Schema for creating a new admin account."""

    username: Optional[str] = Field(None, max_length=50, examples=["operator"])
    password: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=255)
    role: Optional[AdminRole] = None

    @model_validator(mode="after")
    def check_fields(self):
        if not (self.username or "").strip() or not self.password:
            raise ValueError("Username dan password harus diisi")
        if len(self.password) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password minimal {MIN_PASSWORD_LENGTH} karakter")
        return self


# Response schemas
class AdminPublic(BaseModel):
    """Admin fields safe to return to clients (never the password hash)."""

    id: UUID
    username: str
    email: Optional[str] = None
    role: AdminRole
    last_login: Optional[datetime] = Field(None, alias="lastLogin")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class AdminProfile(AdminPublic):
    created_at: datetime = Field(..., alias="createdAt")


class AdminCreated(BaseModel):
    id: UUID
    username: str
    email: Optional[str] = None
    role: AdminRole
    is_active: bool = Field(..., alias="isActive")
    created_at: datetime = Field(..., alias="createdAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class LoginData(BaseModel):
    token: str
    admin: AdminPublic


class AdminLoginResponse(BaseModel):
    success: bool = True
    message: str = "Login berhasil"
    data: LoginData


class ProfileData(BaseModel):
    admin: AdminProfile


class AdminProfileResponse(BaseModel):
    success: bool = True
    data: ProfileData


class AdminCreatedData(BaseModel):
    admin: AdminCreated


class AdminCreateResponse(BaseModel):
    success: bool = True
    message: str = "Admin berhasil dibuat"
    data: AdminCreatedData


class MessageResponse(BaseModel):
    success: bool = True
    message: str
