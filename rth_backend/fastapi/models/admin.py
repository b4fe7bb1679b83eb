"""
Admin model for the authentication system.

This module defines the Admin table structure and provides the SQLAlchemy model
for administrator accounts of the RTH dashboard.
"""

import enum
import uuid

from sqlalchemy import Boolean, Column, DateTime, Enum, String, Uuid

from rth_backend.fastapi.core.utils import utcnow
from rth_backend.fastapi.dependencies.database import Base
from rth_backend.security.password import hash_password


class AdminRole(str, enum.Enum):
    ADMIN = "admin"
    SUPERADMIN = "superadmin"


class Admin(Base):
    """
    Administrator account.

    Usernames are stored lowercase. The plaintext password is never stored:
    assigning to ``password`` replaces ``password_hash`` with a fresh salted hash.
    """

    __tablename__ = "admins"

    # Primary key
    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier for the admin"
    )

    # Authentication fields
    username = Column(
        String(50),
        unique=True,
        nullable=False,
        index=True,
        comment="Unique lowercase username for admin login"
    )

    password_hash = Column(
        String(255),
        nullable=False,
        comment="Salted password hash"
    )

    email = Column(
        String(255),
        nullable=True,
        comment="Optional contact email"
    )

    role = Column(
        Enum(
            AdminRole,
            native_enum=False,
            length=20,
            values_callable=lambda roles: [role.value for role in roles],
        ),
        default=AdminRole.ADMIN,
        nullable=False,
        comment="Admin role"
    )

    # Status field
    is_active = Column(
        Boolean,
        default=True,
        nullable=False,
        comment="Whether the admin account is active"
    )

    # Timestamps
    last_login = Column(
        DateTime,
        nullable=True,
        comment="When the admin last logged in successfully"
    )

    created_at = Column(
        DateTime,
        default=utcnow,
        nullable=False,
        comment="When the admin account was created"
    )

    updated_at = Column(
        DateTime,
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
        comment="When the admin account was last updated"
    )

    @property
    def password(self):
        raise AttributeError("password is write-only; compare with verify_password()")

    @password.setter
    def password(self, plaintext: str) -> None:
        self.password_hash = hash_password(plaintext)

    def __repr__(self) -> str:
        """String representation of the Admin model."""
        return f"<Admin(id={self.id}, username='{self.username}', role={self.role})>"

    def __str__(self) -> str:
        """Human-readable string representation."""
        return f"Admin: {self.username}"
