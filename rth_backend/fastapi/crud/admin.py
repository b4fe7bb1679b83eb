"""
Admin CRUD operations.

This module is the credential store: it looks up, creates and updates
administrator accounts. Usernames are normalized to lowercase before every
lookup and write.
"""

import logging
from typing import Optional, Union
from uuid import UUID

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from rth_backend.fastapi.core.exceptions import DuplicateUsernameError, ValidationError
from rth_backend.fastapi.core.retry import RetryPolicy
from rth_backend.fastapi.core.utils import normalize_username, utcnow
from rth_backend.fastapi.models.admin import Admin, AdminRole
from rth_backend.security.password import MIN_PASSWORD_LENGTH, verify_password

logger = logging.getLogger(__name__)


class AdminCRUD:
    """CRUD operations for Admin model."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def create_admin(
        self,
        username: str,
        password: str,
        email: Optional[str] = None,
        role: Optional[Union[AdminRole, str]] = None,
    ) -> Admin:
        """
        Create a new admin user.

        Args:
            username: Login name, stored lowercase
            password: Plaintext password, stored only as a salted hash
            email: Optional contact email
            role: Admin role, ``admin`` when omitted

        Returns:
            Created Admin instance

        Raises:
            ValidationError: If username or password is missing, or the password is too short
            DuplicateUsernameError: If the username exists, compared case-insensitively
        """
        normalized = normalize_username(username)
        if not normalized or not password:
            raise ValidationError("Username dan password harus diisi")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password minimal {MIN_PASSWORD_LENGTH} karakter")

        if self.get_admin_by_username(normalized):
            raise DuplicateUsernameError("Username sudah digunakan")

        db_admin = Admin(
            username=normalized,
            email=email or None,
            role=AdminRole(role) if role else AdminRole.ADMIN,
            is_active=True,
        )
        db_admin.password = password

        self.db.add(db_admin)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race against a concurrent insert of the same username
            self.db.rollback()
            raise DuplicateUsernameError("Username sudah digunakan")
        self.db.refresh(db_admin)

        logger.info("Created admin %s with role %s", db_admin.username, db_admin.role.value)
        return db_admin

    def get_admin(self, admin_id: Union[UUID, str]) -> Optional[Admin]:
        """
        Get admin by ID.

        Args:
            admin_id: Admin UUID (a malformed string yields None)

        Returns:
            Admin instance or None if not found
        """
        if not isinstance(admin_id, UUID):
            try:
                admin_id = UUID(str(admin_id))
            except ValueError:
                return None
        return self.db.query(Admin).filter(Admin.id == admin_id).first()

    def get_admin_by_username(self, username: str) -> Optional[Admin]:
        """
        Get admin by username, case-insensitively.

        Args:
            username: Admin username in any case, surrounding whitespace ignored

        Returns:
            Admin instance or None if not found
        """
        normalized = normalize_username(username)
        if not normalized:
            return None
        return self.db.query(Admin).filter(Admin.username == normalized).first()

    def verify_password(self, admin: Admin, plaintext: str) -> bool:
        return verify_password(plaintext, admin.password_hash)

    def change_password(self, admin: Admin, new_password: str) -> Admin:
        """
        Replace the stored hash with a hash of ``new_password``.

        Raises:
            ValidationError: If the new password is too short; the stored hash is left unchanged
        """
        if not new_password or len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password baru minimal {MIN_PASSWORD_LENGTH} karakter")

        admin.password = new_password
        self.db.commit()
        self.db.refresh(admin)

        logger.info("Password changed for admin %s", admin.username)
        return admin

    def update_last_login(self, admin: Admin) -> Admin:
        admin.last_login = utcnow()
        self.db.commit()
        self.db.refresh(admin)
        return admin

    def count_admins(self, include_inactive: bool = True) -> int:
        """
        Count total number of admins.

        Args:
            include_inactive: Whether to include inactive admins

        Returns:
            Total count of admins
        """
        query = self.db.query(Admin)

        if not include_inactive:
            query = query.filter(Admin.is_active.is_(True))

        return query.count()


# Convenience functions
def create_admin(
    db: Session,
    username: str,
    password: str,
    email: Optional[str] = None,
    role: Optional[Union[AdminRole, str]] = None,
) -> Admin:
    """Create a new admin."""
    return AdminCRUD(db).create_admin(username, password, email=email, role=role)


def get_admin_by_username(db: Session, username: str) -> Optional[Admin]:
    """Get admin by username."""
    return AdminCRUD(db).get_admin_by_username(username)


def get_admin(db: Session, admin_id: Union[UUID, str]) -> Optional[Admin]:
    """Get admin by ID."""
    return AdminCRUD(db).get_admin(admin_id)


def get_admin_count(db: Session, include_inactive: bool = True) -> int:
    """Get total count of admins."""
    return AdminCRUD(db).count_admins(include_inactive=include_inactive)


async def find_admin_with_retry(db: Session, username: str, policy: RetryPolicy) -> Optional[Admin]:
    """
    Look up an admin by username, retrying transient store failures.

    A missing admin is a normal ``None`` result and is not retried.

    Raises:
        PersistenceError: If the store is still unavailable after the last attempt
    """

    def lookup() -> Optional[Admin]:
        try:
            return AdminCRUD(db).get_admin_by_username(username)
        except OperationalError:
            db.rollback()
            raise

    return await policy.run(lookup)
