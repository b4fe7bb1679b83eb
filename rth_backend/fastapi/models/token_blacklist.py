"""
Revoked token model.

Entries are written on logout. ``expires_at`` only tells the maintenance
purge when a row may be dropped; it is not consulted by lookups.
"""

from sqlalchemy import Column, DateTime, Integer, String

from rth_backend.fastapi.core.utils import utcnow
from rth_backend.fastapi.dependencies.database import Base


class TokenBlacklist(Base):
    __tablename__ = "token_blacklist"

    id = Column(Integer, primary_key=True, autoincrement=True)

    token = Column(
        String(1024),
        unique=True,
        nullable=False,
        index=True,
        comment="Revoked bearer token"
    )

    expires_at = Column(
        DateTime,
        nullable=False,
        index=True,
        comment="When the entry may be purged"
    )

    created_at = Column(
        DateTime,
        default=utcnow,
        nullable=False,
        comment="When the token was revoked"
    )

    def __repr__(self) -> str:
        return f"<TokenBlacklist(id={self.id}, expires_at={self.expires_at})>"
