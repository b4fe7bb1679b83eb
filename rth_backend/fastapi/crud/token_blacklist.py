"""
Token revocation list operations.

Revoked tokens stay rejected for as long as their row exists. Rows carry a
fixed 24 hour ``expires_at`` regardless of the token's own expiry, and are
only removed by ``purge_expired`` from the maintenance script.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rth_backend.fastapi.core.utils import utcnow
from rth_backend.fastapi.models.token_blacklist import TokenBlacklist

logger = logging.getLogger(__name__)

REVOCATION_TTL = timedelta(hours=24)


class TokenBlacklistCRUD:
    """Denylist of bearer tokens invalidated before their natural expiry."""

    def __init__(self, db: Session):
        self.db = db

    def revoke(self, token: str, now: Optional[datetime] = None) -> TokenBlacklist:
        """
        Add ``token`` to the denylist; revoking it twice is a no-op.

        Returns:
            The denylist entry for the token
        """
        existing = self._get_entry(token)
        if existing:
            return existing

        entry = TokenBlacklist(token=token, expires_at=(now or utcnow()) + REVOCATION_TTL)
        self.db.add(entry)
        try:
            self.db.commit()
        except IntegrityError:
            # A concurrent logout with the same token already inserted it
            self.db.rollback()
            return self._get_entry(token)
        self.db.refresh(entry)

        logger.info("Token revoked until %s", entry.expires_at.isoformat())
        return entry

    def is_revoked(self, token: str) -> bool:
        # Expired rows still count until the purge removes them
        return self._get_entry(token) is not None

    def purge_expired(self, now: Optional[datetime] = None, dry_run: bool = False) -> int:
        """
        Delete entries whose ``expires_at`` has passed.

        Args:
            now: Reference time, defaults to the current UTC time
            dry_run: Count matching entries without deleting them

        Returns:
            Number of entries purged (or that would be purged)
        """
        query = self.db.query(TokenBlacklist).filter(TokenBlacklist.expires_at < (now or utcnow()))
        if dry_run:
            return query.count()

        purged = query.delete(synchronize_session=False)
        self.db.commit()
        logger.info("Purged %d expired denylist entries", purged)
        return purged

    def _get_entry(self, token: str) -> Optional[TokenBlacklist]:
        return self.db.query(TokenBlacklist).filter(TokenBlacklist.token == token).first()


# Convenience functions
def revoke_token(db: Session, token: str) -> TokenBlacklist:
    return TokenBlacklistCRUD(db).revoke(token)


def is_token_revoked(db: Session, token: str) -> bool:
    return TokenBlacklistCRUD(db).is_revoked(token)
