"""
Maintenance script that removes expired entries from the token denylist.

The API never deletes denylist rows itself; schedule this script (e.g. daily
cron) to keep the table small. Entries are only removed once their
``expires_at`` has passed.

Run with: python scripts/purge_token_blacklist.py [--dry-run]
"""

import sys
import os

dry_run = "--dry-run" in sys.argv

# Add parent directory to path for imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from rth_backend.fastapi.core.config import get_settings
from rth_backend.fastapi.crud.token_blacklist import TokenBlacklistCRUD
from rth_backend.fastapi.dependencies.database import Database


def purge_token_blacklist(database_url: str, dry_run: bool = False) -> int:
    """
    Purge expired denylist entries.

    Args:
        database_url: SQLAlchemy URL of the API database
        dry_run: If True, only count the entries that would be removed

    Returns:
        Number of entries purged (or that would be purged)
    """
    database = Database(database_url)
    db = database.session()
    try:
        return TokenBlacklistCRUD(db).purge_expired(dry_run=dry_run)
    finally:
        db.close()
        database.dispose()


if __name__ == "__main__":
    settings = get_settings(os.environ.get("ENV_MODE", "dev"))

    count = purge_token_blacklist(settings.DB_URL, dry_run=dry_run)
    if dry_run:
        print(f"🔍 DRY RUN: {count} expired denylist entries would be purged")
    else:
        print(f"✅ Purged {count} expired denylist entries")
