import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from rth_backend.fastapi.core.config import Settings
from rth_backend.fastapi.core.retry import RetryPolicy, linear_backoff
from rth_backend.fastapi.crud.admin import create_admin, get_admin_count
from rth_backend.fastapi.crud.token_blacklist import REVOCATION_TTL
from rth_backend.fastapi.dependencies.database import Database
from rth_backend.security.auth import TokenIssuer

logger = logging.getLogger(__name__)


def seed_initial_admin(database: Database, settings: Settings) -> None:
    """Create the first admin from settings when the admins table is empty."""
    db = database.session()
    try:
        admin_count = get_admin_count(db)
        if admin_count:
            logger.info("Found %d existing admin(s)", admin_count)
            return
        if not settings.INITIAL_ADMIN_PASSWORD:
            logger.warning("No admins exist and INITIAL_ADMIN_PASSWORD is not set; skipping seed")
            return
        admin = create_admin(db, settings.INITIAL_ADMIN_USERNAME, settings.INITIAL_ADMIN_PASSWORD)
        logger.warning("Created initial admin %s; change its password after first login", admin.username)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    # Refuse to start without a signing key
    app.state.token_issuer = TokenIssuer(
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        expires_in=settings.token_expires_delta,
    )
    if settings.token_expires_delta > REVOCATION_TTL:
        logger.warning(
            "JWT_EXPIRES_IN (%s) outlives the %s denylist retention; "
            "revoked tokens may be accepted again once purged",
            settings.JWT_EXPIRES_IN,
            REVOCATION_TTL,
        )

    app.state.retry_policy = RetryPolicy(
        max_attempts=settings.LOOKUP_MAX_ATTEMPTS,
        backoff=linear_backoff(settings.LOOKUP_BACKOFF_SECONDS),
    )

    # Open the database once for the whole process
    database = Database(settings.DB_URL)
    database.create_all()
    app.state.database = database
    logger.info("Database ready (%s mode)", settings.ENV_MODE)

    seed_initial_admin(database, settings)

    yield

    database.dispose()
    logger.info("Database connections closed")
