import logging

from fastapi.middleware.cors import CORSMiddleware

from rth_backend.fastapi.core.config import Settings

logger = logging.getLogger(__name__)


def setup_cors(app, settings: Settings):
    # Define allowed origins from settings
    origins = [
        settings.CLIENT_URL,
        "http://localhost",
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    # Add additional origins from settings
    if settings.ADDITIONAL_CORS_ORIGINS:
        origins.extend([origin.strip() for origin in settings.ADDITIONAL_CORS_ORIGINS.split(",")])

    # Remove empty strings and duplicates
    origins = sorted(set(origin for origin in origins if origin))

    logger.info("CORS allowed origins: %s", origins)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
    )
