from typing import Optional

from fastapi import FastAPI

from rth_backend.fastapi.core.config import Settings
from rth_backend.fastapi.core.exceptions import register_exception_handlers
from rth_backend.fastapi.core.init_settings import global_settings
from rth_backend.fastapi.core.lifespan import lifespan
from rth_backend.fastapi.core.logging_config import setup_logging
from rth_backend.fastapi.core.middleware import setup_cors
from rth_backend.fastapi.core.routers import setup_routers


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or global_settings

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Ruang Terbuka Hijau (RTH) data service for the districts of Bandung",
        lifespan=lifespan,
    )
    app.state.settings = settings

    setup_cors(app, settings)
    register_exception_handlers(app, expose_errors=settings.is_development)
    setup_routers(app)

    return app


setup_logging(global_settings.LOG_LEVEL)
app = create_app()
