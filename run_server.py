#!/usr/bin/env python3
"""
Run the RTH Bandung API with uvicorn.

Auto-reload is only enabled in development mode.
"""
import uvicorn

from rth_backend.fastapi.core.init_settings import global_settings

if __name__ == "__main__":
    uvicorn.run(
        "rth_backend.fastapi.main:app",
        host="0.0.0.0",
        port=8000,
        reload=global_settings.is_development,
        log_level=global_settings.LOG_LEVEL.lower()
    )
