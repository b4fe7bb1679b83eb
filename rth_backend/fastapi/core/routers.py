from fastapi import FastAPI
from rth_backend.fastapi.api.v1.endpoints import auth, health, rth_kecamatan

def setup_routers(app: FastAPI):
    # Health check (supervisory, outside the API prefix)
    app.include_router(health.router, prefix="", tags=["health"])

    # Admin authentication and management routes
    app.include_router(auth.router, prefix="/api/auth", tags=["admin-authentication"])

    # District RTH data routes (public listing/export + admin management)
    app.include_router(rth_kecamatan.router, prefix="/api/rth-kecamatan", tags=["rth-kecamatan"])
