"""
Zealthy Web API - FastAPI application.

Serves the onboarding wizard, the admin panel and the data dashboard.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from onboarding.api import router as onboarding_router
from zealthy import __version__
from zealthy.config import settings
from zealthy.web.admin_routes import router as admin_router
from zealthy.web.data_routes import router as data_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the application and register routers."""
    app = FastAPI(title="Zealthy Onboarding", version=__version__)

    # CORS middleware for the frontend dev server
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(onboarding_router, prefix="/api")
    app.include_router(admin_router, prefix="/api")
    app.include_router(data_router, prefix="/api")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    logger.info(f"Zealthy API ready ({settings.zealthy_env})")
    return app


app = create_app()
