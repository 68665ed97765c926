# This file builds the FastAPI application and registers all API routers.
# It exists so startup behavior, middleware, and error handling are configured in one place.
# The request pipeline is recovery, logging, allowlist, then authentication, ahead of every route.
# Keeping bootstrap logic centralized makes deployment and testing more predictable.

from __future__ import annotations

import logging

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from src.api.api_config import ApiConfig, get_api_config
from src.api.dependencies import get_database_client
from src.api.error_handlers import register_error_handlers
from src.api.middleware import register_middleware
from src.api.routers.actors import router as actors_router
from src.api.routers.films import router as films_router
from src.api.routers.health import router as health_router
from src.common.logging import configure_logging

logger = logging.getLogger(__name__)


def create_app(config: ApiConfig | None = None) -> FastAPI:
    """Create configured FastAPI application instance."""

    configure_logging()
    config = config or get_api_config()

    app = FastAPI(
        title=config.api_name,
        description="REST catalog of films and actors with sorted listings and search.",
        version=config.app_version,
        redoc_url=None,
        openapi_tags=[
            {"name": "film", "description": "Film listing, search, and maintenance."},
            {"name": "actor", "description": "Actors with their filmographies."},
            {"name": "health", "description": "Service liveness, readiness, and version metadata."},
        ],
    )

    register_middleware(app, config)

    # Outside the pipeline so preflight requests are answered before the allowlist.
    if config.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.on_event("startup")
    def startup_checks() -> None:
        try:
            app.state.db_connected_at_startup = get_database_client().can_connect()
        except Exception:
            logger.exception("Database client could not be created at startup")
            app.state.db_connected_at_startup = False

    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(films_router)
    app.include_router(actors_router)

    return app


app = create_app()
