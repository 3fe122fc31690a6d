"""
Standalone server host for the broker directory.

``create_app`` is shared with the lightweight per-endpoint hosts in
``broker_directory.functions``; they differ only in which routers they
mount and which origins CORS lets through.  Run locally with::

    uvicorn broker_directory.main:app --reload
"""
import logging

import uvicorn
from fastapi import APIRouter, FastAPI

from .config import API_VERSION, ENVIRONMENT, HOST, LOG_FORMAT, LOG_LEVEL, PORT, PROJECT_NAME, cors_origins
from .cors import DirectoryCORSMiddleware, route_methods
from .errors import catch_unhandled_errors, register_error_handlers
from .logging_config import setup_logging
from .rate_limit import limiter
from .routers import health, providers

logger = logging.getLogger(__name__)


def create_app(*routers: APIRouter, allow_origins: list[str] | None = None, title: str = PROJECT_NAME) -> FastAPI:
    setup_logging(LOG_LEVEL, json_format=LOG_FORMAT == "json")

    app = FastAPI(title=title, version=API_VERSION)
    app.state.limiter = limiter
    register_error_handlers(app)

    for router in routers:
        app.include_router(router)

    app.middleware("http")(catch_unhandled_errors)

    # added last so it wraps everything, error responses included
    app.add_middleware(
        DirectoryCORSMiddleware,
        allow_methods_by_path=route_methods(routers),
        allow_origins=allow_origins if allow_origins is not None else ["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    return app


app = create_app(
    providers.filters_router,
    providers.search_router,
    health.router,
    allow_origins=cors_origins(),
)


def run() -> None:
    logger.info("starting %s on %s:%s (%s)", PROJECT_NAME, HOST, PORT, ENVIRONMENT)
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    run()
