"""
Daily Planner API Server - REST boundary for the scheduling core.

Stateless: every request carries the task collection it is about.

Environment:
- CORS_ORIGINS: comma-separated allowed origins ("*" by default, for dev)
- LOG_LEVEL: root log level (INFO)
- PORT: listen port (8420)
"""
# ruff: noqa: S104
# S104: Development server binding (guarded by __name__ check)

import logging
import os

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.planner_router import router as planner_router
from planner import __version__
from planner.observability import CorrelationIdMiddleware, configure_logging

logger = logging.getLogger(__name__)


def _cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    if raw == "*":
        return ["*"]
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def create_app() -> FastAPI:
    application = FastAPI(
        title="Daily Planner API",
        description="Conflict detection, flexible-task scheduling and daily agenda",
        version=__version__,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    # Added last so it wraps CORS and every log line carries the request id
    application.add_middleware(CorrelationIdMiddleware)
    application.include_router(planner_router, prefix="/api")
    return application


app = create_app()


def main():
    """Run the server."""
    configure_logging(os.environ.get("LOG_LEVEL", "INFO"))
    port = int(os.environ.get("PORT", 8420))
    logger.info("Starting Daily Planner API on port %d", port)
    uvicorn.run(app, host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
