"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS)
and exception handlers, and includes all API routers.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from opsagent.core.logging_config import get_logger, setup_logging

from .api.v1 import health, plans
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .services.agent import get_agent_service, shutdown_agent_service

setup_logging(settings.logging)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Builds the agent service on startup and releases any pending step work on
    shutdown without emitting further events.
    """
    logger.info("Starting up OpsAgent Server...")
    get_agent_service()

    yield

    logger.info("Shutting down OpsAgent Server...")
    await shutdown_agent_service()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    OpsAgent Server API

    Submit natural-language DevOps requests, follow the generated plan as it runs,
    and approve or reject sensitive steps.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)

app.include_router(health.router, tags=["health"])
app.include_router(plans.router, prefix=f"{constant.API_V1_STR}/plans", tags=["plans"])


def run() -> None:
    """Run the server with uvicorn using the configured host and port."""
    import uvicorn

    uvicorn.run(app, host=settings.server_host, port=settings.server_port)


if __name__ == "__main__":
    run()
