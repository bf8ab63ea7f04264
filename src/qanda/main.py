"""QandA FastAPI Application Entry Point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.responses import RedirectResponse
from loguru import logger

from qanda import __version__
from qanda.config import settings
from qanda.db import create_tables, engine
from qanda.exception_handlers import register_exception_handlers
from qanda.middleware import configure_logging, register_middleware
from qanda.routers import answers_router, auth_router, questions_router
from qanda.schemas import HealthResponse


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager."""
    configure_logging()
    logger.info(
        "Application starting",
        environment=settings.environment,
        debug=settings.debug,
    )
    if settings.auto_create_tables:
        await create_tables()
    yield
    await engine.dispose()
    logger.info("Application shutting down")


app = FastAPI(
    title="QandA",
    description="Question & Answer web application",
    version=__version__,
    lifespan=lifespan,
)

register_middleware(app)

register_exception_handlers(app)

# Register routers
app.include_router(auth_router)
app.include_router(questions_router)
app.include_router(answers_router)


@app.get("/", include_in_schema=False)
async def home() -> RedirectResponse:
    return RedirectResponse("/questions", status_code=status.HTTP_303_SEE_OTHER)


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="Health check endpoint",
)
async def health_check() -> HealthResponse:
    """Health check endpoint for container orchestration."""
    return HealthResponse(
        status="healthy",
        service="qanda",
        version=__version__,
    )
