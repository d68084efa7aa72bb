"""
Main FastAPI application.

This is the entry point for the API server:
    uvicorn taskboard.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from taskboard import __version__
from taskboard.core.config import settings
from taskboard.db.session import create_all_tables, engine
from taskboard.errors import register_error_handlers
from taskboard.logging_setup import setup_logging
from taskboard.routers import auth, health, task

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for the FastAPI app.
    
    - On startup: configure logging, optionally create tables
    - On shutdown: release database connections
    """
    setup_logging(level=settings.LOG_LEVEL, log_dir=settings.LOG_DIR)
    logger.info("Starting %s %s", settings.APP_NAME, __version__)
    
    if settings.AUTO_CREATE_TABLES:
        await create_all_tables()
        logger.info("Database tables ensured")
    
    yield
    
    logger.info("Shutting down %s", settings.APP_NAME)
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    description="Task assignment tracker API",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router, tags=["Health"])
app.include_router(auth.router)
app.include_router(task.router)


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint - redirects to the interactive API docs."""
    return RedirectResponse(url="/docs", status_code=303)
