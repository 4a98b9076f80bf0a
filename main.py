"""
Main FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logfire

from config import settings, redis_settings
from database import (
    DatabaseError,
    ShutdownError,
    check_db_connection,
    close_db,
    close_redis,
    get_db_info,
    get_redis_manager,
    init_db,
    init_redis,
)
from observability.logfire_config import LogfireConfig


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    The database must be reachable before the first request is served; a
    failure here aborts startup. Redis is optional.
    """
    # Initialize Logfire first so we can use structured logging
    LogfireConfig.initialize(token=settings.logfire_token, log_level=settings.log_level)

    logfire.info(
        "Starting Blog API Server",
        environment=settings.environment,
        debug=settings.debug,
    )

    try:
        init_db()
    except DatabaseError as e:
        logfire.error("Failed to connect to database", error=str(e))
        raise

    if redis_settings.redis_enabled:
        # The cache is optional: any cache lifecycle error leaves the database up
        try:
            init_redis()
        except DatabaseError as e:
            logfire.warning(
                "Failed to connect to redis, continuing without cache",
                address=redis_settings.address,
                error=str(e),
            )

    logfire.info("Blog API Server startup complete")

    yield

    # Shutdown: report failures but never block exit
    logfire.info("Shutting down Blog API Server")
    try:
        close_redis()
    except ShutdownError as e:
        logfire.error("Redis shutdown failed", error=str(e))
    try:
        close_db()
    except ShutdownError as e:
        logfire.error("Database shutdown failed", error=str(e))
    logfire.info("Blog API Server exited")


# Initialize FastAPI app
app = FastAPI(
    title="Blog API",
    description="Backend API for the blog - articles and users",
    version="1.0.0",
    lifespan=lifespan,
    debug=settings.debug,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Health Check Endpoints
# ============================================================================

@app.get("/health", tags=["Health"])
async def health_check() -> Dict[str, str]:
    """
    Health check endpoint for load balancers and monitoring.

    Returns:
        dict: Health status of the application, database and cache
    """
    db_connected = check_db_connection()

    return {
        "status": "healthy" if db_connected else "degraded",
        "service": "blog-api",
        "version": "1.0.0",
        "database": "connected" if db_connected else "disconnected",
        "cache": get_redis_manager().state.value,
        "environment": settings.environment,
    }


@app.get("/health/database", tags=["Health"])
async def database_health() -> dict:
    """Detailed database status including pool counters."""
    return get_db_info()


@app.get("/", tags=["Root"])
async def root() -> Dict[str, str]:
    """
    Root endpoint - API information.

    Returns:
        dict: Basic API information
    """
    return {
        "name": "Blog API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )
