"""
Podium FastAPI Application
Main entry point for the application
"""

import asyncio
import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from sqlalchemy.exc import SQLAlchemyError

from podium import __version__
from podium.api.health import router as health_router
from podium.api.v1.admin import router as admin_router
from podium.api.v1.auth import router as auth_router
from podium.api.v1.betting import router as betting_router
from podium.api.v1.photos import router as photos_router
from podium.api.v1.profile import router as profile_router
from podium.api.v1.schedule import router as schedule_router
from podium.core.config import settings
from podium.core.errors import PodiumError
from podium.core.log_config import configure_logging
from podium.core.metrics import ACTIVE_CONNECTIONS, REQUEST_COUNT, REQUEST_DURATION
from podium.core.redis_client import redis_client
from podium.db.migrations import upgrade_to_head
from podium.middleware.rate_limit import RateLimitMiddleware

configure_logging()
logger = logging.getLogger(__name__)

# Sentry integration
if settings.sentry_dsn:
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        integrations=[
            FastApiIntegration(),
            SqlalchemyIntegration(),
        ],
        traces_sample_rate=0.1,
        environment=settings.app_env,
    )

# Create FastAPI app instance
app = FastAPI(
    title=f"{settings.app_name} API",
    description="Events, leaderboard and virtual-currency betting ledger",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)


@app.on_event("startup")
async def startup_event():
    """Run database migrations on startup"""
    if not settings.run_migrations_on_startup:
        return
    try:
        await asyncio.to_thread(upgrade_to_head)
    except Exception as e:
        logger.error(f"Migration error (continuing anyway): {e}")


@app.exception_handler(PodiumError)
async def podium_error_handler(request: Request, exc: PodiumError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "code": "internal_error"}
    )


# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Rate limiting is a no-op without a Redis client
app.add_middleware(RateLimitMiddleware, redis_client=redis_client)


# Add metrics middleware
@app.middleware("http")
async def metrics_middleware(request: Request, call_next):
    start_time = time.time()
    ACTIVE_CONNECTIONS.inc()
    response = None

    try:
        response = await call_next(request)
        return response
    finally:
        duration = time.time() - start_time
        ACTIVE_CONNECTIONS.dec()

        # Label by route template so path ids do not explode cardinality
        route = request.scope.get("route")
        endpoint = getattr(route, "path", request.url.path)
        REQUEST_COUNT.labels(
            method=request.method,
            endpoint=endpoint,
            status=response.status_code if response else 500
        ).inc()
        REQUEST_DURATION.labels(
            method=request.method,
            endpoint=endpoint
        ).observe(duration)


@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint"""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


# Include routers
app.include_router(health_router, prefix=settings.api_v1_prefix, tags=["health"])
app.include_router(auth_router, prefix=settings.api_v1_prefix, tags=["authentication"])
app.include_router(profile_router, prefix=settings.api_v1_prefix, tags=["profile"])
app.include_router(photos_router, prefix=settings.api_v1_prefix, tags=["photos"])
app.include_router(schedule_router, prefix=settings.api_v1_prefix, tags=["schedule"])
app.include_router(betting_router, prefix=settings.api_v1_prefix, tags=["betting"])
app.include_router(admin_router, prefix=settings.api_v1_prefix, tags=["admin"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "podium.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
