"""MoneyMate analytics API: main entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from app.config import settings
from app.core.cache import TTLCache
from app.core.database import async_session_factory, engine
from app.core.logging import configure_logging
from app.core.middleware import RequestLoggingMiddleware

configure_logging()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    # Startup
    logger.info("Starting MoneyMate API", env=settings.app_env)
    yield
    # Shutdown
    logger.info("Shutting down MoneyMate API")
    app.state.cache.clear()
    await engine.dispose()


app = FastAPI(
    title="MoneyMate API",
    debug=settings.app_debug,
    description="Personal finance analytics: breakdowns, trends, reports and savings forecasts",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    redirect_slashes=False,
)

# Result cache for dashboard endpoints; invalidated on transaction writes
app.state.cache = TTLCache(default_ttl=settings.dashboard_cache_ttl_seconds)

# ── Middleware ─────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)


# ── Health Check ──────────────────────────────────
@app.get("/health", tags=["system"])
async def health_check():
    """Liveness probe: returns healthy if the process is running."""
    return {"status": "healthy", "version": "0.1.0"}


@app.get("/ready", tags=["system"])
async def readiness_check():
    """Readiness probe: checks DB connectivity."""
    checks = {"database": "unknown", "api": "ok"}
    try:
        async with async_session_factory() as session:
            await session.execute(text("SELECT 1"))
            checks["database"] = "ok"
    except Exception as e:
        logger.warning("Readiness check failed", error=str(e))
        checks["database"] = "error"
        return {"status": "degraded", "checks": checks}

    return {"status": "ready", "checks": checks}


# ── API Routes ────────────────────────────────────
from app.api.v1 import analytics, dashboard, transactions, users  # noqa: E402

app.include_router(users.router, prefix="/api/v1/users", tags=["users"])
app.include_router(transactions.router, prefix="/api/v1/transactions", tags=["transactions"])
app.include_router(analytics.router, prefix="/api/v1/analytics", tags=["analytics"])
app.include_router(dashboard.router, prefix="/api/v1/dashboard", tags=["dashboard"])
