"""
Tablemate - Multi-tenant restaurant management API
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
import structlog

from app.config import settings
from app.database import engine, SessionLocal
from app.exceptions import register_exception_handlers
from app.logging_config import configure_logging
from app.middleware import RequestLoggingMiddleware
from app.migrations import check_schema_revision
from app.services.platform import bootstrap_platform
from app.api import auth, profile, categories, menu_items, reservations, orders, users, restaurants, platform, public

configure_logging()

logger = structlog.get_logger()

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Configuration, schema revision and platform bootstrap failures abort
    startup.
    """
    logger.info("Starting Tablemate API", version=VERSION, environment=settings.environment)

    settings.validate_for_startup()
    await check_schema_revision(engine)

    if settings.bootstrap_on_startup:
        async with SessionLocal() as db:
            await bootstrap_platform(db, settings)

    yield

    await engine.dispose()
    logger.info("Shutting down Tablemate API")


# Create FastAPI application
app = FastAPI(
    title="Tablemate",
    description="Multi-tenant restaurant management API",
    version=VERSION,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)


# Health check endpoints
@app.get("/health")
async def health():
    """Basic health check"""
    return {"status": "healthy", "service": "api", "version": VERSION}


@app.get("/health/ready")
async def ready():
    """Readiness check with dependency verification"""
    checks = {}

    # Check database
    try:
        async with SessionLocal() as db:
            await db.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        logger.warning("Readiness check failed", dependency="database", error=str(e))
        checks["database"] = f"failed: {str(e)}"

    all_ok = all(v == "ok" for v in checks.values())

    return {
        "status": "ready" if all_ok else "not_ready",
        "checks": checks,
    }


# Include API routers
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(profile.router, prefix="/profile", tags=["Profile"])
app.include_router(categories.router, prefix="/categories", tags=["Menu"])
app.include_router(menu_items.router, prefix="/menu-items", tags=["Menu"])
app.include_router(reservations.router, prefix="/reservations", tags=["Reservations"])
app.include_router(orders.router, prefix="/orders", tags=["Orders"])
app.include_router(users.router, prefix="/users", tags=["Users"])
app.include_router(restaurants.router, prefix="/restaurants", tags=["Restaurants"])
app.include_router(platform.router, prefix="/platform", tags=["Platform"])
app.include_router(public.router, prefix="/public/restaurants", tags=["Public"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
