import logging

from fastapi import FastAPI
from contextlib import asynccontextmanager

from app.config.settings import settings
from app.config.database import Base, engine
from app.core.exceptions import register_exception_handlers
from app.core.middleware import setup_middleware
from app.api.v1.router import api_router
from app.shared.database import models  # noqa: F401  registers tables on Base

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("🚀 Retail Back-Office API starting...")
    logger.info(f"📍 Version: {settings.version}")
    logger.info(f"🌍 Environment: {'Development' if settings.debug else 'Production'}")

    if settings.auto_migrate:
        Base.metadata.create_all(bind=engine)
        logger.info("Database migrations completed")

    yield

    # Shutdown
    logger.info("🛑 Retail Back-Office API shutting down...")
    engine.dispose()

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Catalog, checkout and sales reporting for a retail back office",
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan
)

# Setup middleware and error mapping
setup_middleware(app)
register_exception_handlers(app)

# Include routers
app.include_router(api_router)

# Root endpoint
@app.get("/")
async def root():
    return {
        "message": "Retail Back-Office API",
        "version": settings.version,
        "commit": settings.git_commit or "unknown",
        "status": "running",
        "api": "/api/v1"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
