# courier_api/main.py
import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager

from courier_api.config.settings import settings
from courier_api.config.database import create_db_engine, create_session_factory
from courier_api.core.middleware import setup_middleware
from courier_api.core.handlers import setup_exception_handlers
from courier_api.api.router import api_router

logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: one pool per application instance
    engine = create_db_engine(settings)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    logger.info("🚀 Courier Gateway API Starting...")
    logger.info(f"📍 Version: {settings.version}")
    logger.info(f"🌍 Environment: {'Development' if settings.debug else 'Production'}")
    logger.info(f"🗄️  Database: {settings.database_host} (pool size {settings.db_pool_size})")

    yield

    # Shutdown
    engine.dispose()
    logger.info("🛑 Courier Gateway API Shutting down...")

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="HTTP gateway to the courier database's stored procedures, functions and reports",
    lifespan=lifespan
)

setup_middleware(app)
setup_exception_handlers(app)

app.include_router(api_router, prefix=settings.api_prefix)

# Root endpoint
@app.get("/")
async def root():
    return {
        "message": "🚀 Courier Gateway API",
        "version": settings.version,
        "status": "running",
        "environment": "production" if not settings.debug else "development",
        "docs": "/docs",
        "api": settings.api_prefix
    }

@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "version": settings.version,
        "app": settings.app_name,
        "environment": "production" if not settings.debug else "development"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "courier_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
