# courier_api/config/database.py
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .settings import Settings


def create_db_engine(settings: Settings) -> Engine:
    """Build the pooled engine. Called once per application lifespan."""
    engine_kwargs = {
        "pool_pre_ping": True,
        "pool_recycle": settings.db_pool_recycle,
        "echo": settings.debug
    }

    # SQLite (tests, local runs) uses its own pool class
    if not settings.database_url.startswith("sqlite"):
        engine_kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout
        )

    return create_engine(settings.database_url, **engine_kwargs)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Database dependency
def get_db(request: Request) -> Generator[Session, None, None]:
    """Request-scoped session taken from the pool stored on app.state"""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
