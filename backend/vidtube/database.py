from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from vidtube.config import Settings

# Base class for models
Base = declarative_base()


def build_engine(settings: Settings) -> Engine:
    """Create the SQLAlchemy engine for the configured database."""
    if settings.database_url.startswith("sqlite"):
        # SQLite (tests, local prototyping) - one shared connection
        return create_engine(
            settings.database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False,
        )

    if settings.is_production:
        # Production - modest pool behind a connection pooler
        return create_engine(
            settings.database_url,
            pool_pre_ping=True,
            pool_size=5,  # allow parallel requests
            max_overflow=10,  # allow spike load briefly
            pool_timeout=30,  # timeout before erroring
            pool_recycle=1800,  # recycle every 30min to avoid stale connections
            echo=False,
        )

    # Local development - Larger pool
    return create_engine(
        settings.database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        echo=settings.debug,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    """Create session factory bound to an engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request):
    """Dependency for getting database session."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
