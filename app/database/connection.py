"""Database connection and session management."""

from contextlib import contextmanager
import logging
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.exc import SQLAlchemyError

from app.config import get_settings
from .base import Base

logger = logging.getLogger(__name__)

def get_engine(database_url: str = None) -> Engine:
    """Create SQLAlchemy engine with configuration."""
    settings = get_settings()
    url = database_url or settings.DATABASE_URL

    if url.startswith("sqlite"):
        # SQLite connections are shared across FastAPI's worker threads
        return create_engine(url, connect_args={"check_same_thread": False})

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW
    )

# Create engine and session factory
engine = get_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def init_db(bind: Engine = None) -> None:
    """Initialize database schema."""
    # Register models on the metadata before creating tables
    import app.models  # noqa: F401

    try:
        Base.metadata.create_all(bind=bind or engine)
        logger.info("Database schema created successfully")
    except SQLAlchemyError as e:
        logger.error(f"Error creating database schema: {str(e)}")
        raise

@contextmanager
def db_session(session_factory: sessionmaker = None):
    """Context manager for database sessions."""
    session = (session_factory or SessionLocal)()
    try:
        yield session
        session.commit()
    except Exception as e:
        session.rollback()
        logger.error(f"Database session error: {str(e)}")
        raise
    finally:
        session.close()
