"""Database package initialization."""

from .base import Base
from .connection import get_engine, init_db, db_session, engine, SessionLocal

__all__ = [
    'Base',
    'get_engine',
    'init_db',
    'db_session',
    'engine',
    'SessionLocal'
]
