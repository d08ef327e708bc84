"""Storage manager bundling the stores used by the matching engine."""

import logging
from functools import lru_cache
from sqlalchemy.orm import sessionmaker

from app.config import get_settings
from .base import ProfileStore, InteractionStore, SuccessPatternStore
from .memory import InMemoryProfileStore, InMemoryInteractionStore, InMemorySuccessPatternStore
from .sql import SQLProfileStore, SQLInteractionStore, SQLSuccessPatternStore

logger = logging.getLogger(__name__)

class StorageManager:
    """Holds the profile, interaction and success-pattern stores."""

    def __init__(
        self,
        profiles: ProfileStore,
        interactions: InteractionStore,
        success_patterns: SuccessPatternStore
    ):
        self.profiles = profiles
        self.interactions = interactions
        self.success_patterns = success_patterns

    @classmethod
    def sql(cls, session_factory: sessionmaker) -> "StorageManager":
        """Build a manager whose stores share one session factory."""
        return cls(
            profiles=SQLProfileStore(session_factory),
            interactions=SQLInteractionStore(session_factory),
            success_patterns=SQLSuccessPatternStore(session_factory)
        )

    @classmethod
    def in_memory(cls) -> "StorageManager":
        """Build a manager with empty in-memory stores."""
        return cls(
            profiles=InMemoryProfileStore(),
            interactions=InMemoryInteractionStore(),
            success_patterns=InMemorySuccessPatternStore()
        )

@lru_cache()
def get_storage_manager() -> StorageManager:
    """Get the storage manager for the configured backend."""
    settings = get_settings()
    if settings.STORAGE_BACKEND == "memory":
        logger.info("Using in-memory storage backend")
        return StorageManager.in_memory()

    from app.database import SessionLocal
    logger.info("Using SQL storage backend")
    return StorageManager.sql(SessionLocal)
