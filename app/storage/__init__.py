"""Storage package initialization."""

from .base import ProfileStore, InteractionStore, SuccessPatternStore
from .manager import StorageManager, get_storage_manager

__all__ = [
    'ProfileStore',
    'InteractionStore',
    'SuccessPatternStore',
    'StorageManager',
    'get_storage_manager'
]
