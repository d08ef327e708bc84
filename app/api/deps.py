"""FastAPI dependencies wiring services to the configured storage."""
from fastapi import Depends

from app.config import get_settings
from app.services.compatibility import CompatibilityScorer
from app.services.interaction_tracking import InteractionRecorder
from app.services.preference_learning import MatchEnhancer, PreferenceModelDeriver
from app.storage.manager import StorageManager, get_storage_manager

def get_storage() -> StorageManager:
    """Get the storage manager."""
    return get_storage_manager()

def get_scorer() -> CompatibilityScorer:
    """Get a compatibility scorer using the configured default distance."""
    return CompatibilityScorer(default_distance=get_settings().DEFAULT_DISTANCE_MILES)

def get_recorder(
    storage: StorageManager = Depends(get_storage),
    scorer: CompatibilityScorer = Depends(get_scorer)
) -> InteractionRecorder:
    """Get an interaction recorder."""
    return InteractionRecorder(storage, scorer=scorer)

def get_deriver(storage: StorageManager = Depends(get_storage)) -> PreferenceModelDeriver:
    """Get a preference model deriver."""
    return PreferenceModelDeriver(storage)

def get_enhancer(
    storage: StorageManager = Depends(get_storage),
    scorer: CompatibilityScorer = Depends(get_scorer),
    deriver: PreferenceModelDeriver = Depends(get_deriver)
) -> MatchEnhancer:
    """Get a match enhancer."""
    return MatchEnhancer(storage, scorer=scorer, deriver=deriver)
