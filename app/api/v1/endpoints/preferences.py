"""API endpoints for learned user preferences."""
import logging
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from app.api.deps import get_deriver
from app.schemas.preferences import PreferenceProfile
from app.services.error_handling import StorageError
from app.services.preference_learning import PreferenceModelDeriver

logger = logging.getLogger(__name__)

router = APIRouter()

class PreferencesRequest(BaseModel):
    user_id: str = Field(alias="userId", min_length=1)

    model_config = ConfigDict(populate_by_name=True)

async def _derive(user_id: str, deriver: PreferenceModelDeriver) -> PreferenceProfile:
    try:
        return await deriver.derive(user_id)
    except StorageError as e:
        logger.error(f"Error deriving preferences for user {user_id}: {str(e)}")
        raise HTTPException(
            status_code=500,
            detail=f"Error deriving preferences: {str(e)}"
        )

@router.post("/preferences", response_model=PreferenceProfile)
async def derive_user_preferences(
    request: PreferencesRequest,
    deriver: PreferenceModelDeriver = Depends(get_deriver)
):
    """Derive a user's preferences from their interaction history."""
    return await _derive(request.user_id, deriver)

@router.get("/users/{user_id}/preferences", response_model=PreferenceProfile)
async def get_user_preferences(
    user_id: str,
    deriver: PreferenceModelDeriver = Depends(get_deriver)
):
    """Derive a user's preferences from their interaction history."""
    return await _derive(user_id, deriver)
