"""API endpoints for compatibility scoring."""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from app.api.deps import get_enhancer, get_scorer, get_storage
from app.schemas.interaction import InteractionAction, SuccessMetrics
from app.schemas.matching import EnhancedMatch, MatchScore
from app.services.compatibility import CompatibilityScorer
from app.services.error_handling import ProfileNotFoundError, StorageError
from app.services.preference_learning import MatchEnhancer
from app.storage.manager import StorageManager

logger = logging.getLogger(__name__)

router = APIRouter()

class CompatibilityRequest(BaseModel):
    user_id: str = Field(alias="userId", min_length=1)
    target_user_id: str = Field(alias="targetUserId", min_length=1)

    model_config = ConfigDict(populate_by_name=True)

class CompatibilityResponse(BaseModel):
    metrics: SuccessMetrics
    score: MatchScore

class RankRequest(BaseModel):
    candidate_ids: List[str] = Field(alias="candidateIds")

    model_config = ConfigDict(populate_by_name=True)

@router.post("/compatibility", response_model=CompatibilityResponse)
async def score_compatibility(
    request: CompatibilityRequest,
    storage: StorageManager = Depends(get_storage),
    scorer: CompatibilityScorer = Depends(get_scorer)
):
    """Score the compatibility of two profiles."""
    try:
        profile = await storage.profiles.get_profile(request.user_id)
        target = await storage.profiles.get_profile(request.target_user_id)
    except StorageError as e:
        raise HTTPException(
            status_code=500,
            detail=f"Error loading profiles: {str(e)}"
        )

    missing = [uid for uid, p in ((request.user_id, profile), (request.target_user_id, target)) if p is None]
    if missing:
        raise HTTPException(status_code=404, detail=f"Profile not found: {', '.join(missing)}")

    return {
        "metrics": scorer.success_metrics(profile, target, success_type=InteractionAction.MATCH),
        "score": scorer.match_score(profile, target)
    }

@router.post("/users/{user_id}/matches/rank", response_model=List[EnhancedMatch])
async def rank_matches(
    user_id: str,
    request: RankRequest,
    enhancer: MatchEnhancer = Depends(get_enhancer)
):
    """Rank externally supplied candidates using the user's learned preferences."""
    try:
        return await enhancer.rank_candidates(user_id, request.candidate_ids)
    except ProfileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageError as e:
        raise HTTPException(
            status_code=500,
            detail=f"Error ranking matches: {str(e)}"
        )
