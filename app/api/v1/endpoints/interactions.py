"""API endpoints for recording user interactions."""
import logging
from typing import Dict, Any
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.api.deps import get_recorder
from app.services.error_handling import ValidationError, StorageError
from app.services.interaction_tracking import InteractionRecorder

logger = logging.getLogger(__name__)

router = APIRouter()

class TrackInteractionRequest(BaseModel):
    # Left untyped so the recorder owns validation of the event itself
    interaction: Dict[str, Any]

class TrackInteractionResponse(BaseModel):
    success: bool

@router.post("", response_model=TrackInteractionResponse)
async def record_interaction(
    request: TrackInteractionRequest,
    recorder: InteractionRecorder = Depends(get_recorder)
):
    """
    Record an interaction between two users.

    Success-pattern enrichment for matches and messages is best-effort and
    never affects the response.

    Args:
        request: Body holding the interaction (userId, targetUserId, action,
            timestamp and optional contextData)
    """
    try:
        await recorder.record(request.interaction)
        return {"success": True}
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail={"error": str(e), "errors": e.errors}
        )
    except StorageError as e:
        raise HTTPException(
            status_code=500,
            detail=f"Error recording interaction: {str(e)}"
        )
