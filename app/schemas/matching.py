"""Match score schemas."""

from typing import Optional
from pydantic import BaseModel, Field

class MatchScore(BaseModel):
    """Weighted compatibility score for a profile pair (percentages)."""
    match_score: int = Field(ge=0, le=100)
    interests_score: int
    personality_score: int
    location_score: int
    attachment_score: Optional[int] = None

class EnhancedMatch(BaseModel):
    """Match score blended with the learned preference model."""
    user_id: str
    match_score: int = Field(ge=1, le=99)
    base_score: int
    ml_score: float = Field(ge=0.0, le=100.0)
    ml_confidence: float = Field(ge=0.0, le=0.95)
    ml_enhanced: bool = True
