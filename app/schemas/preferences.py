"""Learned preference schemas."""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

TIME_SLOTS = ("morning", "afternoon", "evening")

class InterestPatterns(BaseModel):
    """Interest overlap levels that have historically led to success."""
    minimum_overlap: float
    preferred_overlap: float

class CompatibilityPreference(BaseModel):
    """Compatibility levels that have historically led to success."""
    minimum_compatibility: float
    preferred_compatibility: float

class PreferenceProfile(BaseModel):
    """Preference model derived from a user's interaction history."""
    preferred_age_range: List[float] = Field(
        default_factory=lambda: [22, 35],
        description="Inclusive [low, high] age range"
    )
    successful_interest_patterns: Optional[InterestPatterns] = None
    personality_preferences: Optional[CompatibilityPreference] = None
    active_time_patterns: Dict[str, int] = Field(
        default_factory=lambda: {slot: 0 for slot in TIME_SLOTS},
        description="Count of successful interactions per time of day"
    )
    attachment_style_preferences: Dict[str, float] = Field(default_factory=dict)
    sample_size: int = Field(default=0, ge=0)

    @property
    def most_active_slot(self) -> Optional[str]:
        """Time slot with the most successful interactions, if any."""
        if not any(self.active_time_patterns.values()):
            return None
        return max(TIME_SLOTS, key=lambda slot: self.active_time_patterns.get(slot, 0))
