"""Interaction and success-pattern schemas."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

class InteractionAction(str, Enum):
    """Actions a user can take on another user's profile."""
    VIEW = "view"
    LIKE = "like"
    PASS = "pass"
    SUPER_LIKE = "super_like"
    MATCH = "match"
    MESSAGE = "message"

# Actions counted as positive signal when deriving preferences
SUCCESSFUL_ACTIONS = frozenset({
    InteractionAction.LIKE,
    InteractionAction.SUPER_LIKE,
    InteractionAction.MATCH,
    InteractionAction.MESSAGE,
})

# Actions that produce a success pattern snapshot
SUCCESS_PATTERN_ACTIONS = frozenset({
    InteractionAction.MATCH,
    InteractionAction.MESSAGE,
})

class InteractionEvent(BaseModel):
    """Immutable record of one user action.

    Accepts both the wire names (``userId``, ``targetUserId``, ``contextData``)
    and the storage names.
    """
    id: Optional[int] = None
    user_id: str = Field(alias="userId", min_length=1)
    target_user_id: str = Field(alias="targetUserId", min_length=1)
    action: InteractionAction
    timestamp: datetime
    context_data: Dict[str, Any] = Field(default_factory=dict, alias="contextData")

    model_config = ConfigDict(populate_by_name=True, from_attributes=True, frozen=True)

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Naive timestamps are taken to be UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

class SuccessMetrics(BaseModel):
    """Attribute compatibility snapshot taken at the moment of success."""
    age_difference: int = Field(ge=0)
    interest_overlap: float = Field(ge=0.0, le=1.0)
    personality_compatibility: float = Field(ge=0.0, le=1.0)
    location_distance: float = Field(ge=0.0, description="Distance in miles")
    attachment_compatibility: float = Field(ge=0.0, le=1.0)
    interaction_time: datetime
    success_type: InteractionAction

    model_config = ConfigDict(frozen=True)

class SuccessPattern(BaseModel):
    """Persisted success pattern for a user/target pair."""
    id: Optional[int] = None
    user_id: str
    target_user_id: str
    success_metrics: Dict[str, Any]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)

    def metric(self, name: str) -> Optional[float]:
        """Return a numeric success metric, or None if it was not recorded."""
        value = (self.success_metrics or {}).get(name)
        if value is None or isinstance(value, bool):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None
