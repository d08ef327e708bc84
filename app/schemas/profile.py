"""Profile schemas consumed by the matching engine."""

from datetime import date
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

class AttachmentStyle(str, Enum):
    """Attachment style classification."""
    SECURE = "secure"
    ANXIOUS = "anxious"
    AVOIDANT = "avoidant"
    FEARFUL = "fearful"

class PersonalityTrait(BaseModel):
    """Named personality trait score."""
    name: str
    value: float = Field(ge=0.0, le=100.0)

    model_config = ConfigDict(from_attributes=True, frozen=True)

class Profile(BaseModel):
    """Read-only view of a user profile with its interests and traits."""
    id: str
    birth_date: Optional[date] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    bio: Optional[str] = None
    interests: List[str] = Field(
        default_factory=list,
        description="Names of the interests tagged on the profile"
    )
    personality_traits: List[PersonalityTrait] = Field(default_factory=list)
    attachment_style: Optional[AttachmentStyle] = None

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @property
    def coordinates(self) -> Optional[dict]:
        """Return lat/lng coordinates, or None when either is unknown."""
        if self.latitude is None or self.longitude is None:
            return None
        return {'lat': self.latitude, 'lng': self.longitude}
