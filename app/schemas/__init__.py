"""Schema exports."""

from app.schemas.profile import AttachmentStyle, PersonalityTrait, Profile
from app.schemas.interaction import (
    InteractionAction,
    InteractionEvent,
    SuccessMetrics,
    SuccessPattern,
    SUCCESSFUL_ACTIONS,
    SUCCESS_PATTERN_ACTIONS
)
from app.schemas.preferences import (
    PreferenceProfile,
    InterestPatterns,
    CompatibilityPreference,
    TIME_SLOTS
)
from app.schemas.matching import MatchScore, EnhancedMatch

__all__ = [
    'AttachmentStyle',
    'PersonalityTrait',
    'Profile',
    'InteractionAction',
    'InteractionEvent',
    'SuccessMetrics',
    'SuccessPattern',
    'SUCCESSFUL_ACTIONS',
    'SUCCESS_PATTERN_ACTIONS',
    'PreferenceProfile',
    'InterestPatterns',
    'CompatibilityPreference',
    'TIME_SLOTS',
    'MatchScore',
    'EnhancedMatch'
]
