"""Models package initialization."""

from app.database import Base
from app.models.profile import ProfileModel, InterestModel, UserInterest, PersonalityTraitModel
from app.models.interaction import UserInteraction, SuccessPatternModel

# Ensure all models are registered with Base
__all__ = [
    'Base',
    'ProfileModel',
    'InterestModel',
    'UserInterest',
    'PersonalityTraitModel',
    'UserInteraction',
    'SuccessPatternModel'
]

# Register models with Base
Base.registry.configure()
