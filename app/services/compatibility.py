"""Pairwise compatibility functions and the compatibility scorer."""

import logging
from datetime import date, datetime, timezone
from typing import Dict, Optional

import numpy as np

from app.schemas.interaction import InteractionAction, SuccessMetrics
from app.schemas.matching import MatchScore
from app.schemas.profile import AttachmentStyle, Profile
from app.services.location_services import calculate_distance, DEFAULT_DISTANCE_MILES

logger = logging.getLogger(__name__)

NEUTRAL_COMPATIBILITY = 0.5

# Row is the subject's style, column the other person's. Not symmetric.
ATTACHMENT_COMPATIBILITY: Dict[AttachmentStyle, Dict[AttachmentStyle, float]] = {
    AttachmentStyle.SECURE: {
        AttachmentStyle.SECURE: 0.9,
        AttachmentStyle.ANXIOUS: 0.7,
        AttachmentStyle.AVOIDANT: 0.6,
        AttachmentStyle.FEARFUL: 0.5,
    },
    AttachmentStyle.ANXIOUS: {
        AttachmentStyle.SECURE: 0.8,
        AttachmentStyle.ANXIOUS: 0.4,
        AttachmentStyle.AVOIDANT: 0.3,
        AttachmentStyle.FEARFUL: 0.5,
    },
    AttachmentStyle.AVOIDANT: {
        AttachmentStyle.SECURE: 0.7,
        AttachmentStyle.ANXIOUS: 0.3,
        AttachmentStyle.AVOIDANT: 0.5,
        AttachmentStyle.FEARFUL: 0.4,
    },
    AttachmentStyle.FEARFUL: {
        AttachmentStyle.SECURE: 0.6,
        AttachmentStyle.ANXIOUS: 0.5,
        AttachmentStyle.AVOIDANT: 0.4,
        AttachmentStyle.FEARFUL: 0.6,
    },
}

# Relative weight of each factor in the overall match score
MATCH_WEIGHTS = {
    'interests': 0.25,
    'personality': 0.25,
    'location': 0.10,
    'attachment': 0.10,
}
MAX_PREFERRED_DISTANCE_MILES = 50.0

def calculate_age(birth_date: Optional[date], today: Optional[date] = None) -> Optional[int]:
    """Age in completed years, or None when the birth date is unknown."""
    if birth_date is None:
        return None
    today = today or date.today()
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age

def calculate_age_difference(birth_date1: Optional[date], birth_date2: Optional[date]) -> int:
    """
    Absolute age difference in whole years, compared by birth year.

    Returns 0 when either birth date is missing.
    """
    if birth_date1 is None or birth_date2 is None:
        return 0
    return abs(birth_date1.year - birth_date2.year)

def calculate_interest_overlap(profile1: Profile, profile2: Profile) -> float:
    """Shared interests divided by the larger of the two interest sets."""
    interests1 = set(profile1.interests)
    interests2 = set(profile2.interests)

    if not interests1 or not interests2:
        return 0.0

    return len(interests1 & interests2) / max(len(interests1), len(interests2))

def calculate_personality_compatibility(profile1: Profile, profile2: Profile) -> float:
    """
    Mean trait similarity over the traits both profiles share.

    Each shared trait contributes ``1 - |a - b| / 100``. Profiles without a
    shared trait get the neutral 0.5.
    """
    traits2 = {trait.name: trait.value for trait in profile2.personality_traits}
    scores = [
        1 - abs(trait.value - traits2[trait.name]) / 100
        for trait in profile1.personality_traits
        if trait.name in traits2
    ]

    if not scores:
        return NEUTRAL_COMPATIBILITY

    return float(np.clip(np.mean(scores), 0.0, 1.0))

def calculate_attachment_compatibility(
    style1: Optional[AttachmentStyle],
    style2: Optional[AttachmentStyle]
) -> float:
    """Look up the attachment matrix; 0.5 when either style is unknown."""
    if style1 is None or style2 is None:
        return NEUTRAL_COMPATIBILITY
    return ATTACHMENT_COMPATIBILITY[AttachmentStyle(style1)][AttachmentStyle(style2)]

def calculate_distance_score(distance: float, max_preferred: float = MAX_PREFERRED_DISTANCE_MILES) -> float:
    """Proximity score in [0, 1], falling off non-linearly with distance."""
    return max(0.0, 1 - distance / (max_preferred * 2)) ** 1.5

class CompatibilityScorer:
    """Combines the attribute functions into snapshots and match scores.

    Stateless: every method is a pure function of its arguments.
    """

    def __init__(self, default_distance: float = DEFAULT_DISTANCE_MILES):
        self.default_distance = default_distance

    def distance(self, profile1: Profile, profile2: Profile) -> float:
        """Distance between two profiles in miles."""
        return calculate_distance(
            profile1.coordinates,
            profile2.coordinates,
            default=self.default_distance
        )

    def success_metrics(
        self,
        profile: Profile,
        target: Profile,
        success_type: InteractionAction,
        interaction_time: Optional[datetime] = None
    ) -> SuccessMetrics:
        """Snapshot the compatibility of a pair at the moment of success."""
        return SuccessMetrics(
            age_difference=calculate_age_difference(profile.birth_date, target.birth_date),
            interest_overlap=calculate_interest_overlap(profile, target),
            personality_compatibility=calculate_personality_compatibility(profile, target),
            location_distance=self.distance(profile, target),
            attachment_compatibility=calculate_attachment_compatibility(
                profile.attachment_style, target.attachment_style
            ),
            interaction_time=interaction_time or datetime.now(timezone.utc),
            success_type=success_type
        )

    def match_score(self, profile: Profile, candidate: Profile) -> MatchScore:
        """
        Weighted match score for a candidate, from the profile owner's side.

        The attachment factor only counts when both styles are known; the
        remaining weights are renormalised to sum to one.
        """
        has_attachment = profile.attachment_style is not None and candidate.attachment_style is not None

        factors = {
            'interests': calculate_interest_overlap(profile, candidate),
            'personality': calculate_personality_compatibility(profile, candidate),
            'location': calculate_distance_score(self.distance(profile, candidate)),
        }
        if has_attachment:
            factors['attachment'] = calculate_attachment_compatibility(
                profile.attachment_style, candidate.attachment_style
            )

        weights = np.array([MATCH_WEIGHTS[name] for name in factors])
        values = np.array(list(factors.values()))
        score = float(np.dot(weights / weights.sum(), values))

        return MatchScore(
            match_score=int(round(score * 100)),
            interests_score=int(round(factors['interests'] * 100)),
            personality_score=int(round(factors['personality'] * 100)),
            location_score=int(round(factors['location'] * 100)),
            attachment_score=int(round(factors['attachment'] * 100)) if has_attachment else None
        )
