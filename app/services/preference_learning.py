"""Preference learning from interaction history."""

import logging
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Sequence

import numpy as np

from app.config import get_settings
from app.schemas.interaction import InteractionAction, InteractionEvent, SuccessMetrics, SuccessPattern, SUCCESSFUL_ACTIONS
from app.schemas.matching import EnhancedMatch, MatchScore
from app.schemas.preferences import (
    CompatibilityPreference,
    InterestPatterns,
    PreferenceProfile,
    TIME_SLOTS
)
from app.schemas.profile import AttachmentStyle, Profile
from app.services.compatibility import CompatibilityScorer, calculate_age
from app.services.error_handling import ProfileNotFoundError
from app.storage.manager import StorageManager

logger = logging.getLogger(__name__)

DEFAULT_AGE_RANGE = (22, 35)
BASELINE_AGE = 25

# Learned thresholds sit a margin below the observed average, with a floor
THRESHOLD_MARGIN = 0.1
MIN_PERSONALITY_COMPATIBILITY = 0.3
MIN_INTEREST_OVERLAP = 0.1
MIN_ATTACHMENT_COMPATIBILITY = 0.3

def time_slot(timestamp: datetime) -> str:
    """Bucket a timestamp's hour into morning, afternoon or evening."""
    hour = timestamp.hour
    if hour < 12:
        return 'morning'
    if hour < 18:
        return 'afternoon'
    return 'evening'

def _average(patterns: Iterable[SuccessPattern], metric: str) -> Optional[float]:
    values = [v for v in (p.metric(metric) for p in patterns) if v is not None]
    if not values:
        return None
    return float(np.mean(values))

def derive_preferences(
    interactions: Sequence[InteractionEvent],
    success_patterns: Sequence[SuccessPattern]
) -> PreferenceProfile:
    """
    Derive a preference profile from interaction history.

    Pure function: the same history always yields the same profile.

    Args:
        interactions: Recent interactions by the user, newest first
        success_patterns: Success patterns recorded for the user

    Returns:
        The derived preference profile
    """
    successful = [i for i in interactions if i.action in SUCCESSFUL_ACTIONS]

    age_range = list(DEFAULT_AGE_RANGE)
    avg_age_difference = _average(success_patterns, 'age_difference')
    if avg_age_difference is not None:
        age_range = [BASELINE_AGE - avg_age_difference, BASELINE_AGE + avg_age_difference]

    time_patterns = {slot: 0 for slot in TIME_SLOTS}
    for interaction in successful:
        time_patterns[time_slot(interaction.timestamp)] += 1

    personality = None
    avg_personality = _average(success_patterns, 'personality_compatibility')
    if avg_personality is not None:
        personality = CompatibilityPreference(
            minimum_compatibility=max(MIN_PERSONALITY_COMPATIBILITY, avg_personality - THRESHOLD_MARGIN),
            preferred_compatibility=avg_personality
        )

    interests = None
    avg_overlap = _average(success_patterns, 'interest_overlap')
    if avg_overlap is not None:
        interests = InterestPatterns(
            minimum_overlap=max(MIN_INTEREST_OVERLAP, avg_overlap - THRESHOLD_MARGIN),
            preferred_overlap=avg_overlap
        )

    attachment = {}
    avg_attachment = _average(success_patterns, 'attachment_compatibility')
    if avg_attachment is not None:
        attachment = {
            'minimum_compatibility': max(MIN_ATTACHMENT_COMPATIBILITY, avg_attachment - THRESHOLD_MARGIN),
            'preferred_compatibility': avg_attachment
        }

    return PreferenceProfile(
        preferred_age_range=age_range,
        successful_interest_patterns=interests,
        personality_preferences=personality,
        active_time_patterns=time_patterns,
        attachment_style_preferences=attachment,
        sample_size=len(interactions)
    )

class PreferenceModelDeriver:
    """Reads a user's history from storage and derives their preferences."""

    def __init__(
        self,
        storage: StorageManager,
        interaction_limit: Optional[int] = None,
        pattern_limit: Optional[int] = None
    ):
        settings = get_settings()
        self.storage = storage
        self.interaction_limit = (
            settings.INTERACTION_HISTORY_LIMIT if interaction_limit is None else interaction_limit
        )
        self.pattern_limit = settings.SUCCESS_PATTERN_LIMIT if pattern_limit is None else pattern_limit

    async def derive(self, user_id: str) -> PreferenceProfile:
        """
        Derive preferences for a user. Read-only.

        Raises:
            StorageError: if the history could not be read
        """
        interactions = await self.storage.interactions.list_recent(user_id, self.interaction_limit)
        patterns = await self.storage.success_patterns.list_for_user(user_id, self.pattern_limit)

        preferences = derive_preferences(interactions, patterns)
        logger.debug(
            f"Derived preferences for user {user_id} from {len(interactions)} interactions "
            f"and {len(patterns)} success patterns"
        )
        return preferences

class MatchEnhancer:
    """Biases match scores towards what has worked for a user before."""

    BASE_WEIGHT = 0.7
    ML_WEIGHT = 0.3

    def __init__(
        self,
        storage: StorageManager,
        scorer: Optional[CompatibilityScorer] = None,
        deriver: Optional[PreferenceModelDeriver] = None,
        clock: Callable[[], datetime] = datetime.now
    ):
        self.storage = storage
        self.scorer = scorer or CompatibilityScorer()
        self.deriver = deriver or PreferenceModelDeriver(storage)
        self.clock = clock

    def ml_score(
        self,
        candidate: Profile,
        metrics: SuccessMetrics,
        preferences: PreferenceProfile,
        now: datetime
    ) -> float:
        """Score a candidate against learned preferences, in [0, 100]."""
        score = 50.0

        age = calculate_age(candidate.birth_date, today=now.date())
        low, high = preferences.preferred_age_range
        if age is not None and low <= age <= high:
            score += 15

        interests = preferences.successful_interest_patterns
        if interests:
            if metrics.interest_overlap >= interests.preferred_overlap:
                score += 15
            elif metrics.interest_overlap >= interests.minimum_overlap:
                score += 8

        personality = preferences.personality_preferences
        if personality:
            if metrics.personality_compatibility >= personality.preferred_compatibility:
                score += 10
            elif metrics.personality_compatibility >= personality.minimum_compatibility:
                score += 5

        if preferences.most_active_slot == time_slot(now):
            score += 5

        if candidate.attachment_style is not None:
            score += 8 if candidate.attachment_style == AttachmentStyle.SECURE else 3

        return float(np.clip(score, 0, 100))

    @staticmethod
    def confidence(base: MatchScore, preferences: PreferenceProfile) -> float:
        """How far the learned preferences can be trusted for this match."""
        confidence = 0.5
        if preferences.sample_size > 10:
            confidence += 0.2
        if base.match_score > 80:
            confidence += 0.2
        if base.attachment_score is not None and base.attachment_score > 75:
            confidence += 0.1
        return min(0.95, round(confidence, 2))

    def enhance(
        self,
        profile: Profile,
        candidate: Profile,
        preferences: PreferenceProfile,
        now: Optional[datetime] = None
    ) -> EnhancedMatch:
        """Blend the base match score with the learned-preference score."""
        now = now or self.clock()
        base = self.scorer.match_score(profile, candidate)
        metrics = self.scorer.success_metrics(profile, candidate, success_type=InteractionAction.MATCH, interaction_time=now)
        ml = self.ml_score(candidate, metrics, preferences, now)

        enhanced = round(base.match_score * self.BASE_WEIGHT + ml * self.ML_WEIGHT)
        return EnhancedMatch(
            user_id=candidate.id,
            match_score=int(min(99, max(1, enhanced))),
            base_score=base.match_score,
            ml_score=ml,
            ml_confidence=self.confidence(base, preferences)
        )

    async def rank_candidates(self, user_id: str, candidate_ids: Iterable[str]) -> List[EnhancedMatch]:
        """
        Score externally supplied candidates for a user, best first.

        Candidates without a profile are skipped.

        Raises:
            ProfileNotFoundError: if the user has no profile
            StorageError: if profiles or history could not be read
        """
        profile = await self.storage.profiles.get_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)

        ids = [cid for cid in dict.fromkeys(candidate_ids) if cid != user_id]
        candidates = await self.storage.profiles.get_profiles(ids)
        preferences = await self.deriver.derive(user_id)
        now = self.clock()

        matches = [self.enhance(profile, candidate, preferences, now) for candidate in candidates]
        return sorted(matches, key=lambda m: (-m.match_score, m.user_id))
