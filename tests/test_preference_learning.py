import pytest
from datetime import date, datetime, timedelta
from unittest.mock import AsyncMock

from app.schemas.interaction import InteractionEvent, SuccessPattern
from app.schemas.preferences import PreferenceProfile
from app.schemas.profile import AttachmentStyle
from app.services.error_handling import ProfileNotFoundError, StorageError
from app.services.interaction_tracking import InteractionRecorder
from app.services.preference_learning import (
    MatchEnhancer,
    PreferenceModelDeriver,
    derive_preferences,
    time_slot
)
from tests.conftest import make_profile

BASE_TIME = datetime(2026, 5, 1, 8, 0)

def event(action, hour=9, minute=0, user_id="user-x", target="user-y"):
    return InteractionEvent(
        user_id=user_id,
        target_user_id=target,
        action=action,
        timestamp=BASE_TIME.replace(hour=hour, minute=minute)
    )

def pattern(**metrics):
    return SuccessPattern(
        user_id="user-x",
        target_user_id="user-y",
        success_metrics=metrics,
        created_at=BASE_TIME
    )

@pytest.mark.parametrize("hour, slot", [
    (0, "morning"),
    (11, "morning"),
    (12, "afternoon"),
    (17, "afternoon"),
    (18, "evening"),
    (23, "evening"),
])
def test_time_slot(hour, slot):
    assert time_slot(BASE_TIME.replace(hour=hour)) == slot

def test_no_history_gives_defaults():
    preferences = derive_preferences([], [])

    assert preferences.preferred_age_range == [22, 35]
    assert preferences.sample_size == 0
    assert preferences.personality_preferences is None
    assert preferences.successful_interest_patterns is None
    assert preferences.attachment_style_preferences == {}
    assert preferences.active_time_patterns == {"morning": 0, "afternoon": 0, "evening": 0}

def test_active_time_counts_successful_actions_only():
    interactions = [
        event("like", hour=9),
        event("super_like", hour=13),
        event("match", hour=19),
        event("message", hour=20),
        event("pass", hour=21),
        event("view", hour=10),
    ]
    preferences = derive_preferences(interactions, [])

    assert preferences.active_time_patterns == {"morning": 1, "afternoon": 1, "evening": 2}
    assert preferences.sample_size == 6

def test_age_range_centres_on_baseline():
    preferences = derive_preferences([], [pattern(age_difference=2), pattern(age_difference=4)])
    assert preferences.preferred_age_range == [22.0, 28.0]

def test_patterns_without_age_difference_keep_default_range():
    preferences = derive_preferences([], [pattern(interest_overlap=0.5)])
    assert preferences.preferred_age_range == [22, 35]

def test_personality_preferences():
    preferences = derive_preferences([], [
        pattern(personality_compatibility=0.9),
        pattern(personality_compatibility=0.7),
        pattern(interest_overlap=0.2),
    ])
    personality = preferences.personality_preferences
    assert personality.preferred_compatibility == pytest.approx(0.8)
    assert personality.minimum_compatibility == pytest.approx(0.7)

def test_personality_minimum_has_floor():
    preferences = derive_preferences([], [pattern(personality_compatibility=0.2)])
    assert preferences.personality_preferences.minimum_compatibility == 0.3
    assert preferences.personality_preferences.preferred_compatibility == pytest.approx(0.2)

def test_interest_patterns():
    preferences = derive_preferences([], [pattern(interest_overlap=0.5), pattern(interest_overlap=0.3)])
    interests = preferences.successful_interest_patterns
    assert interests.preferred_overlap == pytest.approx(0.4)
    assert interests.minimum_overlap == pytest.approx(0.3)

def test_interest_minimum_has_floor():
    preferences = derive_preferences([], [pattern(interest_overlap=0.0)])
    assert preferences.successful_interest_patterns.minimum_overlap == 0.1

def test_attachment_preferences():
    preferences = derive_preferences([], [pattern(attachment_compatibility=0.9)])
    assert preferences.attachment_style_preferences == {
        "minimum_compatibility": pytest.approx(0.8),
        "preferred_compatibility": pytest.approx(0.9),
    }

def test_non_numeric_metrics_are_ignored():
    preferences = derive_preferences([], [pattern(age_difference=None, interest_overlap="n/a")])
    assert preferences.preferred_age_range == [22, 35]
    assert preferences.successful_interest_patterns is None

@pytest.mark.asyncio
async def test_deriver_with_no_interactions(storage):
    preferences = await PreferenceModelDeriver(storage).derive("nobody")

    assert preferences.preferred_age_range == [22, 35]
    assert preferences.sample_size == 0

@pytest.mark.asyncio
async def test_ten_likes_without_success(storage):
    recorder = InteractionRecorder(storage)
    for i in range(10):
        await recorder.record({
            "userId": "user-x",
            "targetUserId": f"user-{i}",
            "action": "like",
            "timestamp": BASE_TIME + timedelta(hours=i),
        })

    preferences = await PreferenceModelDeriver(storage).derive("user-x")

    assert preferences.sample_size == 10
    assert sum(preferences.active_time_patterns.values()) == 10
    assert preferences.preferred_age_range == [22, 35]

@pytest.mark.asyncio
async def test_deriver_respects_history_limits(storage):
    for i in range(5):
        await storage.interactions.add(event("like", hour=i))
        await storage.success_patterns.add(pattern(age_difference=i))

    deriver = PreferenceModelDeriver(storage, interaction_limit=3, pattern_limit=2)
    preferences = await deriver.derive("user-x")

    assert preferences.sample_size == 3
    # Only age differences 0 and 1 are read
    assert preferences.preferred_age_range == [24.5, 25.5]

@pytest.mark.asyncio
async def test_deriver_honours_zero_limits(storage):
    await storage.interactions.add(event("like", hour=9))
    await storage.success_patterns.add(pattern(age_difference=4))

    deriver = PreferenceModelDeriver(storage, interaction_limit=0, pattern_limit=0)
    preferences = await deriver.derive("user-x")

    assert preferences.sample_size == 0
    assert preferences.preferred_age_range == [22, 35]

@pytest.mark.asyncio
async def test_deriver_mixes_naive_and_aware_timestamps(storage):
    recorder = InteractionRecorder(storage)
    await recorder.record({"userId": "user-x", "targetUserId": "user-1",
                           "action": "like", "timestamp": "2026-05-01T11:00:00"})
    await recorder.record({"userId": "user-x", "targetUserId": "user-2",
                           "action": "like", "timestamp": "2026-05-01T19:00:00Z"})

    preferences = await PreferenceModelDeriver(storage).derive("user-x")

    assert preferences.sample_size == 2
    assert preferences.active_time_patterns == {"morning": 1, "afternoon": 0, "evening": 1}

@pytest.mark.asyncio
async def test_deriver_is_idempotent(storage, user_a, user_b):
    storage.profiles.put(user_a)
    storage.profiles.put(user_b)
    recorder = InteractionRecorder(storage)
    await recorder.record({"userId": "user-a", "targetUserId": "user-b",
                           "action": "match", "timestamp": BASE_TIME})
    await recorder.record({"userId": "user-a", "targetUserId": "user-b",
                           "action": "message", "timestamp": BASE_TIME.replace(hour=20)})

    deriver = PreferenceModelDeriver(storage)
    first = await deriver.derive("user-a")
    second = await deriver.derive("user-a")

    assert first == second
    assert first.preferred_age_range == [23.0, 27.0]
    assert first.active_time_patterns == {"morning": 1, "afternoon": 0, "evening": 1}
    assert len(storage.success_patterns.patterns) == 2

@pytest.mark.asyncio
async def test_deriver_surfaces_storage_errors(storage):
    storage.interactions.list_recent = AsyncMock(side_effect=StorageError("timeout"))

    with pytest.raises(StorageError):
        await PreferenceModelDeriver(storage).derive("user-x")

def test_most_active_slot():
    assert PreferenceProfile().most_active_slot is None
    profile = PreferenceProfile(active_time_patterns={"morning": 1, "afternoon": 0, "evening": 3})
    assert profile.most_active_slot == "evening"

class TestMatchEnhancer:
    NOW = datetime(2026, 5, 1, 20, 0)

    @pytest.fixture
    def enhancer(self, storage):
        return MatchEnhancer(storage, clock=lambda: self.NOW)

    def test_ml_score_defaults_to_base(self, enhancer):
        me = make_profile("me")
        candidate = make_profile("them")
        metrics = enhancer.scorer.success_metrics(me, candidate, "match", interaction_time=self.NOW)

        assert enhancer.ml_score(candidate, metrics, PreferenceProfile(), self.NOW) == 50.0

    def test_ml_score_rewards_learned_preferences(self, enhancer, user_a, user_b):
        candidate = user_b.model_copy(update={
            "birth_date": date(1998, 1, 1),
            "attachment_style": AttachmentStyle.SECURE
        })
        preferences = derive_preferences(
            [event("match", hour=21)],
            [pattern(age_difference=5, interest_overlap=0.5, personality_compatibility=0.9)]
        )
        metrics = enhancer.scorer.success_metrics(user_a, candidate, "match", interaction_time=self.NOW)

        # 50 + age 15 + interests 15 + personality 10 + evening 5 + secure 8
        assert enhancer.ml_score(candidate, metrics, preferences, self.NOW) == 100.0

    def test_enhance_blends_scores(self, enhancer, user_a, user_b):
        result = enhancer.enhance(user_a, user_b, PreferenceProfile(), self.NOW)
        base = enhancer.scorer.match_score(user_a, user_b).match_score

        assert result.user_id == "user-b"
        assert result.base_score == base
        # user-b is 29, inside the default age range
        assert result.ml_score == 65.0
        assert result.match_score == round(base * 0.7 + 65 * 0.3)
        assert result.ml_confidence == 0.5

    def test_confidence_is_capped(self, enhancer):
        a = make_profile("a", interests=["art"], traits={"openness": 50},
                         attachment_style=AttachmentStyle.SECURE, latitude=1.0, longitude=1.0)
        b = make_profile("b", interests=["art"], traits={"openness": 50},
                         attachment_style=AttachmentStyle.SECURE, latitude=1.0, longitude=1.0)
        preferences = PreferenceProfile(sample_size=20)

        result = enhancer.enhance(a, b, preferences, self.NOW)

        assert result.ml_confidence == 0.95
        assert 1 <= result.match_score <= 99

    @pytest.mark.asyncio
    async def test_rank_candidates(self, enhancer, storage, user_a, user_b):
        stranger = make_profile("user-c", interests=["golf"], traits={"openness": 10})
        for profile in (user_a, user_b, stranger):
            storage.profiles.put(profile)

        ranked = await enhancer.rank_candidates("user-a", ["user-c", "user-b", "missing", "user-a"])

        assert [m.user_id for m in ranked] == ["user-b", "user-c"]
        assert ranked[0].match_score >= ranked[1].match_score

    @pytest.mark.asyncio
    async def test_rank_candidates_requires_profile(self, enhancer):
        with pytest.raises(ProfileNotFoundError):
            await enhancer.rank_candidates("nobody", ["user-b"])
