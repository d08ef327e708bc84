"""In-memory storage backends, for local development and tests."""

from itertools import count
from typing import Dict, Iterable, List, Optional

from app.schemas.interaction import InteractionEvent, SuccessPattern
from app.schemas.profile import Profile
from .base import ProfileStore, InteractionStore, SuccessPatternStore

class InMemoryProfileStore(ProfileStore):
    """Profile store backed by a dictionary."""

    def __init__(self, profiles: Iterable[Profile] = ()):
        self._profiles: Dict[str, Profile] = {p.id: p for p in profiles}

    def put(self, profile: Profile) -> None:
        """Insert or replace a profile (stands in for the profile editor)."""
        self._profiles[profile.id] = profile

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        return self._profiles.get(user_id)

    async def get_profiles(self, user_ids: Iterable[str]) -> List[Profile]:
        return [self._profiles[uid] for uid in dict.fromkeys(user_ids) if uid in self._profiles]

class InMemoryInteractionStore(InteractionStore):
    """Interaction store backed by a list."""

    def __init__(self):
        self._events: List[InteractionEvent] = []
        self._ids = count(1)

    @property
    def events(self) -> List[InteractionEvent]:
        return list(self._events)

    async def add(self, event: InteractionEvent) -> InteractionEvent:
        stored = event.model_copy(update={'id': next(self._ids)})
        self._events.append(stored)
        return stored

    async def list_recent(self, user_id: str, limit: int) -> List[InteractionEvent]:
        events = [e for e in reversed(self._events) if e.user_id == user_id]
        events.sort(key=lambda e: e.timestamp, reverse=True)
        return events[:limit]

class InMemorySuccessPatternStore(SuccessPatternStore):
    """Success pattern store backed by a list."""

    def __init__(self):
        self._patterns: List[SuccessPattern] = []
        self._ids = count(1)

    @property
    def patterns(self) -> List[SuccessPattern]:
        return list(self._patterns)

    async def add(self, pattern: SuccessPattern) -> SuccessPattern:
        stored = pattern.model_copy(update={'id': next(self._ids)})
        self._patterns.append(stored)
        return stored

    async def list_for_user(self, user_id: str, limit: int) -> List[SuccessPattern]:
        return [p for p in self._patterns if p.user_id == user_id][:limit]
