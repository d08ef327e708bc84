"""Storage ports used by the matching engine."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from app.schemas.interaction import InteractionEvent, SuccessPattern
from app.schemas.profile import Profile

class ProfileStore(ABC):
    """Read access to user profiles with their interests and traits."""

    @abstractmethod
    async def get_profile(self, user_id: str) -> Optional[Profile]:
        """Get a profile.

        Args:
            user_id: ID of the profile to retrieve

        Returns:
            Profile or None if not found
        """
        pass

    @abstractmethod
    async def get_profiles(self, user_ids: Iterable[str]) -> List[Profile]:
        """Batch-fetch profiles.

        Args:
            user_ids: IDs of the profiles to retrieve

        Returns:
            The profiles that exist, in no particular order
        """
        pass

class InteractionStore(ABC):
    """Append-only store of interaction events."""

    @abstractmethod
    async def add(self, event: InteractionEvent) -> InteractionEvent:
        """Persist an interaction event.

        Args:
            event: Validated interaction event

        Returns:
            The stored event, including its storage ID
        """
        pass

    @abstractmethod
    async def list_recent(self, user_id: str, limit: int) -> List[InteractionEvent]:
        """List the most recent interactions made by a user.

        Args:
            user_id: ID of the acting user
            limit: Maximum number of events to return

        Returns:
            Events ordered newest first
        """
        pass

class SuccessPatternStore(ABC):
    """Append-only store of success patterns."""

    @abstractmethod
    async def add(self, pattern: SuccessPattern) -> SuccessPattern:
        """Persist a success pattern.

        Args:
            pattern: Success pattern to store

        Returns:
            The stored pattern, including its storage ID
        """
        pass

    @abstractmethod
    async def list_for_user(self, user_id: str, limit: int) -> List[SuccessPattern]:
        """List success patterns recorded for a user.

        Args:
            user_id: ID of the user
            limit: Maximum number of patterns to return

        Returns:
            Patterns in insertion order
        """
        pass
