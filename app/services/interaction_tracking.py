"""Service for recording user interactions and learning from successful ones."""
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Union
from pydantic import ValidationError as PydanticValidationError

from app.schemas.interaction import (
    InteractionEvent,
    SuccessPattern,
    SUCCESS_PATTERN_ACTIONS
)
from app.services.compatibility import CompatibilityScorer
from app.services.error_handling import ValidationError, StorageError
from app.storage.manager import StorageManager

logger = logging.getLogger(__name__)

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

class InteractionRecorder:
    """Records interaction events and snapshots success patterns.

    Recording happens in two phases. The interaction itself is written first
    and any failure there is raised to the caller. For ``match`` and
    ``message`` events a success pattern is then computed and written on a
    best-effort basis: storage failures in that step are logged and dropped,
    so the raw interaction signal is never lost.
    """

    def __init__(
        self,
        storage: StorageManager,
        scorer: Optional[CompatibilityScorer] = None,
        clock: Callable[[], datetime] = _utcnow
    ):
        """Initialize the interaction recorder."""
        self.storage = storage
        self.scorer = scorer or CompatibilityScorer()
        self.clock = clock

    @staticmethod
    def validate(payload: Union[InteractionEvent, Dict[str, Any]]) -> InteractionEvent:
        """
        Validate a raw interaction payload.

        Args:
            payload: Event fields, using either wire names (``userId``) or
                storage names (``user_id``)

        Raises:
            ValidationError: if a required field is missing or the action is
                not recognised
        """
        if isinstance(payload, InteractionEvent):
            return payload
        if not isinstance(payload, dict):
            raise ValidationError("Interaction payload must be an object")

        try:
            return InteractionEvent.model_validate(payload)
        except PydanticValidationError as e:
            fields = sorted({str(err['loc'][0]) for err in e.errors() if err.get('loc')})
            raise ValidationError(
                f"Invalid interaction: {', '.join(fields) or 'payload'}",
                errors=[{'loc': list(err['loc']), 'msg': err['msg']} for err in e.errors()]
            ) from e

    async def record(self, payload: Union[InteractionEvent, Dict[str, Any]]) -> InteractionEvent:
        """
        Record an interaction.

        Args:
            payload: The interaction event or its raw fields

        Returns:
            The stored interaction event

        Raises:
            ValidationError: if the event is malformed; nothing is stored
            StorageError: if the interaction could not be stored
        """
        event = self.validate(payload)

        try:
            stored = await self.storage.interactions.add(event)
        except StorageError as e:
            logger.error(
                f"Error recording {event.action.value} interaction for user "
                f"{event.user_id} on {event.target_user_id}: {str(e)}"
            )
            raise

        logger.info(
            f"Recorded {event.action.value} interaction for user {event.user_id} "
            f"on {event.target_user_id}"
        )

        if event.action in SUCCESS_PATTERN_ACTIONS:
            await self._update_success_patterns(stored)

        return stored

    async def _update_success_patterns(self, event: InteractionEvent) -> Optional[SuccessPattern]:
        """Best-effort: snapshot compatibility for a successful interaction."""
        if event.user_id == event.target_user_id:
            logger.warning(f"Skipping success pattern for self-interaction by {event.user_id}")
            return None

        try:
            profiles = await self.storage.profiles.get_profiles(
                [event.user_id, event.target_user_id]
            )
            by_id = {profile.id: profile for profile in profiles}
            user_profile = by_id.get(event.user_id)
            target_profile = by_id.get(event.target_user_id)

            if user_profile is None or target_profile is None:
                logger.warning(
                    f"Skipping success pattern for {event.user_id} -> {event.target_user_id}: "
                    f"profile not found"
                )
                return None

            now = self.clock()
            metrics = self.scorer.success_metrics(
                user_profile,
                target_profile,
                success_type=event.action,
                interaction_time=now
            )
            pattern = await self.storage.success_patterns.add(
                SuccessPattern(
                    user_id=event.user_id,
                    target_user_id=event.target_user_id,
                    success_metrics=metrics.model_dump(mode='json'),
                    created_at=now
                )
            )
            logger.info(
                f"Stored {event.action.value} success pattern for user {event.user_id} "
                f"on {event.target_user_id}"
            )
            return pattern

        except StorageError as e:
            logger.warning(
                f"Error updating success patterns for {event.user_id} -> "
                f"{event.target_user_id}: {str(e)}"
            )
            return None
