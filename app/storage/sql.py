"""SQLAlchemy storage backends."""

import logging
from typing import Iterable, List, Optional
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload, sessionmaker

from app.database import db_session
from app.models.interaction import UserInteraction, SuccessPatternModel
from app.models.profile import ProfileModel, UserInterest
from app.schemas.interaction import InteractionEvent, SuccessPattern
from app.schemas.profile import Profile
from app.services.error_handling import storage_operation
from .base import ProfileStore, InteractionStore, SuccessPatternStore

logger = logging.getLogger(__name__)

# Profile rows that do not fit the Profile schema are storage failures too
PROFILE_ERRORS = (SQLAlchemyError, PydanticValidationError)

def _profile_query():
    return select(ProfileModel).options(
        selectinload(ProfileModel.user_interests).selectinload(UserInterest.interest),
        selectinload(ProfileModel.personality_traits)
    )

class SQLProfileStore(ProfileStore):
    """Profile store reading the profiles, interests and traits tables."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @storage_operation("get_profile", exceptions=PROFILE_ERRORS)
    async def get_profile(self, user_id: str) -> Optional[Profile]:
        with db_session(self.session_factory) as session:
            row = session.execute(
                _profile_query().where(ProfileModel.id == user_id)
            ).scalar_one_or_none()
            return Profile.model_validate(row.to_dict()) if row else None

    @storage_operation("get_profiles", exceptions=PROFILE_ERRORS)
    async def get_profiles(self, user_ids: Iterable[str]) -> List[Profile]:
        ids = list(dict.fromkeys(user_ids))
        if not ids:
            return []
        with db_session(self.session_factory) as session:
            rows = session.execute(
                _profile_query().where(ProfileModel.id.in_(ids))
            ).scalars().all()
            return [Profile.model_validate(row.to_dict()) for row in rows]

class SQLInteractionStore(InteractionStore):
    """Interaction store backed by the user_interactions table."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @storage_operation("add_interaction")
    async def add(self, event: InteractionEvent) -> InteractionEvent:
        with db_session(self.session_factory) as session:
            row = UserInteraction(
                user_id=event.user_id,
                target_user_id=event.target_user_id,
                action=event.action.value,
                timestamp=event.timestamp,
                context_data=dict(event.context_data)
            )
            session.add(row)
            session.flush()
            logger.debug(f"Stored interaction {row.id} for user {event.user_id}")
            return event.model_copy(update={'id': row.id})

    @storage_operation("list_recent_interactions")
    async def list_recent(self, user_id: str, limit: int) -> List[InteractionEvent]:
        with db_session(self.session_factory) as session:
            rows = session.execute(
                select(UserInteraction)
                .where(UserInteraction.user_id == user_id)
                .order_by(UserInteraction.timestamp.desc(), UserInteraction.id.desc())
                .limit(limit)
            ).scalars().all()
            return [InteractionEvent.model_validate(row.to_dict()) for row in rows]

class SQLSuccessPatternStore(SuccessPatternStore):
    """Success pattern store backed by the ml_success_patterns table."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @storage_operation("add_success_pattern")
    async def add(self, pattern: SuccessPattern) -> SuccessPattern:
        with db_session(self.session_factory) as session:
            row = SuccessPatternModel(
                user_id=pattern.user_id,
                target_user_id=pattern.target_user_id,
                success_metrics=dict(pattern.success_metrics),
                created_at=pattern.created_at
            )
            session.add(row)
            session.flush()
            return pattern.model_copy(update={'id': row.id})

    @storage_operation("list_success_patterns")
    async def list_for_user(self, user_id: str, limit: int) -> List[SuccessPattern]:
        with db_session(self.session_factory) as session:
            rows = session.execute(
                select(SuccessPatternModel)
                .where(SuccessPatternModel.user_id == user_id)
                .order_by(SuccessPatternModel.id)
                .limit(limit)
            ).scalars().all()
            return [SuccessPattern.model_validate(row.to_dict()) for row in rows]
