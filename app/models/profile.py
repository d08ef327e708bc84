"""Profile models for the profile store."""
from datetime import date, datetime
from typing import List, Optional
from sqlalchemy import String, Float, Date, DateTime, ForeignKey, Text, Integer
from sqlalchemy.sql import func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base

class ProfileModel(Base):
    """Model for user profiles as maintained by the profile editor."""
    __tablename__ = "profiles"
    __table_args__ = {'extend_existing': True}

    id: Mapped[str] = mapped_column(String, primary_key=True, index=True)
    birth_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    latitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    longitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    attachment_style: Mapped[Optional[str]] = mapped_column(String, nullable=True)  # secure, anxious, avoidant, fearful

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    user_interests: Mapped[List["UserInterest"]] = relationship(
        back_populates="profile", cascade="all, delete-orphan"
    )
    personality_traits: Mapped[List["PersonalityTraitModel"]] = relationship(
        back_populates="profile", cascade="all, delete-orphan"
    )

    def to_dict(self) -> dict:
        """Convert profile to dictionary."""
        return {
            'id': self.id,
            'birth_date': self.birth_date.isoformat() if self.birth_date else None,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'bio': self.bio,
            'attachment_style': self.attachment_style,
            'interests': [ui.interest.name for ui in self.user_interests if ui.interest],
            'personality_traits': [
                {'name': t.name, 'value': t.value} for t in self.personality_traits
            ]
        }

class InterestModel(Base):
    """Catalogue of taggable interests."""
    __tablename__ = "interests"
    __table_args__ = {'extend_existing': True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String, unique=True, nullable=False)

class UserInterest(Base):
    """Association between a profile and an interest."""
    __tablename__ = "user_interests"
    __table_args__ = {'extend_existing': True}

    profile_id: Mapped[str] = mapped_column(ForeignKey("profiles.id", ondelete="CASCADE"), primary_key=True)
    interest_id: Mapped[int] = mapped_column(ForeignKey("interests.id", ondelete="CASCADE"), primary_key=True)

    profile: Mapped["ProfileModel"] = relationship(back_populates="user_interests")
    interest: Mapped["InterestModel"] = relationship()

class PersonalityTraitModel(Base):
    """Named personality trait score (0-100) for a profile."""
    __tablename__ = "personality_traits"
    __table_args__ = {'extend_existing': True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    profile_id: Mapped[str] = mapped_column(ForeignKey("profiles.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    value: Mapped[float] = mapped_column(Float, nullable=False)

    profile: Mapped["ProfileModel"] = relationship(back_populates="personality_traits")
