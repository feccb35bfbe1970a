# salonbook/services/profile/profile_service.py
"""Service for managing business profiles"""
from typing import Optional
from uuid import UUID
import logging

import pytz
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from salonbook.config.settings import get_settings
from salonbook.core.exceptions import NotFound, StoreUnavailable, ValidationError
from salonbook.models.profile import Profile
from salonbook.services.store.schedule_store import ScheduleStore
from salonbook.utils.slugs import generate_slug, is_valid_slug

logger = logging.getLogger(__name__)


def _validate_timezone(tz_name: str) -> str:
    if tz_name not in pytz.all_timezones_set:
        raise ValidationError(f"Unknown time zone: {tz_name}")
    return tz_name


class ProfileService:
    """Handles profile-related operations"""

    @staticmethod
    def get_public_profile(db: Session, slug: str) -> Profile:
        """Active profile by slug, for the public booking page"""
        profile = ScheduleStore(db).get_profile_by_slug(slug)
        if not profile or not profile.is_active:
            raise NotFound("Business not found")
        return profile

    @staticmethod
    def get_profile(db: Session, profile_id: UUID) -> Optional[Profile]:
        return ScheduleStore(db).get_profile(profile_id)

    @staticmethod
    def create_profile(
            db: Session,
            user_id: UUID,
            email: str,
            name: str,
            slug: Optional[str] = None,
            phone: Optional[str] = None,
            timezone: Optional[str] = None
    ) -> Profile:
        """Create the profile of a freshly signed-up owner"""
        name = (name or "").strip()
        if not name:
            raise ValidationError("Name is required")

        slug = (slug or "").strip() or generate_slug(name)
        if not is_valid_slug(slug):
            raise ValidationError("Slug may contain only lower-case letters, digits and dashes")

        store = ScheduleStore(db)
        if store.get_profile(user_id):
            raise ValidationError("Profile already exists")
        if store.get_profile_by_slug(slug):
            raise ValidationError("This slug is already taken. Try another one.")

        profile = Profile(
            id=user_id,
            slug=slug,
            name=name,
            email=email,
            phone=(phone or "").strip() or None,
            timezone=_validate_timezone(timezone or get_settings().DEFAULT_TIMEZONE),
            is_active=True,
        )

        try:
            db.add(profile)
            db.commit()
            db.refresh(profile)
        except IntegrityError:
            db.rollback()
            raise ValidationError("This slug is already taken. Try another one.")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error creating profile for user {user_id}: {e}", exc_info=True)
            raise StoreUnavailable("Could not create profile. Please try again.") from e

        logger.info(f"Created profile {profile.id} ({profile.slug})")
        return profile

    @staticmethod
    def update_profile(db: Session, profile: Profile, updates: dict) -> Profile:
        """Apply name/phone/timezone/is_active changes"""
        if "name" in updates:
            name = (updates["name"] or "").strip()
            if not name:
                raise ValidationError("Name is required")
            profile.name = name
        if "phone" in updates:
            profile.phone = (updates["phone"] or "").strip() or None
        if "timezone" in updates and updates["timezone"]:
            profile.timezone = _validate_timezone(updates["timezone"])
        if "is_active" in updates and updates["is_active"] is not None:
            profile.is_active = updates["is_active"]

        try:
            db.commit()
            db.refresh(profile)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error updating profile {profile.id}: {e}", exc_info=True)
            raise StoreUnavailable("Could not update profile. Please try again.") from e

        return profile
