from typing import List, Dict, Optional, Any
from datetime import date, datetime, time, timedelta
from uuid import UUID
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging
import pytz

from salonbook.config.settings import get_settings
from salonbook.core.exceptions import NotFound, ValidationError, StoreUnavailable
from salonbook.models.availability import AvailabilityWindow
from salonbook.models.profile import Profile
from salonbook.models.service import Service
from salonbook.services.scheduling.slots import Slot, generate_slots, localize
from salonbook.services.store.schedule_store import ScheduleStore

logger = logging.getLogger(__name__)
settings = get_settings()


def profile_timezone(profile: Profile) -> pytz.tzinfo.BaseTzInfo:
    """Resolve the profile's zone, falling back to UTC for unknown names"""
    try:
        return pytz.timezone(profile.timezone or settings.DEFAULT_TIMEZONE)
    except pytz.UnknownTimeZoneError:
        logger.warning(f"Invalid timezone '{profile.timezone}' for profile {profile.id}, using UTC")
        return pytz.UTC


def local_day_bounds(target_date: date, tz: pytz.tzinfo.BaseTzInfo, days: int = 1):
    """UTC instants of local midnight on target_date and `days` later"""
    start = localize(datetime.combine(target_date, time.min), tz)
    end = localize(datetime.combine(target_date + timedelta(days=days), time.min), tz)
    return start.astimezone(pytz.UTC), end.astimezone(pytz.UTC)


class AvailabilityService:
    """Slot listing for the public booking page and weekly hours for owners"""

    @staticmethod
    def _resolve_bookable_service(
            store: ScheduleStore,
            profile: Profile,
            service_id: Optional[UUID]
    ) -> Optional[Service]:
        if service_id is None:
            return None

        service = store.get_service(profile.id, service_id)
        if not service or not service.is_active:
            raise NotFound("Service not found")
        return service

    @staticmethod
    def _get_active_profile(store: ScheduleStore, profile_id: UUID) -> Profile:
        profile = store.get_profile(profile_id)
        if not profile or not profile.is_active:
            raise NotFound("Business not found")
        return profile

    @staticmethod
    def list_slots(
            db: Session,
            profile_id: UUID,
            target_date: date,
            service_id: Optional[UUID]
    ) -> List[Slot]:
        """
        Slots for one local calendar day.

        Returns an empty list when no service is selected or the business is
        closed that day. Availability is computed from a fresh read of the
        store on every call.
        """
        store = ScheduleStore(db)
        profile = AvailabilityService._get_active_profile(store, profile_id)
        service = AvailabilityService._resolve_bookable_service(store, profile, service_id)
        if service is None:
            return []

        tz = profile_timezone(profile)
        windows = store.get_availability(profile.id)
        day_start, day_end = local_day_bounds(target_date, tz)
        bookings = store.get_bookings(profile.id, day_start, day_end)

        return generate_slots(
            target_date,
            service,
            windows,
            bookings,
            tz=tz,
            step_minutes=settings.SLOT_GRANULARITY_MINUTES
        )

    @staticmethod
    def list_week_slots(
            db: Session,
            profile_id: UUID,
            week_start: date,
            service_id: Optional[UUID]
    ) -> Dict[str, List[Slot]]:
        """
        Slots for seven consecutive days starting at week_start.

        Bookings for the whole week are read with a single query and then
        handed to the generator day by day.
        """
        store = ScheduleStore(db)
        profile = AvailabilityService._get_active_profile(store, profile_id)
        service = AvailabilityService._resolve_bookable_service(store, profile, service_id)

        days = [week_start + timedelta(days=offset) for offset in range(7)]
        if service is None:
            return {day.isoformat(): [] for day in days}

        tz = profile_timezone(profile)
        windows = store.get_availability(profile.id)
        week_from, week_to = local_day_bounds(week_start, tz, days=7)
        bookings = store.get_bookings(profile.id, week_from, week_to)

        result = {}
        for day in days:
            result[day.isoformat()] = generate_slots(
                day,
                service,
                windows,
                bookings,
                tz=tz,
                step_minutes=settings.SLOT_GRANULARITY_MINUTES
            )
        return result

    @staticmethod
    def get_weekly_hours(db: Session, profile_id: UUID) -> List[AvailabilityWindow]:
        return ScheduleStore(db).get_availability(profile_id)

    @staticmethod
    def replace_weekly_hours(
            db: Session,
            profile_id: UUID,
            days: List[Dict[str, Any]]
    ) -> List[AvailabilityWindow]:
        """
        Save the whole week in one transaction.

        Each entry is {"day_of_week", "enabled", "start_time", "end_time"}.
        Enabled days are inserted or updated, disabled days are removed. Days
        not mentioned are left untouched. Any invalid day aborts the save.
        """
        seen = set()
        for entry in days:
            day = entry["day_of_week"]
            if day not in range(7):
                raise ValidationError(f"Invalid day of week: {day}")
            if day in seen:
                raise ValidationError(f"Day {day} listed more than once")
            seen.add(day)
            if entry["enabled"]:
                if entry.get("start_time") is None or entry.get("end_time") is None:
                    raise ValidationError(f"Opening and closing time are required for day {day}")
                if entry["start_time"] >= entry["end_time"]:
                    raise ValidationError(f"Invalid working hours for day {day}: opening must be before closing")

        try:
            existing = {
                window.day_of_week: window
                for window in db.query(AvailabilityWindow).filter(
                    AvailabilityWindow.profile_id == profile_id
                ).all()
            }

            for entry in days:
                window = existing.get(entry["day_of_week"])
                if not entry["enabled"]:
                    if window:
                        db.delete(window)
                    continue

                if window:
                    window.start_time = entry["start_time"]
                    window.end_time = entry["end_time"]
                else:
                    db.add(AvailabilityWindow(
                        profile_id=profile_id,
                        day_of_week=entry["day_of_week"],
                        start_time=entry["start_time"],
                        end_time=entry["end_time"],
                    ))

            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error saving working hours for profile {profile_id}: {e}", exc_info=True)
            raise StoreUnavailable("Could not save working hours. Please try again.") from e

        logger.info(f"Working hours updated for profile {profile_id}")
        return ScheduleStore(db).get_availability(profile_id)
