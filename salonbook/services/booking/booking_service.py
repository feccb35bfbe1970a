# ============================================================================
# salonbook/services/booking/booking_service.py
# Pure business logic - no FastAPI dependencies, fully testable
# ============================================================================
"""Service for creating bookings and moving them through their lifecycle"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Dict, List, Optional, Any
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from salonbook.config.settings import get_settings
from salonbook.core.exceptions import InvalidStatusTransition, NotFound, ValidationError
from salonbook.models.booking import ALLOWED_TRANSITIONS, Booking, BookingStatus
from salonbook.services.availability.availability_service import profile_timezone
from salonbook.services.notification.notification_service import NotificationService
from salonbook.services.scheduling.slots import find_window, localize
from salonbook.services.store.schedule_store import ScheduleStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingCreated:
    id: UUID
    start_time: datetime
    end_time: datetime
    status: str

    def to_dict(self):
        return {
            "id": str(self.id),
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "status": self.status,
        }


def clean_client_info(client_info: Dict[str, Any]) -> Dict[str, Optional[str]]:
    """Trim client fields; name and phone are required, email and notes optional"""
    cleaned = {
        key: (client_info.get(key) or "").strip()
        for key in ("name", "phone", "email", "notes")
    }

    missing = [key for key in ("name", "phone") if not cleaned[key]]
    if missing:
        raise ValidationError(f"Please fill in all required fields: {', '.join(missing)}")

    cleaned["email"] = cleaned["email"] or None
    cleaned["notes"] = cleaned["notes"] or None
    return cleaned


class BookingService:
    """Handles booking operations"""

    @staticmethod
    def create_booking(
            db: Session,
            profile_id: UUID,
            service_id: UUID,
            booking_date: date,
            time_of_day: time,
            client_info: Dict[str, Any],
            now: Optional[datetime] = None,
            notifier: Optional[NotificationService] = None
    ) -> BookingCreated:
        """
        Submit a booking request from the public page.

        Steps:
            1. Validate client fields (name and phone required)
            2. Resolve the business and an active service (NotFound otherwise)
            3. Build [start, start + duration) from the local date and time
            4. Reject times in the past, beyond the booking horizon, or
               outside that day's working hours
            5. Re-check overlaps against current data and insert atomically
               (SlotTaken if another booking got there first)
            6. Notify owner and client

        Returns:
            BookingCreated for the new pending booking
        """
        settings = get_settings()
        client = clean_client_info(client_info)
        store = ScheduleStore(db)

        profile = store.get_profile(profile_id)
        if not profile or not profile.is_active:
            raise NotFound("Business not found")

        service = store.get_service(profile.id, service_id)
        if not service or not service.is_active:
            raise NotFound("Service not found")

        tz = profile_timezone(profile)
        local_start = datetime.combine(booking_date, time_of_day)
        local_end = local_start + timedelta(minutes=service.duration_minutes)
        start = localize(local_start, tz).astimezone(timezone.utc)
        end = start + timedelta(minutes=service.duration_minutes)

        now = now or datetime.now(timezone.utc)
        if start < now:
            raise ValidationError("This time is already in the past")
        if start > now + timedelta(days=settings.BOOKING_WINDOW_DAYS):
            raise ValidationError(
                f"Bookings can be made at most {settings.BOOKING_WINDOW_DAYS} days ahead"
            )

        window = find_window(store.get_availability(profile.id), booking_date)
        if (
                window is None
                or local_start < datetime.combine(booking_date, window.start_time)
                or local_end > datetime.combine(booking_date, window.end_time)
        ):
            raise ValidationError("The selected time is outside working hours")

        booking = store.insert_booking_if_free(profile.id, service.id, client, start, end)

        logger.info(
            f"Booking {booking.id} created for profile {profile.id}: "
            f"{service.name} {start.isoformat()} - {end.isoformat()}"
        )

        (notifier or NotificationService()).notify_booking_created(profile, service, booking, tz)

        return BookingCreated(
            id=booking.id,
            start_time=booking.start_time,
            end_time=booking.end_time,
            status=booking.status,
        )

    @staticmethod
    def list_bookings(db: Session, profile_id: UUID, status: Optional[str] = None) -> List[Booking]:
        if status is not None:
            try:
                status = BookingStatus(status).value
            except ValueError:
                raise ValidationError(f"Unknown booking status: {status}")
        return ScheduleStore(db).list_bookings(profile_id, status)

    @staticmethod
    def update_status(
            db: Session,
            profile_id: UUID,
            booking_id: UUID,
            new_status: str
    ) -> Booking:
        """
        Owner action: pending -> confirmed|cancelled, confirmed -> completed|cancelled.
        Cancelled and completed bookings cannot change any more.
        """
        try:
            target = BookingStatus(new_status)
        except ValueError:
            raise ValidationError(f"Unknown booking status: {new_status}")

        store = ScheduleStore(db)
        booking = store.get_booking(booking_id)
        if not booking or booking.profile_id != profile_id:
            raise NotFound("Booking not found")

        current = BookingStatus(booking.status)
        if target not in ALLOWED_TRANSITIONS[current]:
            raise InvalidStatusTransition(
                f"Cannot change booking from {current.value} to {target.value}"
            )

        updated = store.update_booking_status(booking.id, target.value)
        logger.info(f"Booking {booking.id} status {current.value} -> {target.value}")
        return updated
