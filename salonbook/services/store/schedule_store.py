# ============================================================================
# salonbook/services/store/schedule_store.py
# Persistence boundary for working hours and bookings
# ============================================================================
"""
Schedule Store

All reads and writes the booking core needs go through this class. Any
SQLAlchemy failure (connection lost, statement timeout, ...) is rolled back
and re-raised as StoreUnavailable; nothing is retried here.
"""
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from salonbook.core.exceptions import NotFound, SlotTaken, StoreUnavailable
from salonbook.models.availability import AvailabilityWindow
from salonbook.models.booking import Booking, BookingStatus
from salonbook.models.profile import Profile
from salonbook.models.service import Service
from salonbook.services.scheduling.overlap import find_conflicts

logger = logging.getLogger(__name__)


class ScheduleStore:
    """SQLAlchemy-backed record store for one request's session"""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, operation: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Schedule store {operation} failed: {e}", exc_info=True)
            raise StoreUnavailable("Booking service is temporarily unavailable. Please try again.") from e

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_profile(self, profile_id: UUID) -> Optional[Profile]:
        with self._guard("get_profile"):
            return self.db.query(Profile).filter(Profile.id == profile_id).first()

    def get_profile_by_slug(self, slug: str) -> Optional[Profile]:
        with self._guard("get_profile_by_slug"):
            return self.db.query(Profile).filter(Profile.slug == slug).first()

    def get_service(self, profile_id: UUID, service_id: UUID) -> Optional[Service]:
        with self._guard("get_service"):
            return self.db.query(Service).filter(
                Service.id == service_id,
                Service.profile_id == profile_id
            ).first()

    def list_services(self, profile_id: UUID, active_only: bool = False) -> List[Service]:
        """Services of a profile in the order they were created"""
        with self._guard("list_services"):
            query = self.db.query(Service).filter(Service.profile_id == profile_id)
            if active_only:
                query = query.filter(Service.is_active == True)
            return query.order_by(Service.created_at.asc()).all()

    def service_has_bookings(self, service_id: UUID) -> bool:
        with self._guard("service_has_bookings"):
            return self.db.query(Booking.id).filter(Booking.service_id == service_id).first() is not None

    def get_availability(self, profile_id: UUID) -> List[AvailabilityWindow]:
        """Weekly windows of a profile ordered by day of week"""
        with self._guard("get_availability"):
            return self.db.query(AvailabilityWindow).filter(
                AvailabilityWindow.profile_id == profile_id
            ).order_by(AvailabilityWindow.day_of_week.asc()).all()

    def get_bookings(
            self,
            profile_id: UUID,
            range_start: datetime,
            range_end: datetime,
            exclude_status: Optional[str] = BookingStatus.CANCELLED.value
    ) -> List[Booking]:
        """
        Bookings of a profile whose interval intersects [range_start, range_end).

        Args:
            profile_id: owning profile
            range_start: inclusive lower bound
            range_end: exclusive upper bound
            exclude_status: status to leave out, cancelled by default
        """
        with self._guard("get_bookings"):
            query = self.db.query(Booking).filter(
                Booking.profile_id == profile_id,
                Booking.start_time < range_end,
                Booking.end_time > range_start
            )
            if exclude_status:
                query = query.filter(Booking.status != exclude_status)
            return query.order_by(Booking.start_time.asc()).all()

    def list_bookings(self, profile_id: UUID, status: Optional[str] = None) -> List[Booking]:
        """All bookings of a profile, newest start first"""
        with self._guard("list_bookings"):
            query = self.db.query(Booking).options(joinedload(Booking.service)).filter(
                Booking.profile_id == profile_id
            )
            if status:
                query = query.filter(Booking.status == status)
            return query.order_by(Booking.start_time.desc()).all()

    def get_booking(self, booking_id: UUID) -> Optional[Booking]:
        with self._guard("get_booking"):
            return self.db.query(Booking).filter(Booking.id == booking_id).first()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert_booking(
            self,
            profile_id: UUID,
            service_id: UUID,
            client_info: Dict[str, Optional[str]],
            start: datetime,
            end: datetime
    ) -> Booking:
        """Plain insert of a pending booking, without any overlap check"""
        with self._guard("insert_booking"):
            booking = self._new_booking(profile_id, service_id, client_info, start, end)
            self.db.add(booking)
            self.db.commit()
            self.db.refresh(booking)
            return booking

    def insert_booking_if_free(
            self,
            profile_id: UUID,
            service_id: UUID,
            client_info: Dict[str, Optional[str]],
            start: datetime,
            end: datetime
    ) -> Booking:
        """
        Insert a pending booking only if no non-cancelled booking overlaps it.

        The overlap query and the insert share one transaction that holds a
        row lock on the profile, so two submissions for the same business are
        serialised. SQLite has no row locks; engines from build_engine open
        every transaction with BEGIN IMMEDIATE instead. On PostgreSQL the
        bookings exclusion constraint rejects anything that still slips
        through, which is reported as SlotTaken.
        """
        try:
            locked = self.db.query(Profile).filter(
                Profile.id == profile_id
            ).with_for_update().first()
            if locked is None:
                self.db.rollback()
                raise NotFound("Business not found")

            current = self.db.query(Booking).filter(
                Booking.profile_id == profile_id,
                Booking.status != BookingStatus.CANCELLED.value,
                Booking.start_time < end,
                Booking.end_time > start
            ).all()

            if find_conflicts(start, end, current):
                self.db.rollback()
                raise SlotTaken("This time is no longer available. Please choose another slot.")

            booking = self._new_booking(profile_id, service_id, client_info, start, end)
            self.db.add(booking)
            self.db.commit()
            self.db.refresh(booking)
            return booking

        except IntegrityError as e:
            self.db.rollback()
            logger.info(f"Overlapping booking rejected by database for profile {profile_id}: {e.orig}")
            raise SlotTaken("This time is no longer available. Please choose another slot.") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Schedule store insert_booking_if_free failed: {e}", exc_info=True)
            raise StoreUnavailable("Booking service is temporarily unavailable. Please try again.") from e

    def update_booking_status(self, booking_id: UUID, new_status: str) -> Booking:
        with self._guard("update_booking_status"):
            booking = self.db.query(Booking).filter(Booking.id == booking_id).first()
            if not booking:
                raise NotFound("Booking not found")

            booking.status = new_status
            self.db.commit()
            self.db.refresh(booking)
            return booking

    @staticmethod
    def _new_booking(
            profile_id: UUID,
            service_id: UUID,
            client_info: Dict[str, Optional[str]],
            start: datetime,
            end: datetime
    ) -> Booking:
        return Booking(
            profile_id=profile_id,
            service_id=service_id,
            client_name=client_info["name"],
            client_phone=client_info["phone"],
            client_email=client_info.get("email"),
            notes=client_info.get("notes"),
            start_time=start,
            end_time=end,
            status=BookingStatus.PENDING.value,
        )
