from sqlalchemy import Column, String, Text, ForeignKey, CheckConstraint, Index, Uuid
from sqlalchemy.orm import relationship
import uuid
import enum

from salonbook.models.base import Base, UTCDateTime, utcnow


class BookingStatus(str, enum.Enum):
    """Booking lifecycle. Cancelled and completed are terminal."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


# Owner-driven transitions
ALLOWED_TRANSITIONS = {
    BookingStatus.PENDING: {BookingStatus.CONFIRMED, BookingStatus.CANCELLED},
    BookingStatus.CONFIRMED: {BookingStatus.COMPLETED, BookingStatus.CANCELLED},
    BookingStatus.CANCELLED: set(),
    BookingStatus.COMPLETED: set(),
}


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("end_time > start_time", name="ck_bookings_end_after_start"),
        CheckConstraint(
            "status IN ('pending', 'confirmed', 'cancelled', 'completed')",
            name="ck_bookings_status"
        ),
        Index("ix_bookings_profile_start", "profile_id", "start_time"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # References
    profile_id = Column(Uuid(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    service_id = Column(Uuid(as_uuid=True), ForeignKey("services.id", ondelete="CASCADE"), nullable=False)

    # Client info
    client_name = Column(String(200), nullable=False)
    client_phone = Column(String(30), nullable=False)
    client_email = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)

    # Occupied interval [start_time, end_time), stored in UTC
    start_time = Column(UTCDateTime, nullable=False)
    end_time = Column(UTCDateTime, nullable=False)

    status = Column(String(20), nullable=False, default=BookingStatus.PENDING.value)

    created_at = Column(UTCDateTime, default=utcnow)
    updated_at = Column(UTCDateTime, default=utcnow, onupdate=utcnow)

    service = relationship("Service")

    def __repr__(self):
        return f"<Booking(id={self.id}, start={self.start_time}, status={self.status})>"

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": str(self.id),
            "profile_id": str(self.profile_id),
            "service_id": str(self.service_id),
            "service_name": self.service.name if self.service else None,
            "client_name": self.client_name,
            "client_phone": self.client_phone,
            "client_email": self.client_email,
            "notes": self.notes,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
