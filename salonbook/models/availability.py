from sqlalchemy import Column, Integer, Time, ForeignKey, CheckConstraint, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
import uuid

from salonbook.models.base import Base, UTCDateTime, utcnow


class AvailabilityWindow(Base):
    """Weekly working hours: one open interval per day of week"""
    __tablename__ = "availability"
    __table_args__ = (
        UniqueConstraint("profile_id", "day_of_week", name="uq_availability_profile_day"),
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_availability_day_of_week"),
        CheckConstraint("start_time < end_time", name="ck_availability_start_before_end"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    profile_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    day_of_week = Column(Integer, nullable=False)  # 0=Sunday, 6=Saturday
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    created_at = Column(UTCDateTime, default=utcnow)

    profile = relationship("Profile", back_populates="availability")

    def __repr__(self):
        return f"<AvailabilityWindow(profile_id={self.profile_id}, day={self.day_of_week})>"

    def to_dict(self):
        return {
            "id": str(self.id),
            "day_of_week": self.day_of_week,
            "start_time": self.start_time.strftime("%H:%M"),
            "end_time": self.end_time.strftime("%H:%M"),
        }
