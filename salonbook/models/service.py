# salonbook/models/service.py
"""
Service Model - the catalog a business offers (haircut, colouring, ...).
Duration drives slot length; only active services are bookable.
"""
from sqlalchemy import Column, String, Numeric, Integer, ForeignKey, Boolean, CheckConstraint, Uuid
from sqlalchemy.orm import relationship
import uuid

from salonbook.models.base import Base, UTCDateTime, utcnow


class Service(Base):
    __tablename__ = "services"
    __table_args__ = (
        CheckConstraint("duration_minutes > 0", name="ck_services_duration_positive"),
        CheckConstraint("price >= 0", name="ck_services_price_non_negative"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    profile_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name = Column(String(200), nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False, default=0)

    is_active = Column(Boolean, default=True, nullable=False, index=True)

    created_at = Column(UTCDateTime, default=utcnow)
    updated_at = Column(UTCDateTime, default=utcnow, onupdate=utcnow)

    profile = relationship("Profile", back_populates="services")

    def __repr__(self):
        return f"<Service(id={self.id}, name={self.name}, profile_id={self.profile_id})>"

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": str(self.id),
            "profile_id": str(self.profile_id),
            "name": self.name,
            "duration_minutes": self.duration_minutes,
            "formatted_duration": self.formatted_duration,
            "price": float(self.price) if self.price is not None else None,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @property
    def formatted_duration(self) -> str:
        """Return human-readable duration string"""
        hours = self.duration_minutes // 60
        minutes = self.duration_minutes % 60

        if hours > 0 and minutes > 0:
            return f"{hours}h {minutes}m"
        elif hours > 0:
            return f"{hours}h"
        else:
            return f"{minutes}m"
