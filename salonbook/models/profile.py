# salonbook/models/profile.py
"""
Profile Model - one row per business (tenant).
The id equals the owner's user id in the hosted auth service.
"""
from sqlalchemy import Column, String, Boolean, Uuid
from sqlalchemy.orm import relationship
import uuid

from salonbook.models.base import Base, UTCDateTime, utcnow


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    slug = Column(String(100), nullable=False, unique=True, index=True)
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(30), nullable=True)

    # Working hours are wall-clock times in this zone
    timezone = Column(String(50), nullable=False, default="Europe/Bratislava")

    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(UTCDateTime, default=utcnow)
    updated_at = Column(UTCDateTime, default=utcnow, onupdate=utcnow)

    services = relationship(
        "Service",
        back_populates="profile",
        cascade="all, delete-orphan",
        order_by="Service.created_at",
    )
    availability = relationship(
        "AvailabilityWindow",
        back_populates="profile",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Profile(id={self.id}, slug={self.slug})>"

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": str(self.id),
            "slug": self.slug,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "timezone": self.timezone,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
