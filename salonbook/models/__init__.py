# salonbook/models/__init__.py
from .base import Base
from .profile import Profile
from .service import Service
from .availability import AvailabilityWindow
from .booking import Booking, BookingStatus, ALLOWED_TRANSITIONS

__all__ = [
    "Base",
    "Profile",
    "Service",
    "AvailabilityWindow",
    "Booking",
    "BookingStatus",
    "ALLOWED_TRANSITIONS",
]
