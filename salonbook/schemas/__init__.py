from .availability import (
    WorkingDay,
    WeeklyHoursRequest,
    AvailabilityWindowResponse,
    WeeklyHoursResponse,
)
from .booking import (
    ClientInfo,
    BookingCreateRequest,
    BookingStatusUpdateRequest,
    SlotResponse,
    SlotListResponse,
    WeekSlotsResponse,
    BookingCreatedResponse,
    BookingResponse,
    BookingListResponse,
)
from .profile import (
    ProfileCreateRequest,
    ProfileUpdateRequest,
    ProfileResponse,
    PublicProfileResponse,
)
from .service import (
    ServiceCreate,
    ServiceUpdate,
    ServiceResponse,
    ServiceListResponse,
)
