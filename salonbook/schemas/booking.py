"""
Pydantic schemas for the public booking page and booking administration
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict
import datetime as dt
from uuid import UUID


# ============================================================================
# Request Schemas (for incoming data)
# ============================================================================

class ClientInfo(BaseModel):
    """Contact details typed into the booking form"""
    name: str = Field("", max_length=200)
    phone: str = Field("", max_length=30)
    email: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        if v is None or not v.strip():
            return None
        v = v.strip()
        if '@' not in v or v.startswith('@') or v.endswith('@'):
            raise ValueError('Invalid email address')
        return v


class BookingCreateRequest(BaseModel):
    """Request to book a slot"""
    service_id: UUID
    date: dt.date
    time: dt.time = Field(..., description="Local start time, HH:MM")
    client: ClientInfo


class BookingStatusUpdateRequest(BaseModel):
    status: str = Field(..., description="confirmed, cancelled or completed")


# ============================================================================
# Response Schemas (for outgoing data)
# ============================================================================

class SlotResponse(BaseModel):
    time: str
    end: str
    local_time: str
    available: bool


class SlotListResponse(BaseModel):
    date: str
    service_id: Optional[str]
    slots: List[SlotResponse]


class WeekSlotsResponse(BaseModel):
    week_start: str
    service_id: Optional[str]
    days: Dict[str, List[SlotResponse]]


class BookingCreatedResponse(BaseModel):
    id: str
    start_time: str
    end_time: str
    status: str


class BookingResponse(BaseModel):
    id: str
    profile_id: str
    service_id: str
    service_name: Optional[str]
    client_name: str
    client_phone: str
    client_email: Optional[str]
    notes: Optional[str]
    start_time: str
    end_time: str
    status: str
    created_at: Optional[str]


class BookingListResponse(BaseModel):
    total: int
    bookings: List[BookingResponse]
