# ============================================================================
# salonbook/api/v1/public/booking.py
# Public booking page endpoints - no authentication, thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, Query, Path
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional
from uuid import UUID
import logging

from salonbook.config.database import get_db
from salonbook.schemas.booking import (
    BookingCreateRequest,
    BookingCreatedResponse,
    SlotListResponse,
    WeekSlotsResponse,
)
from salonbook.schemas.profile import PublicProfileResponse
from salonbook.schemas.service import ServiceListResponse, ServiceResponse
from salonbook.services.availability.availability_service import AvailabilityService
from salonbook.services.booking.booking_service import BookingService
from salonbook.services.catalog.catalog_service import CatalogService
from salonbook.services.profile.profile_service import ProfileService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/profiles", tags=["public-booking"])


@router.get("/{slug}", response_model=PublicProfileResponse)
async def get_profile(
        slug: str = Path(..., description="Public URL name of the business"),
        db: Session = Depends(get_db)
):
    profile = ProfileService.get_public_profile(db, slug)
    return PublicProfileResponse(
        slug=profile.slug,
        name=profile.name,
        phone=profile.phone,
        timezone=profile.timezone
    )


@router.get("/{slug}/services", response_model=ServiceListResponse)
async def list_active_services(
        slug: str,
        db: Session = Depends(get_db)
):
    """Services a client can book (active only)"""
    profile = ProfileService.get_public_profile(db, slug)
    services = CatalogService.list_services(db, profile.id, active_only=True)
    return ServiceListResponse(
        total=len(services),
        services=[ServiceResponse(**s.to_dict()) for s in services]
    )


@router.get("/{slug}/slots", response_model=SlotListResponse)
async def list_slots(
        slug: str,
        date: date = Query(..., description="Local calendar day, YYYY-MM-DD"),
        service_id: Optional[UUID] = Query(None, description="Selected service"),
        db: Session = Depends(get_db)
):
    """
    Bookable start times for one day.
    Returns an empty list when the business is closed or no service is selected.
    """
    profile = ProfileService.get_public_profile(db, slug)
    slots = AvailabilityService.list_slots(db, profile.id, date, service_id)
    return {
        "date": date.isoformat(),
        "service_id": str(service_id) if service_id else None,
        "slots": [slot.to_dict() for slot in slots]
    }


@router.get("/{slug}/slots/week", response_model=WeekSlotsResponse)
async def list_week_slots(
        slug: str,
        week_start: date = Query(..., description="First day of the week, YYYY-MM-DD"),
        service_id: Optional[UUID] = Query(None, description="Selected service"),
        db: Session = Depends(get_db)
):
    profile = ProfileService.get_public_profile(db, slug)
    days = AvailabilityService.list_week_slots(db, profile.id, week_start, service_id)
    return {
        "week_start": week_start.isoformat(),
        "service_id": str(service_id) if service_id else None,
        "days": {day: [slot.to_dict() for slot in slots] for day, slots in days.items()}
    }


@router.post("/{slug}/bookings", response_model=BookingCreatedResponse, status_code=201)
async def create_booking(
        request: BookingCreateRequest,
        slug: str,
        db: Session = Depends(get_db)
):
    """
    Book a slot. Responds 409 with reason "slot_taken" when someone else
    booked an overlapping time since the slot list was loaded.
    """
    profile = ProfileService.get_public_profile(db, slug)
    created = BookingService.create_booking(
        db=db,
        profile_id=profile.id,
        service_id=request.service_id,
        booking_date=request.date,
        time_of_day=request.time,
        client_info=request.client.model_dump()
    )
    return created.to_dict()
