# ============================================================================
# salonbook/api/v1/dashboard/bookings.py
# Token authenticated endpoints - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, Query, Path
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID

from salonbook.config.database import get_db
from salonbook.models.profile import Profile
from salonbook.api.dependencies import get_current_profile
from salonbook.schemas.booking import BookingListResponse, BookingResponse, BookingStatusUpdateRequest
from salonbook.services.booking.booking_service import BookingService

router = APIRouter(prefix="/bookings", tags=["dashboard-bookings"])


@router.get("", response_model=BookingListResponse)
async def list_bookings(
        status: Optional[str] = Query(None, description="Filter by status (pending, confirmed, cancelled, completed)"),
        current_profile: Profile = Depends(get_current_profile),
        db: Session = Depends(get_db)
):
    """Bookings of your business, latest start time first"""
    bookings = BookingService.list_bookings(db, current_profile.id, status)
    return BookingListResponse(
        total=len(bookings),
        bookings=[BookingResponse(**b.to_dict()) for b in bookings]
    )


@router.patch("/{booking_id}/status", response_model=BookingResponse)
async def update_booking_status(
        request: BookingStatusUpdateRequest,
        booking_id: UUID = Path(..., description="The booking ID"),
        current_profile: Profile = Depends(get_current_profile),
        db: Session = Depends(get_db)
):
    """Confirm, cancel or complete a booking"""
    booking = BookingService.update_status(db, current_profile.id, booking_id, request.status)
    return booking.to_dict()
