"""
Working Hours Dashboard Routes
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from salonbook.config.database import get_db
from salonbook.models.profile import Profile
from salonbook.api.dependencies import get_current_profile
from salonbook.schemas.availability import (
    WeeklyHoursRequest,
    WeeklyHoursResponse,
    AvailabilityWindowResponse,
)
from salonbook.services.availability.availability_service import AvailabilityService

router = APIRouter(prefix="/availability", tags=["dashboard-availability"])


def _to_response(windows) -> WeeklyHoursResponse:
    return WeeklyHoursResponse(
        days=[AvailabilityWindowResponse(**w.to_dict()) for w in windows]
    )


@router.get("", response_model=WeeklyHoursResponse)
async def get_working_hours(
        current_profile: Profile = Depends(get_current_profile),
        db: Session = Depends(get_db)
):
    """Open days only; a missing day means closed"""
    return _to_response(AvailabilityService.get_weekly_hours(db, current_profile.id))


@router.put("", response_model=WeeklyHoursResponse)
async def save_working_hours(
        request: WeeklyHoursRequest,
        current_profile: Profile = Depends(get_current_profile),
        db: Session = Depends(get_db)
):
    """
    Save the week. Enabled days are created or updated, disabled days are
    removed. Changes apply to slot lists immediately; existing bookings stay.
    """
    windows = AvailabilityService.replace_weekly_hours(
        db,
        current_profile.id,
        [day.model_dump() for day in request.days]
    )
    return _to_response(windows)
