"""
Profile Dashboard Routes
Token-authenticated endpoints for the owner's own business profile
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Dict, Any
from uuid import UUID

from salonbook.config.database import get_db
from salonbook.core.exceptions import ValidationError
from salonbook.models.profile import Profile
from salonbook.api.dependencies import get_current_profile, get_current_user_id, get_token_payload
from salonbook.schemas.profile import ProfileCreateRequest, ProfileUpdateRequest, ProfileResponse
from salonbook.services.profile.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["dashboard-profile"])


@router.post("", response_model=ProfileResponse, status_code=201)
async def create_profile(
        request: ProfileCreateRequest,
        user_id: UUID = Depends(get_current_user_id),
        payload: Dict[str, Any] = Depends(get_token_payload),
        db: Session = Depends(get_db)
):
    """First-time setup after sign-up"""
    email = request.email or payload.get("email")
    if not email:
        raise ValidationError("Email is required")

    profile = ProfileService.create_profile(
        db=db,
        user_id=user_id,
        email=email,
        name=request.name,
        slug=request.slug,
        phone=request.phone,
        timezone=request.timezone
    )
    return profile.to_dict()


@router.get("", response_model=ProfileResponse)
async def get_profile(current_profile: Profile = Depends(get_current_profile)):
    return current_profile.to_dict()


@router.patch("", response_model=ProfileResponse)
async def update_profile(
        request: ProfileUpdateRequest,
        current_profile: Profile = Depends(get_current_profile),
        db: Session = Depends(get_db)
):
    """Only send the fields you want to change"""
    updates = request.model_dump(exclude_unset=True)
    profile = ProfileService.update_profile(db, current_profile, updates)
    return profile.to_dict()
