"""
Pydantic schemas for business profiles
"""
from pydantic import BaseModel, Field
from typing import Optional


class ProfileCreateRequest(BaseModel):
    """Slug is generated from the name when omitted"""
    name: str = Field(..., min_length=1, max_length=200)
    slug: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)
    timezone: Optional[str] = Field(None, max_length=50)
    email: Optional[str] = Field(None, max_length=255, description="Defaults to the email in the access token")


class ProfileUpdateRequest(BaseModel):
    """
    All fields are optional - only send what you want to update.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    phone: Optional[str] = Field(None, max_length=30)
    timezone: Optional[str] = Field(None, max_length=50)
    is_active: Optional[bool] = None


class ProfileResponse(BaseModel):
    id: str
    slug: str
    name: str
    email: str
    phone: Optional[str]
    timezone: str
    is_active: bool
    created_at: Optional[str]
    updated_at: Optional[str]


class PublicProfileResponse(BaseModel):
    """What clients see on the booking page"""
    slug: str
    name: str
    phone: Optional[str]
    timezone: str
