"""
Pydantic schemas for the service catalog
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from decimal import Decimal


class ServiceCreate(BaseModel):
    """Request model for creating a service"""
    name: str = Field(..., min_length=1, max_length=200)
    duration_minutes: int = Field(..., gt=0, description="Duration in minutes")
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)


class ServiceUpdate(BaseModel):
    """Request model for updating a service"""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    duration_minutes: Optional[int] = Field(None, gt=0)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    is_active: Optional[bool] = None


class ServiceResponse(BaseModel):
    """Response model for service data"""
    id: str
    profile_id: str
    name: str
    duration_minutes: int
    formatted_duration: str
    price: Optional[float]
    is_active: bool
    created_at: Optional[str]


class ServiceListResponse(BaseModel):
    """Response model for service list"""
    total: int
    services: List[ServiceResponse]
