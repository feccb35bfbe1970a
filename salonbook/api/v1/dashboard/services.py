# salonbook/api/v1/dashboard/services.py
"""
Service Management API Endpoints
Handles CRUD operations for the owner's service catalog
"""
from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session
from uuid import UUID

from salonbook.config.database import get_db
from salonbook.models.profile import Profile
from salonbook.api.dependencies import get_current_profile
from salonbook.schemas.service import ServiceCreate, ServiceUpdate, ServiceResponse, ServiceListResponse
from salonbook.services.catalog.catalog_service import CatalogService

router = APIRouter(prefix="/services", tags=["dashboard-services"])


@router.get("", response_model=ServiceListResponse)
async def list_services(
        current_profile: Profile = Depends(get_current_profile),
        db: Session = Depends(get_db)
):
    """All services, active and inactive, oldest first"""
    services = CatalogService.list_services(db, current_profile.id)
    return ServiceListResponse(
        total=len(services),
        services=[ServiceResponse(**s.to_dict()) for s in services]
    )


@router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(
        service_data: ServiceCreate,
        current_profile: Profile = Depends(get_current_profile),
        db: Session = Depends(get_db)
):
    service = CatalogService.create_service(
        db,
        current_profile.id,
        name=service_data.name,
        duration_minutes=service_data.duration_minutes,
        price=service_data.price
    )
    return service.to_dict()


@router.patch("/{service_id}", response_model=ServiceResponse)
async def update_service(
        service_data: ServiceUpdate,
        service_id: UUID = Path(..., description="The service ID"),
        current_profile: Profile = Depends(get_current_profile),
        db: Session = Depends(get_db)
):
    service = CatalogService.update_service(
        db, current_profile.id, service_id, service_data.model_dump(exclude_unset=True)
    )
    return service.to_dict()


@router.post("/{service_id}/toggle", response_model=ServiceResponse)
async def toggle_service(
        service_id: UUID = Path(..., description="The service ID"),
        current_profile: Profile = Depends(get_current_profile),
        db: Session = Depends(get_db)
):
    """Show or hide a service on the public booking page"""
    service = CatalogService.toggle_active(db, current_profile.id, service_id)
    return service.to_dict()


@router.delete("/{service_id}", status_code=204)
async def delete_service(
        service_id: UUID = Path(..., description="The service ID"),
        current_profile: Profile = Depends(get_current_profile),
        db: Session = Depends(get_db)
):
    CatalogService.delete_service(db, current_profile.id, service_id)
