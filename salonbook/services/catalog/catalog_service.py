# salonbook/services/catalog/catalog_service.py
"""Service catalog management for business owners"""
from decimal import Decimal
from typing import List, Optional
from uuid import UUID
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from salonbook.core.exceptions import NotFound, StoreUnavailable, ValidationError
from salonbook.models.service import Service
from salonbook.services.store.schedule_store import ScheduleStore

logger = logging.getLogger(__name__)


class CatalogService:
    """CRUD over a profile's services"""

    @staticmethod
    def list_services(db: Session, profile_id: UUID, active_only: bool = False) -> List[Service]:
        return ScheduleStore(db).list_services(profile_id, active_only=active_only)

    @staticmethod
    def get_service(db: Session, profile_id: UUID, service_id: UUID) -> Service:
        service = ScheduleStore(db).get_service(profile_id, service_id)
        if not service:
            raise NotFound("Service not found")
        return service

    @staticmethod
    def create_service(
            db: Session,
            profile_id: UUID,
            name: str,
            duration_minutes: int,
            price: Decimal
    ) -> Service:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Service name is required")
        if duration_minutes <= 0:
            raise ValidationError("Duration must be a positive number of minutes")
        if price < 0:
            raise ValidationError("Price cannot be negative")

        service = Service(
            profile_id=profile_id,
            name=name,
            duration_minutes=duration_minutes,
            price=Decimal(str(price)),
            is_active=True
        )
        CatalogService._commit(db, service, "creating")
        logger.info(f"Created service {service.id}: {service.name}")
        return service

    @staticmethod
    def update_service(db: Session, profile_id: UUID, service_id: UUID, updates: dict) -> Service:
        service = CatalogService.get_service(db, profile_id, service_id)

        if updates.get("name") is not None:
            name = updates["name"].strip()
            if not name:
                raise ValidationError("Service name is required")
            service.name = name
        if updates.get("duration_minutes") is not None:
            if updates["duration_minutes"] <= 0:
                raise ValidationError("Duration must be a positive number of minutes")
            service.duration_minutes = updates["duration_minutes"]
        if updates.get("price") is not None:
            if updates["price"] < 0:
                raise ValidationError("Price cannot be negative")
            service.price = Decimal(str(updates["price"]))
        if updates.get("is_active") is not None:
            service.is_active = updates["is_active"]

        CatalogService._commit(db, service, "updating")
        return service

    @staticmethod
    def toggle_active(db: Session, profile_id: UUID, service_id: UUID) -> Service:
        service = CatalogService.get_service(db, profile_id, service_id)
        service.is_active = not service.is_active
        CatalogService._commit(db, service, "toggling")
        logger.info(f"Service {service.id} is_active={service.is_active}")
        return service

    @staticmethod
    def delete_service(db: Session, profile_id: UUID, service_id: UUID) -> None:
        """Services that already have bookings can only be deactivated"""
        service = CatalogService.get_service(db, profile_id, service_id)

        if ScheduleStore(db).service_has_bookings(service.id):
            raise ValidationError("Service has bookings; deactivate it instead of deleting")

        try:
            db.delete(service)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error deleting service {service_id}: {e}", exc_info=True)
            raise StoreUnavailable("Could not delete service. Please try again.") from e

        logger.info(f"Deleted service {service_id}")

    @staticmethod
    def _commit(db: Session, service: Service, action: str) -> None:
        try:
            db.add(service)
            db.commit()
            db.refresh(service)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error {action} service: {e}", exc_info=True)
            raise StoreUnavailable("Could not save service. Please try again.") from e
