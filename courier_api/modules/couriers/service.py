# courier_api/modules/couriers/service.py
from typing import Any, List, Optional, Tuple
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from courier_api.core.exceptions import ValidationError, NotFoundError, PersistenceError
from .repository import CourierRepository
from .schemas import (
    CourierCreateRequest, CourierStatusUpdateRequest,
    CourierCreateResponse, CourierStatusUpdateResponse, CourierStatusResponse,
    CourierLogsResponse, CourierListResponse, CourierDeleteResponse, DeletedCourier
)

logger = logging.getLogger(__name__)

TRIGGER_INFO = "These records were automatically created by the after_courier_status_update trigger"


def _missing(fields: List[Tuple[str, Any]]) -> List[str]:
    """Names of fields that are absent, empty, blank or zero"""
    return [
        name for name, value in fields
        if not value or (isinstance(value, str) and not value.strip())
    ]


class CourierService:
    def __init__(self, db: Optional[Session], repository: Optional[CourierRepository] = None):
        self.db = db
        self.repository = repository or CourierRepository(db)

    def add_courier(self, payload: CourierCreateRequest) -> CourierCreateResponse:
        """Validate presence, then delegate to AddCourierOrder"""
        missing = _missing([
            ("customer_id", payload.customer_id),
            ("admin_id", payload.admin_id),
            ("bill_number", payload.bill_number),
            ("pickup_address", payload.pickup_address),
            ("delivery_address", payload.delivery_address),
        ])
        if missing:
            raise ValidationError("All fields are required", details={"missing_fields": missing})

        try:
            rows = self.repository.add_courier_order(
                payload.customer_id,
                payload.admin_id,
                payload.bill_number,
                payload.pickup_address,
                payload.delivery_address
            )
        except SQLAlchemyError as e:
            logger.exception("Error adding courier")
            raise PersistenceError("Failed to add courier order", e)

        return CourierCreateResponse(
            success=True,
            message="Courier order added successfully",
            data=rows
        )

    def update_status(self, courier_id: int, payload: CourierStatusUpdateRequest) -> CourierStatusUpdateResponse:
        """Delegate to UpdateCourierStatus; transition rules live in the routine"""
        missing = _missing([
            ("new_status", payload.new_status),
            ("changed_by_admin_email", payload.changed_by_admin_email),
        ])
        if missing:
            raise ValidationError("Status and admin email are required", details={"missing_fields": missing})

        try:
            self.repository.update_courier_status(
                courier_id, payload.new_status, payload.changed_by_admin_email
            )
        except SQLAlchemyError as e:
            logger.exception(f"Error updating courier {courier_id} status")
            raise PersistenceError("Failed to update courier status", e)

        return CourierStatusUpdateResponse(
            success=True,
            message="Courier status updated successfully",
            courier_id=courier_id,
            new_status=payload.new_status
        )

    def get_status(self, courier_id: int) -> CourierStatusResponse:
        try:
            status = self.repository.get_courier_status(courier_id)
        except SQLAlchemyError as e:
            logger.exception(f"Error getting courier {courier_id} status")
            raise PersistenceError("Failed to get courier status", e)

        if status is None:
            raise NotFoundError()

        return CourierStatusResponse(
            success=True,
            message="Status retrieved",
            courier_id=courier_id,
            status=status
        )

    def get_logs(self, courier_id: int) -> CourierLogsResponse:
        """History and audit rows; empty lists are a valid answer"""
        try:
            delivery_history = self.repository.get_delivery_history(courier_id)
            audit_logs = self.repository.get_audit_logs(courier_id)
        except SQLAlchemyError as e:
            logger.exception(f"Error fetching logs for courier {courier_id}")
            raise PersistenceError("Failed to fetch logs", e)

        return CourierLogsResponse(
            success=True,
            message="Logs retrieved successfully",
            courier_id=courier_id,
            delivery_history=delivery_history,
            audit_logs=audit_logs,
            trigger_info=TRIGGER_INFO
        )

    def list_couriers(self) -> CourierListResponse:
        try:
            couriers = self.repository.get_all_couriers()
        except SQLAlchemyError as e:
            logger.exception("Error fetching couriers")
            raise PersistenceError("Failed to fetch couriers", e)

        return CourierListResponse(success=True, count=len(couriers), data=couriers)

    def list_users(self) -> CourierListResponse:
        try:
            users = self.repository.get_users()
        except SQLAlchemyError as e:
            logger.exception("Error fetching users")
            raise PersistenceError("Failed to fetch users", e)

        return CourierListResponse(success=True, count=len(users), data=users)

    def list_admins(self) -> CourierListResponse:
        try:
            admins = self.repository.get_admins()
        except SQLAlchemyError as e:
            logger.exception("Error fetching admins")
            raise PersistenceError("Failed to fetch admins", e)

        return CourierListResponse(success=True, count=len(admins), data=admins)

    def delete_courier(self, courier_id: int) -> CourierDeleteResponse:
        """Existence check first; no DELETE is issued for an unknown id"""
        try:
            courier = self.repository.find_courier(courier_id)
            if courier is None:
                raise NotFoundError()
            self.repository.delete_courier(courier_id)
        except SQLAlchemyError as e:
            logger.exception(f"Error deleting courier {courier_id}")
            raise PersistenceError("Failed to delete courier", e)

        return CourierDeleteResponse(
            success=True,
            message=f"Courier #{courier_id} ({courier['bill_number']}) deleted successfully",
            deleted_courier=DeletedCourier(**courier)
        )
