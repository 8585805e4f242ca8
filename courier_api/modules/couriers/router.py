# courier_api/modules/couriers/router.py
from typing import Optional
from fastapi import APIRouter, Body, Depends, Path, status
from sqlalchemy.orm import Session

from courier_api.config.database import get_db
from .service import CourierService
from .schemas import (
    CourierCreateRequest, CourierStatusUpdateRequest,
    CourierCreateResponse, CourierStatusUpdateResponse, CourierStatusResponse,
    CourierLogsResponse, CourierListResponse, CourierDeleteResponse
)

router = APIRouter()


def get_courier_service(db: Session = Depends(get_db)) -> CourierService:
    return CourierService(db)


@router.post("/add", response_model=CourierCreateResponse, status_code=status.HTTP_201_CREATED)
def add_courier(
    payload: Optional[CourierCreateRequest] = Body(None),
    service: CourierService = Depends(get_courier_service)
):
    """
    Create a courier order

    Executes `CALL AddCourierOrder(customer_id, admin_id, bill_number, pickup_address, delivery_address)`.

    **Validation:**
    - All five fields are required and non-empty
    - Nothing reaches the database when a field is missing
    """
    return service.add_courier(payload or CourierCreateRequest())

@router.put("/update-status/{courier_id}", response_model=CourierStatusUpdateResponse)
def update_courier_status(
    courier_id: int = Path(..., description="Courier ID"),
    payload: Optional[CourierStatusUpdateRequest] = Body(None),
    service: CourierService = Depends(get_courier_service)
):
    """
    Update the status of a courier order

    Executes `CALL UpdateCourierStatus(id, new_status, changed_by_admin_email)`.
    The `after_courier_status_update` trigger records history and audit rows
    in the same transaction. Invalid transitions are rejected by the routine.
    """
    return service.update_status(courier_id, payload or CourierStatusUpdateRequest())

@router.get("/status/{courier_id}", response_model=CourierStatusResponse)
def get_courier_status(
    courier_id: int = Path(..., description="Courier ID"),
    service: CourierService = Depends(get_courier_service)
):
    """Current status through `SELECT GetCourierStatus(id)`"""
    return service.get_status(courier_id)

@router.get("/data/users", response_model=CourierListResponse)
def get_users(service: CourierService = Depends(get_courier_service)):
    """Users for dropdown lists, ordered by name"""
    return service.list_users()

@router.get("/data/admins", response_model=CourierListResponse)
def get_admins(service: CourierService = Depends(get_courier_service)):
    """Admins for dropdown lists, ordered by name"""
    return service.list_admins()

@router.get("/health")
def couriers_health():
    """Health check for the couriers module"""
    return {
        "service": "couriers",
        "status": "healthy",
        "version": "1.0.0",
        "features": [
            "AddCourierOrder procedure",
            "UpdateCourierStatus procedure",
            "GetCourierStatus function",
            "after_courier_status_update trigger logs",
            "Courier listing and delete"
        ]
    }

@router.get("/{courier_id}/logs", response_model=CourierLogsResponse)
def get_courier_logs(
    courier_id: int = Path(..., description="Courier ID"),
    service: CourierService = Depends(get_courier_service)
):
    """
    Delivery history and audit logs for a courier

    **Includes:**
    - `Delivery_History` rows, newest first
    - `Courier_Audit` rows, newest first

    Both are written by the status-update trigger, never by the API.
    An unknown id returns two empty lists.
    """
    return service.get_logs(courier_id)

@router.get("", response_model=CourierListResponse)
def get_all_couriers(service: CourierService = Depends(get_courier_service)):
    """All couriers with customer and admin info, newest first"""
    return service.list_couriers()

@router.delete("/{courier_id}", response_model=CourierDeleteResponse)
def delete_courier(
    courier_id: int = Path(..., description="Courier ID"),
    service: CourierService = Depends(get_courier_service)
):
    """
    Delete a courier order

    Dependent history and audit rows are removed by the database
    (ON DELETE CASCADE).
    """
    return service.delete_courier(courier_id)
