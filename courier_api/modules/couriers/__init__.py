# courier_api/modules/couriers/__init__.py
"""
Couriers module - courier orders backed by stored routines

Operations:
- Create order: CALL AddCourierOrder
- Update status: CALL UpdateCourierStatus (fires after_courier_status_update)
- Read status: SELECT GetCourierStatus
- Read trigger output: Delivery_History + Courier_Audit
- Listings for the UI (couriers, users, admins) and delete

Architecture:
- router.py: HTTP endpoints
- service.py: presence validation and error translation
- repository.py: SQL against the routines and tables
- schemas.py: request/response models
"""

from .router import router
from .service import CourierService
from .repository import CourierRepository

__all__ = [
    "router",
    "CourierService",
    "CourierRepository"
]
