# courier_api/modules/reports/__init__.py
"""
Reports module - read-only analytical queries

- join: Couriers + Users + Admins
- nested: customers with delivered couriers
- aggregate: couriers grouped by status
- admin-performance / customer-activity
"""

from .router import router
from .service import ReportsService
from .repository import ReportsRepository

__all__ = [
    "router",
    "ReportsService",
    "ReportsRepository"
]
