# courier_api/modules/reports/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from courier_api.config.database import get_db
from .service import ReportsService
from .schemas import ReportResponse

router = APIRouter()


def get_reports_service(db: Session = Depends(get_db)) -> ReportsService:
    return ReportsService(db)


@router.get("/join", response_model=ReportResponse)
def join_report(service: ReportsService = Depends(get_reports_service)):
    """
    JOIN across Couriers, Users and Admins

    - Customer is required (inner join)
    - Admin is optional (left join)
    - Newest couriers first
    """
    return service.join_report()

@router.get("/nested", response_model=ReportResponse)
def nested_report(service: ReportsService = Depends(get_reports_service)):
    """Users with at least one `Delivered` courier, via an IN subquery"""
    return service.nested_report()

@router.get("/aggregate", response_model=ReportResponse)
def aggregate_report(service: ReportsService = Depends(get_reports_service)):
    """
    Couriers grouped by status

    **Per status:** order count, distinct customers, earliest and latest
    order. Ordered by count, highest first.
    """
    return service.aggregate_report()

@router.get("/admin-performance", response_model=ReportResponse)
def admin_performance_report(service: ReportsService = Depends(get_reports_service)):
    """Managed couriers per admin, admins without couriers included"""
    return service.admin_performance_report()

@router.get("/customer-activity", response_model=ReportResponse)
def customer_activity_report(service: ReportsService = Depends(get_reports_service)):
    """Order totals and distinct statuses for customers with at least one order"""
    return service.customer_activity_report()

@router.get("/health")
def reports_health():
    return {
        "service": "reports",
        "status": "healthy",
        "version": "1.0.0",
        "features": [
            "JOIN report",
            "NESTED report",
            "AGGREGATE report",
            "Admin performance",
            "Customer activity"
        ]
    }
