# courier_api/modules/reports/service.py
from typing import Any, Callable, Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from courier_api.core.exceptions import PersistenceError
from .repository import ReportsRepository
from .schemas import ReportResponse

logger = logging.getLogger(__name__)


class ReportsService:
    def __init__(self, db: Optional[Session], repository: Optional[ReportsRepository] = None):
        self.db = db
        self.repository = repository or ReportsRepository(db)

    def _run(
        self,
        fetch: Callable[[], List[Dict[str, Any]]],
        name: str,
        message: str,
        query_type: str,
        description: str
    ) -> ReportResponse:
        try:
            rows = fetch()
        except SQLAlchemyError as e:
            logger.exception(f"Error executing {name} query")
            raise PersistenceError(f"Failed to execute {name} query", e)

        return ReportResponse(
            success=True,
            message=message,
            query_type=query_type,
            description=description,
            count=len(rows),
            data=rows
        )

    def join_report(self) -> ReportResponse:
        return self._run(
            self.repository.get_join_report,
            name="JOIN",
            message="JOIN Query executed successfully",
            query_type="JOIN (Couriers + Users + Admins)",
            description="Couriers with their customer and, when assigned, their admin"
        )

    def nested_report(self) -> ReportResponse:
        return self._run(
            self.repository.get_delivered_customers,
            name="NESTED",
            message="NESTED Query executed successfully",
            query_type="NESTED (Users with Delivered couriers)",
            description="Finds all customers who have at least one delivered courier"
        )

    def aggregate_report(self) -> ReportResponse:
        return self._run(
            self.repository.get_status_summary,
            name="AGGREGATE",
            message="AGGREGATE Query executed successfully",
            query_type="AGGREGATE (GROUP BY status with COUNT)",
            description="Groups couriers by status and counts orders"
        )

    def admin_performance_report(self) -> ReportResponse:
        return self._run(
            self.repository.get_admin_performance,
            name="admin performance",
            message="Admin Performance Report",
            query_type="LEFT JOIN + GROUP BY (Admins + Couriers)",
            description="Couriers managed by each admin, split by status"
        )

    def customer_activity_report(self) -> ReportResponse:
        return self._run(
            self.repository.get_customer_activity,
            name="customer activity",
            message="Customer Activity Report",
            query_type="GROUP BY + HAVING (Users + Couriers)",
            description="Customers with at least one order and the statuses their orders hold"
        )
