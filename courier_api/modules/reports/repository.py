# courier_api/modules/reports/repository.py
from sqlalchemy.orm import Session
from sqlalchemy import text
from typing import List, Dict, Any

from courier_api.shared.schemas.common import CourierStatus

class ReportsRepository:
    """Fixed read-only queries over Couriers, Users and Admins"""

    def __init__(self, db: Session):
        self.db = db

    def _fetch(self, query, params: Dict[str, Any] = None) -> List[Dict[str, Any]]:
        return [dict(row) for row in self.db.execute(query, params or {}).mappings()]

    # ==================== JOIN ====================

    def get_join_report(self) -> List[Dict[str, Any]]:
        """Couriers with required customer and optional admin"""
        query = text("""
            SELECT
                T1.courier_id,
                T1.bill_number,
                T1.status,
                T1.pickup_address,
                T1.delivery_address,
                T1.created_at,
                T2.name AS customer_name,
                T2.email AS customer_email,
                T3.name AS admin_name,
                T3.email AS admin_email
            FROM Couriers T1
            JOIN Users T2 ON T1.customer_id = T2.user_id
            LEFT JOIN Admins T3 ON T1.managed_by_admin_id = T3.admin_id
            ORDER BY T1.created_at DESC
        """)
        return self._fetch(query)

    # ==================== NESTED ====================

    def get_delivered_customers(self) -> List[Dict[str, Any]]:
        """Users with at least one delivered courier (IN subquery)"""
        query = text("""
            SELECT
                user_id,
                name,
                email,
                phone
            FROM Users
            WHERE user_id IN (
                SELECT customer_id
                FROM Couriers
                WHERE status = :delivered
            )
            ORDER BY name
        """)
        return self._fetch(query, {"delivered": CourierStatus.DELIVERED.value})

    # ==================== AGGREGATE ====================

    def get_status_summary(self) -> List[Dict[str, Any]]:
        query = text("""
            SELECT
                status,
                COUNT(*) AS count,
                COUNT(DISTINCT customer_id) AS unique_customers,
                MIN(created_at) AS earliest_order,
                MAX(created_at) AS latest_order
            FROM Couriers
            GROUP BY status
            ORDER BY count DESC
        """)
        return self._fetch(query)

    # ==================== PERFORMANCE ====================

    def get_admin_performance(self) -> List[Dict[str, Any]]:
        """Every admin, including those without couriers"""
        query = text("""
            SELECT
                a.admin_id,
                a.name AS admin_name,
                a.email AS admin_email,
                COUNT(c.courier_id) AS total_couriers_managed,
                SUM(CASE WHEN c.status = :delivered THEN 1 ELSE 0 END) AS delivered_count,
                SUM(CASE WHEN c.status = :in_transit THEN 1 ELSE 0 END) AS in_transit_count,
                SUM(CASE WHEN c.status = :pending THEN 1 ELSE 0 END) AS pending_count
            FROM Admins a
            LEFT JOIN Couriers c ON a.admin_id = c.managed_by_admin_id
            GROUP BY a.admin_id, a.name, a.email
            ORDER BY total_couriers_managed DESC
        """)
        rows = self._fetch(query, {
            "delivered": CourierStatus.DELIVERED.value,
            "in_transit": CourierStatus.IN_TRANSIT.value,
            "pending": CourierStatus.PENDING.value
        })

        # MySQL returns SUM() as DECIMAL
        counters = ("total_couriers_managed", "delivered_count", "in_transit_count", "pending_count")
        for row in rows:
            for key in counters:
                row[key] = int(row[key] or 0)
        return rows

    def get_customer_activity(self) -> List[Dict[str, Any]]:
        """Users with one or more orders; zero-order users dropped after grouping"""
        query = text("""
            SELECT
                u.user_id,
                u.name AS customer_name,
                u.email,
                COUNT(c.courier_id) AS total_orders,
                GROUP_CONCAT(DISTINCT c.status) AS order_statuses
            FROM Users u
            LEFT JOIN Couriers c ON u.user_id = c.customer_id
            GROUP BY u.user_id, u.name, u.email
            HAVING COUNT(c.courier_id) > 0
            ORDER BY total_orders DESC
        """)
        rows = self._fetch(query)

        for row in rows:
            statuses = row["order_statuses"] or ""
            row["order_statuses"] = [s for s in statuses.split(",") if s]
        return rows
