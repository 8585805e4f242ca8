# courier_api/modules/couriers/repository.py
from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Dict, Any, Optional
import logging

from courier_api.shared.database.models import User, Admin, Courier

logger = logging.getLogger(__name__)

class CourierRepository:
    """Gateway to the courier stored routines and tables.

    One method per routine. Status history and audit rows are written only by
    the ``after_courier_status_update`` trigger; this class reads them back.
    """

    def __init__(self, db: Session):
        self.db = db

    # ==================== STORED ROUTINES ====================

    def add_courier_order(
        self,
        customer_id: int,
        admin_id: int,
        bill_number: str,
        pickup_address: str,
        delivery_address: str
    ) -> List[Dict[str, Any]]:
        """CALL AddCourierOrder(customer, admin, bill, pickup, delivery)"""
        try:
            result = self.db.execute(
                text("CALL AddCourierOrder(:customer_id, :admin_id, :bill_number, :pickup_address, :delivery_address)"),
                {
                    "customer_id": customer_id,
                    "admin_id": admin_id,
                    "bill_number": bill_number,
                    "pickup_address": pickup_address,
                    "delivery_address": delivery_address
                }
            )
            # First result set of the procedure, if it selects anything
            rows = [dict(row) for row in result.mappings()] if result.returns_rows else []
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        logger.info(f"Courier order {bill_number} added for customer {customer_id}")
        return rows

    def update_courier_status(self, courier_id: int, new_status: str, admin_email: str) -> None:
        """CALL UpdateCourierStatus(id, status, email). Fires after_courier_status_update."""
        try:
            self.db.execute(
                text("CALL UpdateCourierStatus(:courier_id, :new_status, :admin_email)"),
                {"courier_id": courier_id, "new_status": new_status, "admin_email": admin_email}
            )
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        logger.info(f"Courier {courier_id} -> '{new_status}' by {admin_email}")

    def get_courier_status(self, courier_id: int) -> Optional[str]:
        """SELECT GetCourierStatus(id). None when the function yields nothing."""
        row = self.db.execute(
            text("SELECT GetCourierStatus(:courier_id) AS status"),
            {"courier_id": courier_id}
        ).mappings().first()

        if row is None:
            return None
        return row["status"]

    # ==================== TRIGGER OUTPUT ====================

    def get_delivery_history(self, courier_id: int) -> List[Dict[str, Any]]:
        query = text("""
            SELECT
                history_id,
                courier_id,
                old_status,
                new_status,
                changed_at,
                changed_by_admin_email
            FROM Delivery_History
            WHERE courier_id = :courier_id
            ORDER BY changed_at DESC
        """)
        return [dict(row) for row in self.db.execute(query, {"courier_id": courier_id}).mappings()]

    def get_audit_logs(self, courier_id: int) -> List[Dict[str, Any]]:
        query = text("""
            SELECT
                audit_id,
                courier_id,
                action_type,
                old_status,
                new_status,
                changed_at,
                admin_email
            FROM Courier_Audit
            WHERE courier_id = :courier_id
            ORDER BY changed_at DESC
        """)
        return [dict(row) for row in self.db.execute(query, {"courier_id": courier_id}).mappings()]

    # ==================== LISTINGS ====================

    def get_all_couriers(self) -> List[Dict[str, Any]]:
        """Couriers with customer and admin names, newest first"""
        query = text("""
            SELECT
                c.courier_id,
                c.customer_id,
                c.managed_by_admin_id,
                c.bill_number,
                c.pickup_address,
                c.delivery_address,
                c.status,
                c.created_at,
                u.name AS customer_name,
                u.email AS customer_email,
                a.name AS admin_name,
                a.email AS admin_email
            FROM Couriers c
            LEFT JOIN Users u ON c.customer_id = u.user_id
            LEFT JOIN Admins a ON c.managed_by_admin_id = a.admin_id
            ORDER BY c.created_at DESC
        """)
        return [dict(row) for row in self.db.execute(query).mappings()]

    def get_users(self) -> List[Dict[str, Any]]:
        rows = self.db.query(User.user_id, User.name, User.email).order_by(User.name).all()
        return [row._asdict() for row in rows]

    def get_admins(self) -> List[Dict[str, Any]]:
        rows = self.db.query(Admin.admin_id, Admin.name, Admin.email).order_by(Admin.name).all()
        return [row._asdict() for row in rows]

    # ==================== DELETE ====================

    def find_courier(self, courier_id: int) -> Optional[Dict[str, Any]]:
        row = self.db.query(Courier.courier_id, Courier.bill_number).filter(
            Courier.courier_id == courier_id
        ).first()
        return row._asdict() if row else None

    def delete_courier(self, courier_id: int) -> None:
        """Dependent history/audit rows go with it (ON DELETE CASCADE)"""
        try:
            self.db.query(Courier).filter(
                Courier.courier_id == courier_id
            ).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        logger.info(f"Courier {courier_id} deleted")
