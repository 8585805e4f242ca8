# courier_api/shared/database/models.py
from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, func
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# =====================================================
# LOOKUP TABLES
# =====================================================

class User(Base):
    """Customer placing courier orders"""
    __tablename__ = "Users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=False, unique=True)
    phone = Column(String(20))


class Admin(Base):
    """Admin managing courier orders"""
    __tablename__ = "Admins"

    admin_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=False, unique=True)


# =====================================================
# COURIER ORDERS
# =====================================================

class Courier(Base):
    """Courier order. Created and updated only through the stored procedures."""
    __tablename__ = "Couriers"

    courier_id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("Users.user_id", ondelete="CASCADE"), nullable=False)
    managed_by_admin_id = Column(Integer, ForeignKey("Admins.admin_id", ondelete="SET NULL"))
    bill_number = Column(String(50), nullable=False, unique=True)
    pickup_address = Column(Text, nullable=False)
    delivery_address = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, server_default="Pending")
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())


# =====================================================
# TRIGGER-OWNED TABLES (read-only from the API)
# =====================================================

class DeliveryHistory(Base):
    __tablename__ = "Delivery_History"

    history_id = Column(Integer, primary_key=True, autoincrement=True)
    courier_id = Column(Integer, ForeignKey("Couriers.courier_id", ondelete="CASCADE"), nullable=False)
    old_status = Column(String(20))
    new_status = Column(String(20), nullable=False)
    changed_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    changed_by_admin_email = Column(String(100))


class CourierAudit(Base):
    __tablename__ = "Courier_Audit"

    audit_id = Column(Integer, primary_key=True, autoincrement=True)
    courier_id = Column(Integer, ForeignKey("Couriers.courier_id", ondelete="CASCADE"), nullable=False)
    action_type = Column(String(20), nullable=False)
    old_status = Column(String(20))
    new_status = Column(String(20))
    changed_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    admin_email = Column(String(100))
