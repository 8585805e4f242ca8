from datetime import datetime
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from courier_api.config.database import get_db
from courier_api.main import app
from courier_api.modules.couriers.router import get_courier_service
from courier_api.modules.couriers.service import CourierService
from courier_api.shared.database.models import (
    Base, User, Admin, Courier, DeliveryHistory, CourierAudit
)


def db_failure(message: str = "Lost connection to MySQL server during query", errno: int = 2013):
    """An OperationalError shaped like the ones PyMySQL raises"""
    return OperationalError("CALL ...", {}, Exception(errno, message))


class InMemoryCourierRepository:
    """Stands in for the stored routines; records every call it receives."""

    def __init__(self):
        self.calls: List[str] = []
        self.couriers: Dict[int, Dict[str, Any]] = {}
        self.history: List[Dict[str, Any]] = []
        self.audit: List[Dict[str, Any]] = []
        self.next_id = 1
        self.fail_with: Optional[Exception] = None

    def _call(self, name: str):
        self.calls.append(name)
        if self.fail_with is not None:
            raise self.fail_with

    def add_courier_order(self, customer_id, admin_id, bill_number, pickup_address, delivery_address):
        self._call("add_courier_order")
        courier_id = self.next_id
        self.next_id += 1
        self.couriers[courier_id] = {
            "courier_id": courier_id,
            "customer_id": customer_id,
            "managed_by_admin_id": admin_id,
            "bill_number": bill_number,
            "pickup_address": pickup_address,
            "delivery_address": delivery_address,
            "status": "Pending",
            "created_at": datetime(2024, 1, 1, 12, 0, courier_id % 60),
        }
        return [{"courier_id": courier_id}]

    def update_courier_status(self, courier_id, new_status, admin_email):
        self._call("update_courier_status")
        courier = self.couriers[courier_id]
        self.history.append({
            "courier_id": courier_id,
            "old_status": courier["status"],
            "new_status": new_status,
            "changed_by_admin_email": admin_email,
        })
        courier["status"] = new_status

    def get_courier_status(self, courier_id):
        self._call("get_courier_status")
        courier = self.couriers.get(courier_id)
        return courier["status"] if courier else None

    def get_delivery_history(self, courier_id):
        self._call("get_delivery_history")
        return [h for h in reversed(self.history) if h["courier_id"] == courier_id]

    def get_audit_logs(self, courier_id):
        self._call("get_audit_logs")
        return [a for a in reversed(self.audit) if a["courier_id"] == courier_id]

    def get_all_couriers(self):
        self._call("get_all_couriers")
        return sorted(self.couriers.values(), key=lambda c: c["created_at"], reverse=True)

    def get_users(self):
        self._call("get_users")
        return [{"user_id": 1, "name": "Ana", "email": "ana@example.com"}]

    def get_admins(self):
        self._call("get_admins")
        return [{"admin_id": 1, "name": "Root", "email": "root@example.com"}]

    def find_courier(self, courier_id):
        self._call("find_courier")
        courier = self.couriers.get(courier_id)
        if courier is None:
            return None
        return {"courier_id": courier["courier_id"], "bill_number": courier["bill_number"]}

    def delete_courier(self, courier_id):
        self._call("delete_courier")
        self.couriers.pop(courier_id, None)


@pytest.fixture
def fake_repository():
    return InMemoryCourierRepository()


@pytest.fixture
def courier_client(fake_repository):
    """Client whose courier routes hit the in-memory gateway"""
    app.dependency_overrides[get_courier_service] = lambda: CourierService(None, repository=fake_repository)
    yield TestClient(app)
    app.dependency_overrides.clear()


# ==================== SQLITE ====================

@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded_db(db):
    """Three users (one without orders), two admins (one idle), five couriers.

    History and audit rows are inserted directly here, standing in for the
    status-update trigger.
    """
    db.add_all([
        User(user_id=1, name="Carla", email="carla@example.com", phone="555-0101"),
        User(user_id=2, name="Bruno", email="bruno@example.com", phone="555-0102"),
        User(user_id=3, name="Alice", email="alice@example.com", phone="555-0103"),
        Admin(admin_id=1, name="Dana", email="dana@example.com"),
        Admin(admin_id=2, name="Eli", email="eli@example.com"),
    ])
    db.flush()
    db.add_all([
        Courier(courier_id=1, customer_id=1, managed_by_admin_id=1, bill_number="BN-001",
                pickup_address="1 Dock St", delivery_address="9 High St",
                status="Delivered", created_at=datetime(2024, 3, 1, 9, 0)),
        Courier(courier_id=2, customer_id=1, managed_by_admin_id=1, bill_number="BN-002",
                pickup_address="1 Dock St", delivery_address="3 Elm Rd",
                status="In Transit", created_at=datetime(2024, 3, 2, 9, 0)),
        Courier(courier_id=3, customer_id=2, managed_by_admin_id=1, bill_number="BN-003",
                pickup_address="7 Mill Ln", delivery_address="2 Oak Ave",
                status="Pending", created_at=datetime(2024, 3, 3, 9, 0)),
        Courier(courier_id=4, customer_id=2, managed_by_admin_id=None, bill_number="BN-004",
                pickup_address="7 Mill Ln", delivery_address="5 Pine Ct",
                status="Pending", created_at=datetime(2024, 3, 4, 9, 0)),
        Courier(courier_id=7, customer_id=1, managed_by_admin_id=1, bill_number="BN-100",
                pickup_address="1 Dock St", delivery_address="8 Bay Rd",
                status="Delivered", created_at=datetime(2024, 3, 5, 9, 0)),
    ])
    db.flush()
    db.add_all([
        DeliveryHistory(courier_id=1, old_status="Pending", new_status="In Transit",
                        changed_at=datetime(2024, 3, 1, 10, 0), changed_by_admin_email="dana@example.com"),
        DeliveryHistory(courier_id=1, old_status="In Transit", new_status="Delivered",
                        changed_at=datetime(2024, 3, 1, 15, 0), changed_by_admin_email="dana@example.com"),
        CourierAudit(courier_id=1, action_type="UPDATE", old_status="Pending", new_status="In Transit",
                     changed_at=datetime(2024, 3, 1, 10, 0), admin_email="dana@example.com"),
        CourierAudit(courier_id=1, action_type="UPDATE", old_status="In Transit", new_status="Delivered",
                     changed_at=datetime(2024, 3, 1, 15, 0), admin_email="dana@example.com"),
    ])
    db.commit()
    return db


@pytest.fixture
def sqlite_client(engine, seeded_db):
    """Client running the real SQL against the seeded SQLite database"""
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
