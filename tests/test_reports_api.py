import pytest
from fastapi.testclient import TestClient

from conftest import db_failure
from courier_api.main import app
from courier_api.modules.reports.router import get_reports_service
from courier_api.modules.reports.service import ReportsService

REPORTS = ["join", "nested", "aggregate", "admin-performance", "customer-activity"]


class FailingReportsRepository:
    def _fail(self):
        raise db_failure("Table 'courier_db.Couriers' doesn't exist", 1146)

    get_join_report = _fail
    get_delivered_customers = _fail
    get_status_summary = _fail
    get_admin_performance = _fail
    get_customer_activity = _fail


@pytest.fixture
def failing_client():
    app.dependency_overrides[get_reports_service] = lambda: ReportsService(
        None, repository=FailingReportsRepository()
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.mark.parametrize("report", REPORTS)
def test_report_envelope(sqlite_client, report):
    response = sqlite_client.get(f"/api/reports/{report}")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["query_type"]
    assert body["count"] == len(body["data"])


@pytest.mark.parametrize("report", REPORTS)
def test_report_database_error(failing_client, report):
    response = failing_client.get(f"/api/reports/{report}")

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Table 'courier_db.Couriers' doesn't exist"


def test_aggregate_report_matches_listing(sqlite_client):
    aggregate = sqlite_client.get("/api/reports/aggregate").json()
    couriers = sqlite_client.get("/api/couriers").json()

    assert sum(row["count"] for row in aggregate["data"]) == couriers["count"]


def test_customer_activity_report_returns_status_lists(sqlite_client):
    data = sqlite_client.get("/api/reports/customer-activity").json()["data"]

    assert {row["customer_name"] for row in data} == {"Carla", "Bruno"}
    assert all(isinstance(row["order_statuses"], list) for row in data)


def test_delete_over_sql(sqlite_client):
    response = sqlite_client.delete("/api/couriers/7")

    assert response.status_code == 200
    assert response.json()["deleted_courier"] == {"courier_id": 7, "bill_number": "BN-100"}
    assert sqlite_client.delete("/api/couriers/7").status_code == 404


def test_reports_health(sqlite_client):
    assert sqlite_client.get("/api/reports/health").json()["service"] == "reports"


def test_root_and_health():
    client = TestClient(app)

    assert client.get("/health").json()["status"] == "healthy"
    assert client.get("/").json()["api"] == "/api"
