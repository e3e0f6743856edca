import pytest
from fastapi.testclient import TestClient

from budget_tracker.core.dependencies import get_finance_service
from budget_tracker.core.errors import PersistenceError
from budget_tracker.db.storage import JsonFileRepository, TransactionRepository
from budget_tracker.main import app
from budget_tracker.services.finance import FinanceService


class BrokenRepository(TransactionRepository):
    def load(self):
        raise PersistenceError("bucket unreachable")

    def save(self, transactions):
        raise PersistenceError("bucket unreachable")


@pytest.fixture(autouse=True)
def reset_overrides():
    yield
    app.dependency_overrides.clear()


def client_for(service):
    app.dependency_overrides[get_finance_service] = lambda: service
    return TestClient(app)


def json_client(tmp_path):
    service = FinanceService(JsonFileRepository(tmp_path / "store.json"))
    service.load()
    return client_for(service)


def post(client, **overrides):
    payload = {
        "type": "expense",
        "amount": 25.0,
        "description": "Lunch",
        "category": "Food",
        "date": "2024-01-10T12:00:00Z",
    }
    payload.update(overrides)
    return client.post("/api/transactions/", json=payload)


def test_create_and_list(tmp_path):
    client = json_client(tmp_path)
    response = post(client)
    assert response.status_code == 201
    body = response.json()
    assert body["transaction"]["id"]
    assert body["warning"] is None

    listed = client.get("/api/transactions/").json()
    assert [tx["id"] for tx in listed] == [body["transaction"]["id"]]


def test_invalid_payload_is_rejected(tmp_path):
    client = json_client(tmp_path)
    assert post(client, amount=0).status_code == 422
    assert post(client, description="").status_code == 422
    assert post(client, type="loan").status_code == 422


def test_list_filter_and_sort(tmp_path):
    client = json_client(tmp_path)
    post(client, amount=10.0)
    post(client, amount=30.0)
    post(client, type="income", amount=900.0, category="Salary")

    response = client.get("/api/transactions/", params={"type": "expense", "sort_by": "amount", "order": "desc"})
    assert [tx["amount"] for tx in response.json()] == [30.0, 10.0]


def test_delete_is_idempotent(tmp_path):
    client = json_client(tmp_path)
    tx_id = post(client).json()["transaction"]["id"]

    assert client.delete(f"/api/transactions/{tx_id}").json()["removed"] is True
    second = client.delete(f"/api/transactions/{tx_id}")
    assert second.status_code == 200
    assert second.json()["removed"] is False


def test_replace(tmp_path):
    client = json_client(tmp_path)
    tx_id = post(client).json()["transaction"]["id"]

    response = client.put(
        f"/api/transactions/{tx_id}",
        json={"type": "expense", "amount": 30.0, "description": "Dinner", "category": "Food",
              "date": "2024-01-11T19:00:00Z"},
    )
    assert response.status_code == 200
    assert response.json()["transaction"]["id"] != tx_id

    missing = client.put(f"/api/transactions/{tx_id}", json={"type": "expense", "amount": 1.0,
                                                            "description": "x", "category": "Food"})
    assert missing.status_code == 404


def test_reports(tmp_path):
    client = json_client(tmp_path)
    post(client, type="income", amount=1000.0, category="Salary", date="2024-01-05T09:00:00Z")
    post(client, amount=200.0, date="2024-01-10T09:00:00Z")
    post(client, amount=300.0, category="Housing", date="2024-02-02T09:00:00Z")

    assert client.get("/api/reports/totals").json() == {"income": 1000.0, "expense": 500.0, "savings": 0.0}
    assert client.get("/api/reports/totals/expense").json() == {"type": "expense", "total": 500.0}
    assert client.get("/api/reports/categories/expense").json() == {"Food": 200.0, "Housing": 300.0}

    monthly = client.get("/api/reports/monthly").json()
    assert [(m["label"], m["expense_sum"]) for m in monthly] == [("Feb", 300.0), ("Jan", 200.0)]
    assert len(client.get("/api/reports/monthly", params={"limit": 1}).json()) == 1


def test_trend_rejects_zero_window(tmp_path):
    client = json_client(tmp_path)
    assert client.get("/api/reports/trends/income", params={"months_back": 0}).status_code == 400
    body = client.get("/api/reports/trends/income", params={"months_back": 2}).json()
    assert body == {"current_total": 0.0, "previous_total": 0.0, "percentage_change": 0.0, "is_increase": False}


def test_dashboard_shape(tmp_path):
    client = json_client(tmp_path)
    body = client.get("/api/reports/dashboard").json()
    assert set(body["trends"]) == {"income", "expense", "savings"}
    assert body["balance"] == 0.0


def test_categories(tmp_path):
    client = json_client(tmp_path)
    assert "Salary" in client.get("/api/categories/income").json()["categories"]

    created = client.post("/api/categories/expense", json={"name": "Pets"})
    assert created.status_code == 201
    assert created.json()["categories"][-1] == "Pets"
    assert client.post("/api/categories/expense", json={"name": "Pets"}).status_code == 409
    assert client.post("/api/categories/expense", json={"name": "  "}).status_code == 400


def test_save_failure_is_a_warning():
    service = FinanceService(BrokenRepository())
    assert service.load() == "bucket unreachable"
    client = client_for(service)

    response = post(client)
    assert response.status_code == 201
    assert response.json()["warning"] == "bucket unreachable"
    assert len(client.get("/api/transactions/").json()) == 1


def test_health_reports_storage(tmp_path):
    client = json_client(tmp_path)
    body = client.get("/api/health").json()
    assert body["status"] == "healthy"
    assert body["storage"]["backend"] == "json"

    degraded = client_for(FinanceService(BrokenRepository())).get("/api/health").json()
    assert degraded["status"] == "degraded"
    assert degraded["storage"]["error"] == "bucket unreachable"


def test_each_test_starts_without_overrides():
    assert app.dependency_overrides == {}
