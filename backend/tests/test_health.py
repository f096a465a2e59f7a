from inventory.api.dependencies import get_products_client
from inventory.main_transactions import app as transactions_app
from fastapi.testclient import TestClient


def test_products_health_ok(products_api):
    res = products_api.get("/api/health")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "ok"
    assert body["db"] is True


def test_transactions_health_reports_products_api(transactions_api):
    res = transactions_api.get("/api/health")
    assert res.status_code == 200
    body = res.json()
    assert body["db"] is True
    assert body["productsApi"] is True
    assert body["status"] == "ok"


def test_transactions_health_degraded_when_products_down(stub_products):
    transactions_app.dependency_overrides[get_products_client] = lambda: stub_products(fail_get=True)
    try:
        res = TestClient(transactions_app).get("/api/health")
    finally:
        transactions_app.dependency_overrides.clear()
    assert res.status_code == 200
    assert res.json()["productsApi"] is False
    assert res.json()["status"] == "degraded"
