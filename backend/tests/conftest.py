import os
import tempfile

# point both services at throwaway sqlite files before any inventory import
_tmp = tempfile.mkdtemp(prefix="inventario-tests-")
os.environ["PRODUCTS_DATABASE_URL"] = f"sqlite:///{os.path.join(_tmp, 'productos.db')}"
os.environ["TRANSACTIONS_DATABASE_URL"] = f"sqlite:///{os.path.join(_tmp, 'transacciones.db')}"
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import httpx
import pytest
from fastapi.testclient import TestClient

from inventory.adapters.products_client import ProductsClient
from inventory.api.dependencies import get_products_client
from inventory.db import products as products_db
from inventory.db import transactions as transactions_db
from inventory.errors import RemoteUnavailableError
from inventory.main_products import app as products_app
from inventory.main_transactions import app as transactions_app


@pytest.fixture(autouse=True)
def fresh_db():
    products_db.init_db(reset=True)
    transactions_db.init_db(reset=True)
    yield


@pytest.fixture
def products_api():
    return TestClient(products_app)


@pytest.fixture
def products_remote():
    """ProductsClient wired to the in-process products app instead of the network."""
    return ProductsClient(
        "http://productos.test", transport=httpx.ASGITransport(app=products_app)
    )


@pytest.fixture
def transactions_api(products_remote):
    transactions_app.dependency_overrides[get_products_client] = lambda: products_remote
    try:
        with TestClient(transactions_app) as c:
            yield c
    finally:
        transactions_app.dependency_overrides.clear()


class StubProductsClient:
    """Stands in for the products service in failure-path tests."""

    def __init__(self, stock=None, fail_get=False, fail_patch=False):
        self.stock = dict(stock or {})
        self.fail_get = fail_get
        self.fail_patch = fail_patch
        self.patches = []

    async def get_stock(self, product_id):
        if self.fail_get or product_id not in self.stock:
            raise RemoteUnavailableError(f"product {product_id} unavailable")
        return self.stock[product_id]

    async def patch_stock(self, product_id, new_stock):
        self.patches.append((product_id, new_stock))
        if self.fail_patch:
            raise RemoteUnavailableError("products service down")
        self.stock[product_id] = new_stock

    async def health_check(self):
        return not self.fail_get


@pytest.fixture
def stub_products():
    return StubProductsClient


@pytest.fixture
def transactions_session():
    db = transactions_db.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def make_product(products_api):
    def _make(**overrides):
        body = {
            "nombre": "Widget",
            "descripcion": "Test widget",
            "categoria": "Tools",
            "precio": 10.00,
            "stock": 5,
        }
        body.update(overrides)
        res = products_api.post("/api/productos", json=body)
        assert res.status_code == 201, res.text
        return res.json()

    return _make
