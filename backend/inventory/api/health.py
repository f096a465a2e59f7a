from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from sqlalchemy import text
from sqlalchemy.engine import Engine

from inventory.adapters.products_client import ProductsClient
from inventory.api.dependencies import get_products_client
from inventory.db import products as products_db
from inventory.db import transactions as transactions_db


def _db_ok(engine: Engine) -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False


products_router = APIRouter()
transactions_router = APIRouter()


@products_router.get("/health", tags=["health"])
def products_health():
    db_ok = _db_ok(products_db.engine)
    return {"status": "ok" if db_ok else "degraded", "db": db_ok}


@transactions_router.get("/health", tags=["health"])
async def transactions_health(products: ProductsClient = Depends(get_products_client)):
    db_ok = await run_in_threadpool(_db_ok, transactions_db.engine)
    products_ok = await products.health_check()
    return {
        "status": "ok" if db_ok and products_ok else "degraded",
        "db": db_ok,
        "productsApi": products_ok,
    }
