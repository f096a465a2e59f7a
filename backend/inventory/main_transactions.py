from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inventory.adapters.products_client import ProductsClient
from inventory.api.errors import register_error_handlers
from inventory.api.health import transactions_router as health_router
from inventory.api.routes_transactions import router as transactions_router
from inventory.config import settings
from inventory.db.transactions import init_db
from inventory.utils.logging import get_logger

log = get_logger("inventory.transactions")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()

    # one client for the whole process, shared by every request
    app.state.products_client = ProductsClient(
        settings.PRODUCTS_API_BASE_URL, timeout=settings.PRODUCTS_API_TIMEOUT_SECONDS
    )
    log.info(f"products api base_url={settings.PRODUCTS_API_BASE_URL}")

    try:
        yield
    finally:
        await app.state.products_client.aclose()


app = FastAPI(title="Inventario - Transacciones API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app, log)

app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(transactions_router)
