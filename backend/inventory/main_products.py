from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inventory.api.errors import register_error_handlers
from inventory.api.health import products_router as health_router
from inventory.api.routes_products import router as products_router
from inventory.config import settings
from inventory.db.products import init_db
from inventory.utils.logging import get_logger

log = get_logger("inventory.products")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # RESET_DB=1 in tests/CI drops and recreates the table
    init_db()
    yield


app = FastAPI(title="Inventario - Productos API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app, log)

app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(products_router)
