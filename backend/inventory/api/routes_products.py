from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, Response
from sqlalchemy.orm import Session

from inventory.config import settings
from inventory.db.products import get_db
from inventory.schemas.common import Page
from inventory.schemas.product_schema import ProductIn, ProductOut, ProductStats
from inventory.services.product_service import ProductService

router = APIRouter(prefix="/api/productos", tags=["productos"])


@router.get("", response_model=Page[ProductOut], summary="List products")
def list_products(
    nombre: Optional[str] = Query(None, description="name contains"),
    categoria: Optional[str] = Query(None, description="category contains"),
    precio_min: Optional[Decimal] = Query(None, alias="precioMin"),
    precio_max: Optional[Decimal] = Query(None, alias="precioMax"),
    stock_bajo: Optional[bool] = Query(None, alias="stockBajo"),
    page: int = Query(1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, alias="pageSize"),
    db: Session = Depends(get_db),
):
    svc = ProductService(db)
    return svc.list(
        name=nombre,
        category=categoria,
        price_min=precio_min,
        price_max=precio_max,
        low_stock=bool(stock_bajo),
        page=page,
        page_size=page_size,
    )


# fixed paths first so they are not captured by /{product_id}
@router.get("/categorias", response_model=List[str], summary="Distinct categories")
def list_categories(db: Session = Depends(get_db)):
    return ProductService(db).categories()


@router.get("/estadisticas", response_model=ProductStats, summary="Inventory statistics")
def stats(db: Session = Depends(get_db)):
    return ProductService(db).stats()


@router.get("/{product_id}", response_model=ProductOut, summary="Get product")
def get_product(product_id: int, db: Session = Depends(get_db)):
    return ProductService(db).get(product_id)


@router.post("", response_model=ProductOut, status_code=201, summary="Create product")
def create_product(
    payload: ProductIn, request: Request, response: Response, db: Session = Depends(get_db)
):
    p = ProductService(db).create(payload)
    response.headers["Location"] = str(request.url_for("get_product", product_id=p.id))
    return p


@router.put("/{product_id}", status_code=204, summary="Replace product")
def update_product(product_id: int, payload: ProductIn, db: Session = Depends(get_db)):
    ProductService(db).update(product_id, payload)
    return Response(status_code=204)


@router.delete("/{product_id}", status_code=204, summary="Delete product")
def delete_product(product_id: int, db: Session = Depends(get_db)):
    ProductService(db).delete(product_id)
    return Response(status_code=204)


@router.patch("/{product_id}/stock", status_code=204, summary="Set product stock")
def patch_stock(product_id: int, new_stock: int = Body(...), db: Session = Depends(get_db)):
    """Body is a bare JSON integer; the stock is set to exactly that value."""
    ProductService(db).patch_stock(product_id, new_stock)
    return Response(status_code=204)
