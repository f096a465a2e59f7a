from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from inventory.api.dependencies import get_transaction_service
from inventory.config import settings
from inventory.schemas.common import Page
from inventory.schemas.transaction_schema import (
    TransactionIn,
    TransactionOut,
    TransactionSummaryRow,
)
from inventory.services.transaction_service import TransactionService

router = APIRouter(prefix="/api/transacciones", tags=["transacciones"])


@router.get("", response_model=Page[TransactionOut], summary="List transactions")
def list_transactions(
    fecha: Optional[date] = Query(None, description="calendar day"),
    tipo: Optional[str] = Query(None, description="Compra or Venta"),
    producto_id: Optional[int] = Query(None, alias="productoId"),
    page: int = Query(1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, alias="pageSize"),
    svc: TransactionService = Depends(get_transaction_service),
):
    return svc.list(
        on_date=fecha, kind=tipo, product_id=producto_id, page=page, page_size=page_size
    )


@router.get("/resumen", response_model=List[TransactionSummaryRow], summary="Totals per kind")
def summary(
    fecha_inicio: Optional[date] = Query(None, alias="fechaInicio"),
    fecha_fin: Optional[date] = Query(None, alias="fechaFin"),
    svc: TransactionService = Depends(get_transaction_service),
):
    return svc.summary(fecha_inicio, fecha_fin)


@router.get("/{transaction_id}", response_model=TransactionOut, summary="Get transaction")
def get_transaction(
    transaction_id: int, svc: TransactionService = Depends(get_transaction_service)
):
    return svc.get(transaction_id)


@router.post("", response_model=TransactionOut, status_code=201, summary="Create transaction")
async def create_transaction(
    payload: TransactionIn,
    request: Request,
    response: Response,
    svc: TransactionService = Depends(get_transaction_service),
):
    txn = await svc.create(payload)
    response.headers["Location"] = str(
        request.url_for("get_transaction", transaction_id=txn.id)
    )
    return txn


@router.put("/{transaction_id}", status_code=204, summary="Replace transaction")
async def update_transaction(
    transaction_id: int,
    payload: TransactionIn,
    svc: TransactionService = Depends(get_transaction_service),
):
    await svc.update(transaction_id, payload)
    return Response(status_code=204)


@router.delete("/{transaction_id}", status_code=204, summary="Delete transaction")
async def delete_transaction(
    transaction_id: int, svc: TransactionService = Depends(get_transaction_service)
):
    await svc.delete(transaction_id)
    return Response(status_code=204)
