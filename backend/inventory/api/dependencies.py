from fastapi import Depends, Request
from sqlalchemy.orm import Session

from inventory.adapters.products_client import ProductsClient
from inventory.db.transactions import get_db
from inventory.services.transaction_service import TransactionService


def get_products_client(request: Request) -> ProductsClient:
    """The process-wide client created in the transactions app lifespan."""
    return request.app.state.products_client


def get_transaction_service(
    db: Session = Depends(get_db),
    products: ProductsClient = Depends(get_products_client),
) -> TransactionService:
    return TransactionService(db, products)
