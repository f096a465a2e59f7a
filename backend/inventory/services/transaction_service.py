from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from inventory.adapters.products_client import ProductsClient
from inventory.errors import NotFoundError, RemoteUnavailableError, ValidationError
from inventory.models.transaction import Transaction, TransactionKind
from inventory.repositories.transaction_repo import TransactionRepository
from inventory.schemas.transaction_schema import TransactionIn, parse_kind
from inventory.utils.logging import get_logger
from inventory.utils.money import to_cents
from inventory.utils.pagination import page_envelope

log = get_logger("inventory.transactions")


def stock_effect(kind: TransactionKind, quantity: int) -> int:
    """Signed change a transaction applies to its product's stock."""
    return quantity if kind is TransactionKind.PURCHASE else -quantity


class TransactionService:
    """
    Transaction CRUD plus stock reconciliation against the products service.

    The products service owns the stock counter; this service reads it, computes
    the new absolute value and pushes it back after its own write. Checks that
    run before the local write abort the request. A failed push after the local
    write only logs a warning: the stored transaction stands and the stock is
    left for out-of-band reconciliation.
    """

    def __init__(self, db: Session, products: ProductsClient):
        self.db = db
        self.repo = TransactionRepository(db)
        self.products = products

    # --- reads ---

    def list(
        self,
        on_date: Optional[date] = None,
        kind: Optional[str] = None,
        product_id: Optional[int] = None,
        page: int = 1,
        page_size: int = 10,
    ) -> dict:
        kind_value = parse_kind(kind).value if kind else None
        items, total = self.repo.list(
            on_date=on_date, kind=kind_value, product_id=product_id, page=page, size=page_size
        )
        return page_envelope(items, page, page_size, total)

    def get(self, transaction_id: int) -> Transaction:
        t = self.repo.get(transaction_id)
        if not t:
            raise NotFoundError("Transaction not found")
        return t

    def summary(self, date_from: Optional[date] = None, date_to: Optional[date] = None) -> List[dict]:
        return self.repo.summary(date_from, date_to)

    # --- writes ---

    def _validate(self, data: TransactionIn) -> Tuple[TransactionKind, Decimal]:
        """Check the body; returns the kind and the unit price rounded to cents."""
        if not data.kind or not data.kind.strip() or not data.detail or not data.detail.strip():
            raise ValidationError("Kind and detail are required")
        unit_price = to_cents(data.unit_price)
        if data.quantity <= 0 or unit_price <= 0:
            raise ValidationError("Quantity and unit price must be greater than zero")
        return parse_kind(data.kind), unit_price

    def _save(self, txn: Transaction) -> Transaction:
        self.repo.add(txn)
        self.db.commit()
        self.db.refresh(txn)
        return txn

    def _commit(self):
        self.db.commit()

    def _remove(self, txn: Transaction):
        self.repo.delete(txn)
        self.db.commit()

    async def _push_stock(self, operation: str, transaction_id: int, product_id: int, new_stock: int) -> bool:
        try:
            await self.products.patch_stock(product_id, new_stock)
        except RemoteUnavailableError as e:
            log.warning(
                f"stock push failed op={operation} transaction_id={transaction_id} "
                f"product_id={product_id} stock={new_stock} cause={e.message!r}"
            )
            return False
        log.info(
            f"stock pushed op={operation} transaction_id={transaction_id} "
            f"product_id={product_id} stock={new_stock}"
        )
        return True

    async def create(self, data: TransactionIn) -> Transaction:
        kind, unit_price = self._validate(data)

        try:
            current = await self.products.get_stock(data.product_id)
        except RemoteUnavailableError as e:
            log.info(f"create(): product lookup failed product_id={data.product_id} cause={e.message!r}")
            raise ValidationError("Product not found")

        if kind is TransactionKind.SALE and current < data.quantity:
            raise ValidationError(f"Insufficient stock. Available stock: {current}")

        txn = Transaction(
            date=data.date or datetime.now(),
            kind=kind.value,
            product_id=data.product_id,
            quantity=data.quantity,
            unit_price=unit_price,
            total_price=data.quantity * unit_price,
            detail=data.detail,
        )
        # the transaction is durable from here on, whatever happens to the push
        await run_in_threadpool(self._save, txn)

        new_stock = current + stock_effect(kind, data.quantity)
        await self._push_stock("create", txn.id, txn.product_id, new_stock)
        return txn

    async def update(self, transaction_id: int, data: TransactionIn) -> None:
        """
        Replace a transaction and move the product stock by the difference.

        The revert and the re-apply are both computed on the stock of the
        product the transaction pointed at before the edit, and the result is
        pushed to the product named by the new values. When the product
        reference changes, the new product therefore receives the old
        product's adjusted counter.
        """
        if data.id is not None and data.id != transaction_id:
            raise ValidationError("ID mismatch")
        txn = await run_in_threadpool(self.get, transaction_id)
        kind, unit_price = self._validate(data)

        old_kind = TransactionKind(txn.kind)
        old_quantity = txn.quantity
        old_product_id = txn.product_id

        try:
            current = await self.products.get_stock(old_product_id)
        except RemoteUnavailableError as e:
            log.warning(
                f"update(): stock unavailable, saving without reconciliation "
                f"transaction_id={transaction_id} product_id={old_product_id} cause={e.message!r}"
            )
            current = None

        new_stock = None
        if current is not None:
            reverted = current - stock_effect(old_kind, old_quantity)
            new_stock = reverted + stock_effect(kind, data.quantity)
            if new_stock < 0:
                raise ValidationError("Modification would result in negative stock")

        if data.date is not None:
            txn.date = data.date
        txn.kind = kind.value
        txn.product_id = data.product_id
        txn.quantity = data.quantity
        txn.unit_price = unit_price
        txn.total_price = data.quantity * unit_price
        txn.detail = data.detail
        await run_in_threadpool(self._commit)

        if new_stock is not None:
            await self._push_stock("update", transaction_id, data.product_id, new_stock)

    async def delete(self, transaction_id: int) -> None:
        txn = await run_in_threadpool(self.get, transaction_id)
        kind = TransactionKind(txn.kind)
        product_id = txn.product_id

        try:
            current = await self.products.get_stock(product_id)
        except RemoteUnavailableError as e:
            log.warning(
                f"delete(): stock unavailable, deleting without reconciliation "
                f"transaction_id={transaction_id} product_id={product_id} cause={e.message!r}"
            )
        else:
            # no floor here: the products service rejects a negative value and
            # the push failure is only logged
            reverted = current - stock_effect(kind, txn.quantity)
            await self._push_stock("delete", transaction_id, product_id, reverted)

        await run_in_threadpool(self._remove, txn)
