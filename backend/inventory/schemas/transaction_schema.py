from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from inventory.errors import ValidationError
from inventory.models.transaction import TransactionKind
from inventory.schemas.common import Money

_KIND_NAMES = {
    "compra": TransactionKind.PURCHASE,
    "purchase": TransactionKind.PURCHASE,
    "venta": TransactionKind.SALE,
    "sale": TransactionKind.SALE,
}


def parse_kind(value: str) -> TransactionKind:
    """Map a wire value ("Compra"/"Venta") or its English name to TransactionKind."""
    kind = _KIND_NAMES.get((value or "").strip().lower())
    if kind is None:
        raise ValidationError(
            f"Invalid transaction kind {value!r}. Expected Compra or Venta"
        )
    return kind


class TransactionIn(BaseModel):
    """
    Body of POST/PUT /api/transacciones. Any precioTotal sent by the caller is
    ignored; the service always recomputes it.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    date: Optional[datetime] = Field(None, validation_alias=AliasChoices("fecha", "date"))
    kind: str = Field("", validation_alias=AliasChoices("tipo", "kind"))
    product_id: int = Field(validation_alias=AliasChoices("productoId", "productId", "product_id"))
    quantity: int = Field(0, validation_alias=AliasChoices("cantidad", "quantity"))
    unit_price: Decimal = Field(
        Decimal("0"),
        validation_alias=AliasChoices("precioUnitario", "unitPrice", "unit_price"),
    )
    detail: str = Field("", validation_alias=AliasChoices("detalle", "detail"))


class TransactionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    date: datetime = Field(serialization_alias="fecha")
    kind: str = Field(serialization_alias="tipo")
    product_id: int = Field(serialization_alias="productoId")
    quantity: int = Field(serialization_alias="cantidad")
    unit_price: Money = Field(serialization_alias="precioUnitario")
    total_price: Money = Field(serialization_alias="precioTotal")
    detail: str = Field(serialization_alias="detalle")


class TransactionSummaryRow(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    kind: str = Field(serialization_alias="tipo")
    count: int = Field(serialization_alias="cantidad")
    total_amount: Money = Field(serialization_alias="montoTotal")
