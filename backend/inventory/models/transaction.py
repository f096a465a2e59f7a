import enum
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, Numeric, String, Text

from inventory.db.transactions import Base


class TransactionKind(str, enum.Enum):
    PURCHASE = "Compra"
    SALE = "Venta"


class Transaction(Base):
    __tablename__ = "transacciones"

    id = Column(Integer, primary_key=True, index=True)
    date = Column("fecha", DateTime, default=datetime.now, nullable=False, index=True)
    # stored as the wire value ("Compra" / "Venta")
    kind = Column("tipo", String(20), nullable=False, index=True)
    # soft reference into the products service; no FK across databases
    product_id = Column("producto_id", Integer, nullable=False, index=True)
    quantity = Column("cantidad", Integer, nullable=False)
    unit_price = Column("precio_unitario", Numeric(18, 2), nullable=False)
    total_price = Column("precio_total", Numeric(18, 2), nullable=False)
    detail = Column("detalle", Text, nullable=False)

    def __repr__(self):
        return f"<Transaction id={self.id} kind={self.kind} product_id={self.product_id} qty={self.quantity}>"
