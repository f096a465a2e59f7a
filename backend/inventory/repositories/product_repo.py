from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from inventory.models.product import Product, name_key
from inventory.utils.pagination import paginate


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, product_id: int) -> Optional[Product]:
        return self.db.get(Product, product_id)

    def find_by_name(self, name: str, exclude_id: Optional[int] = None) -> Optional[Product]:
        """Case-insensitive exact name lookup, optionally ignoring one id."""
        qry = self.db.query(Product).filter(Product.name_key == name_key(name))
        if exclude_id is not None:
            qry = qry.filter(Product.id != exclude_id)
        return qry.first()

    def list(
        self,
        name: Optional[str] = None,
        category: Optional[str] = None,
        price_min: Optional[Decimal] = None,
        price_max: Optional[Decimal] = None,
        low_stock_threshold: Optional[int] = None,
        page: int = 1,
        size: int = 10,
    ) -> Tuple[List[Product], int]:
        query = self.db.query(Product)
        if name:
            query = query.filter(Product.name_key.contains(name_key(name), autoescape=True))
        if category:
            query = query.filter(Product.category.ilike(f"%{category}%"))
        if price_min is not None:
            query = query.filter(Product.price >= price_min)
        if price_max is not None:
            query = query.filter(Product.price <= price_max)
        if low_stock_threshold is not None:
            query = query.filter(Product.stock <= low_stock_threshold)
        return paginate(query, page, size, Product.name, Product.id)

    def add(self, product: Product) -> Product:
        self.db.add(product)
        self.db.flush()
        return product

    def delete(self, product: Product):
        self.db.delete(product)
        self.db.flush()

    def categories(self) -> List[str]:
        rows = (
            self.db.query(Product.category)
            .filter(Product.category.isnot(None), Product.category != "")
            .distinct()
            .order_by(Product.category)
            .all()
        )
        return [r[0] for r in rows]

    def stats(self, low_stock_threshold: int) -> dict:
        count, total_stock, value = self.db.query(
            func.count(Product.id),
            func.coalesce(func.sum(Product.stock), 0),
            func.coalesce(func.sum(Product.price * Product.stock), 0),
        ).one()
        low = (
            self.db.query(func.count(Product.id))
            .filter(Product.stock <= low_stock_threshold)
            .scalar()
            or 0
        )
        return {
            "count": count or 0,
            "total_stock": int(total_stock or 0),
            "inventory_value": Decimal(str(value or 0)).quantize(Decimal("0.01")),
            "low_stock_count": low,
        }
