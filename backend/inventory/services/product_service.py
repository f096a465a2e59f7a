from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inventory.config import settings
from inventory.errors import ConflictError, NotFoundError, ValidationError
from inventory.models.product import Product, name_key
from inventory.repositories.product_repo import ProductRepository
from inventory.schemas.product_schema import ProductIn
from inventory.utils.logging import get_logger
from inventory.utils.money import to_cents
from inventory.utils.pagination import page_envelope

log = get_logger("inventory.products")


class ProductService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepository(db)

    def _validate(self, data: ProductIn) -> Decimal:
        """Check the body and return the price rounded to cents."""
        if not data.name or not data.name.strip():
            raise ValidationError("Product name is required")
        price = to_cents(data.price)
        if price <= 0:
            raise ValidationError("Price must be greater than zero")
        if data.stock < 0:
            raise ValidationError("Stock cannot be negative")
        return price

    def _commit_unique(self, message: str):
        # the unique index on the folded name catches a concurrent duplicate
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(message)

    def list(
        self,
        name: Optional[str] = None,
        category: Optional[str] = None,
        price_min: Optional[Decimal] = None,
        price_max: Optional[Decimal] = None,
        low_stock: bool = False,
        page: int = 1,
        page_size: int = 10,
    ) -> dict:
        items, total = self.repo.list(
            name=name,
            category=category,
            price_min=price_min,
            price_max=price_max,
            low_stock_threshold=settings.LOW_STOCK_THRESHOLD if low_stock else None,
            page=page,
            size=page_size,
        )
        return page_envelope(items, page, page_size, total)

    def get(self, product_id: int) -> Product:
        p = self.repo.get(product_id)
        if not p:
            raise NotFoundError("Product not found")
        return p

    def create(self, data: ProductIn) -> Product:
        price = self._validate(data)
        if self.repo.find_by_name(data.name):
            raise ConflictError("A product with that name already exists")
        p = Product(
            name=data.name,
            name_key=name_key(data.name),
            description=data.description,
            category=data.category,
            image=data.image,
            price=price,
            stock=data.stock,
        )
        self.db.add(p)
        self._commit_unique("A product with that name already exists")
        self.db.refresh(p)
        log.info(f"create(): product_id={p.id} name={p.name!r} stock={p.stock}")
        return p

    def update(self, product_id: int, data: ProductIn) -> Product:
        """Full replace of every mutable field."""
        if data.id is not None and data.id != product_id:
            raise ValidationError("ID mismatch")
        p = self.get(product_id)
        price = self._validate(data)
        if self.repo.find_by_name(data.name, exclude_id=product_id):
            raise ConflictError("Another product with that name already exists")
        p.name = data.name
        p.name_key = name_key(data.name)
        p.description = data.description
        p.category = data.category
        p.image = data.image
        p.price = price
        p.stock = data.stock
        self._commit_unique("Another product with that name already exists")
        log.info(f"update(): product_id={product_id}")
        return p

    def delete(self, product_id: int):
        # transactions referencing the product are not checked
        p = self.get(product_id)
        self.repo.delete(p)
        self.db.commit()
        log.info(f"delete(): product_id={product_id}")

    def patch_stock(self, product_id: int, new_stock: int) -> Product:
        if new_stock < 0:
            raise ValidationError("Stock cannot be negative")
        p = self.get(product_id)
        old = p.stock
        p.stock = new_stock
        self.db.commit()
        log.info(f"patch_stock(): product_id={product_id} stock {old} -> {new_stock}")
        return p

    def categories(self) -> List[str]:
        return self.repo.categories()

    def stats(self) -> dict:
        return self.repo.stats(settings.LOW_STOCK_THRESHOLD)
