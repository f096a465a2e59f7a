from decimal import Decimal
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from inventory.schemas.common import Money


class ProductIn(BaseModel):
    """
    Body of POST/PUT /api/productos. Accepts the Spanish wire names used by
    the UI and their English equivalents. Business rules (blank name, price,
    stock) are checked by ProductService so they surface as plain-text 400s.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    name: str = Field("", validation_alias=AliasChoices("nombre", "name"))
    description: Optional[str] = Field(
        None, validation_alias=AliasChoices("descripcion", "description")
    )
    category: Optional[str] = Field(
        None, validation_alias=AliasChoices("categoria", "category")
    )
    image: Optional[str] = Field(None, validation_alias=AliasChoices("imagen", "image"))
    price: Decimal = Field(Decimal("0"), validation_alias=AliasChoices("precio", "price"))
    stock: int = 0


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    name: str = Field(serialization_alias="nombre")
    description: Optional[str] = Field(None, serialization_alias="descripcion")
    category: Optional[str] = Field(None, serialization_alias="categoria")
    image: Optional[str] = Field(None, serialization_alias="imagen")
    price: Money = Field(serialization_alias="precio")
    stock: int


class ProductStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    count: int = Field(serialization_alias="totalProductos")
    total_stock: int = Field(serialization_alias="stockTotal")
    inventory_value: Money = Field(serialization_alias="valorInventario")
    low_stock_count: int = Field(serialization_alias="productosStockBajo")
