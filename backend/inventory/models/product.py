from sqlalchemy import Column, Integer, Numeric, String, Text

from inventory.db.products import Base


def name_key(name: str) -> str:
    """Case-folded name used for uniqueness; SQLite's lower() only folds ASCII."""
    return (name or "").strip().casefold()


class Product(Base):
    __tablename__ = "productos"

    id = Column(Integer, primary_key=True, index=True)
    name = Column("nombre", String(200), nullable=False)
    # written by the service from name_key(name)
    name_key = Column("nombre_normalizado", String(200), nullable=False, unique=True, index=True)
    description = Column("descripcion", Text, nullable=True)
    category = Column("categoria", String(100), nullable=True, index=True)
    image = Column("imagen", String(512), nullable=True)
    price = Column("precio", Numeric(18, 2), nullable=False)
    stock = Column(Integer, default=0, nullable=False)

    def __repr__(self):
        return f"<Product id={self.id} name={self.name} stock={self.stock}>"
