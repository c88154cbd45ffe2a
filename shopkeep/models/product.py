"""
Product catalogue entry with its current stock level.

Prices here are live values; sales copy them into SaleProduct snapshot
columns at the moment of sale.
"""

from sqlalchemy import Column, Integer, String, Numeric, CheckConstraint, ForeignKey
from sqlalchemy.orm import relationship

from .audit import AuditMixin
from ..database import Base


class Product(AuditMixin, Base):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
    )

    id = Column(Integer, primary_key=True)
    code = Column(String(50), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(String, nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="RESTRICT"), index=True, nullable=True)

    # Suggested retail price and price for wholesale customers
    retail_price = Column(Numeric(10, 2), nullable=False, default=0)
    wholesale_price = Column(Numeric(10, 2), nullable=False, default=0)

    stock = Column(Integer, nullable=False, default=0, server_default="0")
    low_stock_alert = Column(Integer, nullable=False, default=0, server_default="0")

    category = relationship("Category", back_populates="products", lazy="raise")
    sale_products = relationship("SaleProduct", back_populates="product", lazy="raise")

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.low_stock_alert

    def __repr__(self) -> str:
        return f"<Product id={self.id} code={self.code} stock={self.stock}>"
