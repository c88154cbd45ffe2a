# shopkeep/models/sale_product.py

from sqlalchemy import Column, Integer, String, Numeric, ForeignKey
from sqlalchemy.orm import relationship

from ..database import Base


class SaleProduct(Base):
    """
    One product line of a sale.

    Name and prices are copied from the product when the sale is recorded
    and never rewritten, so the sale history stays the same when the
    product is later edited or deactivated.
    """

    __tablename__ = "sale_product"

    id = Column(Integer, primary_key=True)

    sale_id = Column(Integer, ForeignKey("sales.id", ondelete="CASCADE"), index=True, nullable=False)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="RESTRICT"), index=True, nullable=False)

    quantity = Column(Numeric(8, 3), nullable=False)

    product_description_snapshot = Column(String, nullable=True)
    # Actual selling price per unit after discount
    price_at_the_time = Column(Numeric(10, 2), nullable=True)
    wholesale_price_at_the_time = Column(Numeric(10, 2), nullable=True)
    # Suggested price per unit before discount
    suggested_price_at_the_time = Column(Numeric(10, 2), nullable=True)

    sale = relationship("Sale", back_populates="sale_products", lazy="raise")
    product = relationship("Product", back_populates="sale_products", lazy="raise")

    def __repr__(self) -> str:
        return f"<SaleProduct id={self.id} sale={self.sale_id} product={self.product_id} qty={self.quantity}>"
