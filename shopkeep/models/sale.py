# shopkeep/models/sale.py

from sqlalchemy import Column, Integer, String, Numeric, Boolean, Enum, ForeignKey, TIMESTAMP, func
from sqlalchemy.orm import relationship

from shopkeep.core.enums import PaymentMethod
from shopkeep.core.utils import utcnow
from ..database import Base


class Sale(Base):
    """A sale recorded at a location, owning its SaleProduct lines."""

    __tablename__ = "sales"

    id = Column(Integer, primary_key=True)

    location_id = Column(Integer, ForeignKey("locations.id"), index=True, nullable=False)
    sale_date = Column(TIMESTAMP(timezone=False), default=utcnow, nullable=False)
    payment_method = Column(Enum(PaymentMethod, name="paymentmethod"), nullable=False)
    is_wholesale = Column(Boolean, nullable=False, default=False)

    suggested_total = Column(Numeric(10, 2), nullable=False)
    final_total = Column(Numeric(10, 2), nullable=False)
    discount_percentage = Column(Numeric(5, 2), nullable=False, default=0)

    created_at = Column(TIMESTAMP(timezone=False), default=utcnow, server_default=func.now(), nullable=False)
    created_by = Column(String, nullable=True)

    location = relationship("Location", back_populates="sales", lazy="raise")
    sale_products = relationship(
        "SaleProduct",
        back_populates="sale",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
        order_by="SaleProduct.id",
    )

    def __repr__(self) -> str:
        return (
            f"<Sale id={self.id} location={self.location_id} "
            f"final_total={self.final_total} created_by={self.created_by}>"
        )
