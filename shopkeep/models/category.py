# shopkeep/models/category.py

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from .audit import AuditMixin
from ..database import Base


class Category(AuditMixin, Base):
    """Grouping for products, e.g. rings or earrings."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), unique=True, nullable=False)

    products = relationship("Product", back_populates="category", lazy="raise")

    def __repr__(self) -> str:
        return f"<Category id={self.id} name={self.name} active={self.is_active}>"
