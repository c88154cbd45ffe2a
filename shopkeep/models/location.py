# shopkeep/models/location.py

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from .audit import AuditMixin
from ..database import Base


class Location(AuditMixin, Base):
    """A shop, stall or warehouse where sales are recorded."""

    __tablename__ = "locations"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), unique=True, nullable=False)

    sales = relationship("Sale", back_populates="location", lazy="raise")

    def __repr__(self) -> str:
        return f"<Location id={self.id} name={self.name} active={self.is_active}>"
