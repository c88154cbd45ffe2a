"""
Schema exports for the application.
"""

from .base import BaseSchema, AuditedReadOnly, Paginated
from .location import LocationInsert, LocationUpdate, LocationReadOnly
from .category import CategoryInsert, CategoryUpdate, CategoryReadOnly, CategoryForDropdown, CategoryDetailedView
from .product import ProductInsert, ProductUpdate, ProductReadOnly
from .sale import SaleInsert, SaleProductInsert, SaleReadOnly, SaleProductReadOnly
from .stock import StockUpdateRequest, StockUpdateResult
from .user import UserInsert, UserUpdate, UserReadOnly
