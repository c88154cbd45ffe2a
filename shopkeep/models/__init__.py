from .user import User
from .location import Location
from .category import Category
from .product import Product
from .sale import Sale
from .sale_product import SaleProduct

# This ensures all models are registered with SQLAlchemy
__all__ = [
    'User',
    'Location',
    'Category',
    'Product',
    'Sale',
    'SaleProduct',
]
