from .base import BaseRepository
from .specs import Spec
from .user_repository import UserRepository
from .location_repository import LocationRepository
from .category_repository import CategoryRepository
from .product_repository import ProductRepository
from .sale_repository import SaleRepository, SaleProductRepository

__all__ = [
    'BaseRepository',
    'Spec',
    'UserRepository',
    'LocationRepository',
    'CategoryRepository',
    'ProductRepository',
    'SaleRepository',
    'SaleProductRepository',
]
