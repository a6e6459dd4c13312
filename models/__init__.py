"""
Models Package

This file ensures all SQLAlchemy models are imported and registered,
which is required for metadata.create_all to see every table.
"""

from models.base import Base
from models.category import Category
from models.product import Product
from models.order import Order
from models.store_settings import StoreSettings
from models.favorite import Favorite
from models.user import User
from models.auth_session import AuthSession

__all__ = [
    'Base',
    'Category',
    'Product',
    'Order',
    'StoreSettings',
    'Favorite',
    'User',
    'AuthSession',
]
