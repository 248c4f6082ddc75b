"""Domain entities package."""

from .cart import LineItem
from .product import Product
from .user import RegistrationData, User

__all__ = [
    "Product",
    "LineItem",
    "User",
    "RegistrationData",
]
