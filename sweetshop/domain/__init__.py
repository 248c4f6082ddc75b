"""Domain package."""

from .entities import LineItem, Product, RegistrationData, User
from .value_objects import NotificationLevel, ProductCategory, SessionStatus, UserRole

__all__ = [
    # Entities
    "Product",
    "LineItem",
    "User",
    "RegistrationData",
    # Value Objects
    "UserRole",
    "ProductCategory",
    "SessionStatus",
    "NotificationLevel",
]
