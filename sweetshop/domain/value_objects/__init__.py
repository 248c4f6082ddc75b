"""Value Objects for domain model."""
from __future__ import annotations

from enum import Enum


class UserRole(str, Enum):
    """User roles."""

    USER = "user"
    ADMIN = "admin"


class ProductCategory(str, Enum):
    """Catalog categories."""

    CHOCOLATES = "chocolates"
    CARAMELOS = "caramelos"
    GALLETAS = "galletas"
    PASTELES = "pasteles"
    BOMBONES = "bombones"
    TRUFAS = "trufas"
    DULCES = "dulces"


class SessionStatus(str, Enum):
    """Freshness of the cached session.

    ``CACHED`` means served from durable storage and not yet confirmed by
    the server; ``RECONCILED`` means the user record came from the server.
    """

    UNAUTHENTICATED = "unauthenticated"
    CACHED = "cached"
    RECONCILED = "reconciled"


class NotificationLevel(str, Enum):
    """Visual kind passed to the notification sink."""

    SUCCESS = "success"
    ERROR = "error"
