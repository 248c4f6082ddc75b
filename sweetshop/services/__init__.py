"""Client-side state services consumed by the UI layer."""

from .cart_cache import CartCache
from .session_cache import AuthGateway, ProfileGateway, SessionCache, SessionState

__all__ = [
    "CartCache",
    "SessionCache",
    "SessionState",
    "AuthGateway",
    "ProfileGateway",
]
