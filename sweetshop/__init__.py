"""Client-side session and cart state for the sweetshop storefront."""

__version__ = "0.1.0"
