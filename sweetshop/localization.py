"""User-facing texts for cart and session notifications."""
from __future__ import annotations

import logging

from sweetshop.core.constants import DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)

TEXTS = {
    "es": {
        "cart_item_added": "{name} agregado al carrito",
        "cart_quantity_updated": "Cantidad actualizada: {name}",
        "cart_item_removed": "{name} removido del carrito",
        "cart_stock_limit": "Solo hay {stock} unidades disponibles de {name}",
        "cart_cleared": "Carrito vaciado",
        "login_success": "Inicio de sesión exitoso",
        "logout_success": "Sesión cerrada exitosamente",
        "account_deleted": "Cuenta eliminada",
    },
    "en": {
        "cart_item_added": "{name} added to cart",
        "cart_quantity_updated": "Quantity updated: {name}",
        "cart_item_removed": "{name} removed from cart",
        "cart_stock_limit": "Only {stock} units of {name} available",
        "cart_cleared": "Cart cleared",
        "login_success": "Logged in successfully",
        "logout_success": "Logged out successfully",
        "account_deleted": "Account deleted",
    },
}


def get_text(lang: str, key: str, **kwargs: object) -> str:
    """Return the text for ``key`` in ``lang``, formatted with ``kwargs``.

    Falls back to the default language, then to the key itself.
    """
    texts = TEXTS.get(lang, TEXTS[DEFAULT_LANGUAGE])
    text = texts.get(key)
    if text is None:
        text = TEXTS[DEFAULT_LANGUAGE].get(key, key)

    if kwargs and text != key:
        try:
            return text.format(**kwargs)
        except (KeyError, ValueError) as e:
            logger.warning("Failed to format text %s: %s", key, e)
    return text
