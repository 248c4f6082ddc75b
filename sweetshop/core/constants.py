"""Application-wide constants and configuration defaults.

Centralizes magic numbers so the caches and the config loader agree.
"""

# ============== PRICING ==============
FREE_SHIPPING_THRESHOLD = 8000  # subtotal at which shipping becomes free
FLAT_SHIPPING_FEE = 5000

# ============== NOTIFICATIONS ==============
# One window for every duplicate-suppression call site
NOTIFICATION_WINDOW_SECONDS = 3.0
SUCCESS_TOAST_MS = 2500
ERROR_TOAST_MS = 4000

# Dedup kinds used by the cart
KIND_ADDED = "added"
KIND_STOCK_ERROR = "stock-error"
KIND_REMOVED = "removed"
KIND_CLEARED = "cleared"

# ============== STORAGE ==============
CART_STORAGE_KEY = "cart-storage"
SESSION_STORAGE_KEY = "auth-storage"
DEFAULT_STORAGE_PREFIX = "sweetshop:"
DEFAULT_CLIENT_ID = "default"

# ============== API ==============
DEFAULT_API_URL = "http://localhost:3001"
API_TIMEOUT_SECONDS = 30

# ============== LOCALIZATION ==============
DEFAULT_LANGUAGE = "es"
