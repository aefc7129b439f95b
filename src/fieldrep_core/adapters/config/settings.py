from decouple import config

# -------------------------------
# Logging
# -------------------------------
LOG_LEVEL = config("LOG_LEVEL", default="INFO")
JSON_LOGS = config("JSON_LOGS", default=False, cast=bool)

# -------------------------------
# Document store
# -------------------------------
STORE_BACKEND  = config("STORE_BACKEND", default="memory")  # memory | http
STORE_BASE_URL = config("STORE_BASE_URL", default="http://localhost:8080/v1")
STORE_API_KEY  = config("STORE_API_KEY", default="")
STORE_TIMEOUT  = config("STORE_TIMEOUT", default=10.0, cast=float)

ORDERS_COLLECTION    = config("ORDERS_COLLECTION", default="h-orders")
DOCTORS_COLLECTION   = config("DOCTORS_COLLECTION", default="doctors")
UTILITIES_COLLECTION = config("UTILITIES_COLLECTION", default="utilities")
PRODUCTS_COLLECTION  = config("PRODUCTS_COLLECTION", default="products")

# -------------------------------
# Visual aids
# -------------------------------
IMAGE_TIMEOUT           = config("IMAGE_TIMEOUT", default=15.0, cast=float)
IMAGE_MAX_QUALITY       = config("IMAGE_MAX_QUALITY", default=100, cast=int)
GALLERY_SWIPE_THRESHOLD = config("GALLERY_SWIPE_THRESHOLD", default=0.2, cast=float)

# -------------------------------
# Presentation
# -------------------------------
CURRENCY_SYMBOL = config("CURRENCY_SYMBOL", default="₹")
