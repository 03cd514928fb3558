# catalog/config.py
import os

EUR_EXCHANGE_RATE = os.getenv("EUR_EXCHANGE_RATE", "1.11")
MAX_PAGE_SIZE = os.getenv("MAX_PAGE_SIZE", "100")

# Fixed freshness window for cached product pages
CACHE_TTL_SECONDS = 60

DATABASE_URL = os.getenv("DATABASE_URL")

LOG_DIR = os.getenv("LOG_DIR")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEBUG = os.getenv("DEBUG", "false").lower() in ("1", "true", "yes")

GZIP_MINIMUM_SIZE = int(os.getenv("GZIP_MINIMUM_SIZE", "1000"))
