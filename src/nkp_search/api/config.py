import os
from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", ".."))

MAX_CONTENT_LENGTH = int(os.getenv('MAX_CONTENT_LENGTH', '65536'))  # 64 KB default
API_KEY = os.getenv("API_KEY", "")
RATE_LIMIT_STORAGE_URI = os.getenv("RATE_LIMIT_STORAGE_URI", "memory://")
DEFAULT_RATE_LIMIT = os.getenv("DEFAULT_RATE_LIMIT", "120 per minute")
SEARCH_RATE_LIMIT = os.getenv("SEARCH_RATE_LIMIT", "60 per minute")
SENTRY_DSN = os.getenv("SENTRY_DSN", "")
SENTRY_TRACES_SAMPLE_RATE = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.0"))
APP_ENV = os.getenv("APP_ENV", "production")
APP_VERSION = os.getenv("APP_VERSION", "0.1.0")

# Dataset
DATASET_SOURCE = os.getenv("DATASET_SOURCE", os.path.join(PROJECT_ROOT, "data", "nkp_data.csv"))
DATASET_FETCH_TIMEOUT = float(os.getenv("DATASET_FETCH_TIMEOUT", "15"))
DATASET_CACHE_TTL = float(os.getenv("DATASET_CACHE_TTL", "0"))  # 0 = re-read on every search
TAXONOMY_PATH = os.getenv("TAXONOMY_PATH", os.path.join(PROJECT_ROOT, "taxonomy", "mudda_v1.yml"))

# Fuzzy matching
FUZZY_THRESHOLD = float(os.getenv("FUZZY_THRESHOLD", "0.4"))
FUZZY_DISTANCE = int(os.getenv("FUZZY_DISTANCE", "150"))
FUZZY_MIN_MATCH_LENGTH = int(os.getenv("FUZZY_MIN_MATCH_LENGTH", "3"))

# Paging
DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "20"))
MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "100"))

# Messages
DEFAULT_LANGUAGE = os.getenv("DEFAULT_LANGUAGE", "ne")  # ne, en
