# src/config/settings.py

"""Central configuration for the veribuy decision-support engine."""

from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the veribuy decision-support engine."""

    # --- Search provider ---
    SEARCH_ENDPOINT: str = "https://serpapi.com/search.json"
    SEARCH_ENGINE: str = "google_shopping"
    SEARCH_LANGUAGE: str = "en"
    SEARCH_COUNTRY: str = "us"
    MAX_RESULTS: int = 40               # Results kept per search
    API_KEY_ENV: str = "SERPAPI_API_KEY"
    REQUEST_TIMEOUT: int = 15           # Seconds before a request times out
    MAX_RETRIES: int = 3                # Retry count on transient failures
    RETRY_DELAY: float = 1.0            # Base seconds between retries
    ERROR_DETAIL_CHARS: int = 600       # Upstream body kept in errors
    SEARCH_CACHE_TTL: float = 60.0      # Seconds a query result is reused

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
    }

    # --- Trust scoring ---
    MAJOR_RETAILERS: list[str] = [
        "sephora",
        "ulta",
        "target",
        "walmart",
        "amazon",
        "cvs",
        "walgreens",
        "macys",
        "kohls",
    ]
    TRUST_BASE_SCORE: int = 72
    TRUST_FLAGGED_BELOW: int = 55
    TRUST_MIXED_BELOW: int = 70
    HIGH_REVIEW_VOLUME: int = 300
    LOW_REVIEW_VOLUME: int = 20

    # --- Ranking ---
    UNKNOWN_PRICE: float = 999.0        # Sentinel that sinks unpriced items

    # --- Filtering defaults ---
    DEFAULT_MAX_PRICE: float = 999999.0
    DEFAULT_MIN_RATING: float = 0.0

    # --- Coupons (demo rule table, keyed by upper-cased code) ---
    COUPON_RULES: dict[str, dict[str, object]] = {
        "VERIBUY5": {
            "amount": 0.75,
            "verified": True,
            "message": "Verified coupon applied (demo).",
        },
        "WELCOME": {
            "amount": 0.50,
            "verified": True,
            "message": "Verified welcome coupon applied (demo).",
        },
        "SAVE10": {
            "amount": 1.00,
            "verified": False,
            "message": "Found, but not verified for all sellers (demo).",
        },
    }

    # --- Price history simulation ---
    HISTORY_POINTS: int = 8
    HISTORY_STEP_DAYS: int = 7
    HISTORY_MAX_DRIFT: float = 0.9      # Uniform drift in [-x, +x] per step
    HISTORY_PRICE_FLOOR: float = 4.0
    HISTORY_FALLBACK_PRICE: float = 18.0
    HISTORY_NOTES: list[str] = [
        "Stable",
        "Small dip",
        "Small rise",
        "Promo week",
        "Low stock",
        "Weekend drop",
        "Restock",
        "Trending",
    ]

    # --- TUI quick queries (the first one prefills the search box) ---
    QUICK_QUERIES: list[str] = [
        "matte lipstick under $15",
        "long wear liquid lipstick",
        "hydrating lip tint",
        "nude lip liner",
    ]

    # --- Display limits ---
    COMPARE_LIMIT: int = 8
    WISHLIST_DISPLAY_LIMIT: int = 8
    ALERTS_DISPLAY_LIMIT: int = 6

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"
