import os
from decimal import Decimal

# Load .env automatically so variables defined next to the project are
# available when running uvicorn without --env-file.
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "0") -> bool:
    return str(os.getenv(name, default)).strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    """Lightweight settings loader using environment variables.

    Values are read once at import time; tests that need a different value
    patch the attribute on the shared ``settings`` instance.
    """

    SECRET_KEY: str = os.getenv("SECRET_KEY", "change-me-to-a-secure-random-string")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

    # Be resilient to an accidental repeated prefix like
    # "DATABASE_URL=DATABASE_URL=..." coming from a malformed .env file.
    raw_db = os.getenv("DATABASE_URL", "sqlite:///./stadium_orders.db")
    if isinstance(raw_db, str) and raw_db.startswith("DATABASE_URL="):
        raw_db = raw_db.split("=", 1)[1]
    DATABASE_URL: str = raw_db

    APP_ENV: str = os.getenv("APP_ENV", os.getenv("ENV", "development")).lower()
    # Environment-aware pool defaults (server databases only)
    _default_pool_size = 5 if APP_ENV == "development" else 10
    _default_max_overflow = 2 if APP_ENV == "development" else 20
    _default_pool_recycle = 900 if APP_ENV == "development" else 1800

    DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", str(_default_pool_size)))
    DB_MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", str(_default_max_overflow)))
    DB_POOL_RECYCLE: int = int(os.getenv("DB_POOL_RECYCLE", str(_default_pool_recycle)))  # seconds

    # Ordering rules
    DELIVERY_FEE: Decimal = Decimal(os.getenv("DELIVERY_FEE", "2.50"))
    ORDER_NUMBER_LENGTH: int = int(os.getenv("ORDER_NUMBER_LENGTH", "6"))
    ORDER_NUMBER_MAX_ATTEMPTS: int = int(os.getenv("ORDER_NUMBER_MAX_ATTEMPTS", "5"))
    # When off, status updates overwrite unconditionally (kitchen buttons
    # decide which transitions are offered).
    STRICT_STATUS_TRANSITIONS: bool = _env_flag("STRICT_STATUS_TRANSITIONS")
    STAFF_AUTH_REQUIRED: bool = _env_flag("STAFF_AUTH_REQUIRED")

    VENUE_TIMEZONE: str = os.getenv("VENUE_TIMEZONE", "UTC")
    SEED_ON_STARTUP: bool = _env_flag("SEED_ON_STARTUP", "1")

    CORS_ORIGINS: str = os.getenv(
        "CORS_ORIGINS",
        "http://localhost:5000,http://127.0.0.1:5000,http://localhost:5173,http://127.0.0.1:5173",
    )

    # Logging and monitoring controls
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    # Log request counters every N hits per route
    REQUEST_LOG_EVERY_N: int = int(os.getenv("REQUEST_LOG_EVERY_N", "100"))
    # Log pool events every N occurrences
    DB_LOG_EVERY_N: int = int(os.getenv("DB_LOG_EVERY_N", "50"))
    # Verbose per-request logging (development aid)
    REQUEST_LOG_VERBOSE: bool = _env_flag("REQUEST_LOG_VERBOSE")
    # Comma-separated route prefixes to include for verbose logging
    REQUEST_LOG_INCLUDE_PREFIXES: str = os.getenv(
        "REQUEST_LOG_INCLUDE_PREFIXES",
        "/api/orders,/api/kitchen"
    )

    @property
    def cors_origins(self) -> list:
        return [o.strip() for o in (self.CORS_ORIGINS or "").split(",") if o.strip()]


settings = Settings()
