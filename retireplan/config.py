"""App-wide configuration defaults. Override with RETIREPLAN_* environment variables."""

from retireplan.domain.plan import DEFAULT_INFLATION_RATE, DEFAULT_TARGET_HORIZON_YEARS


class Config:
    CORS_ORIGINS = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]
    LOG_LEVEL = "INFO"
    # keep response fields in model order
    JSON_SORT_KEYS = False

    DEFAULT_TARGET_HORIZON_YEARS = DEFAULT_TARGET_HORIZON_YEARS
    DEFAULT_INFLATION_RATE = DEFAULT_INFLATION_RATE
