"""
Configuration settings for the balance exporter.
"""

from pydantic import BaseModel, Field, field_validator

from balance_exporter.utils.constants import DEFAULT_FIAT, DEFAULT_TIMEOUT

# HTTP server configuration
EXPORTER_CONFIG = {
    "listen_address": ":9401",
    "metrics_path": "/metrics",
    "default_fiat": DEFAULT_FIAT,
    "log_level": "INFO"
}

# Upstream API configuration
UPSTREAM_CONFIG = {
    "pool_url": "https://miningpoolhub.com",
    "price_url": "https://min-api.cryptocompare.com",
    "timeout": DEFAULT_TIMEOUT,     # Seconds, per request
    "max_retries": 0                # A failed fetch ends the scrape
}


class Settings(BaseModel):
    """Effective settings of a running exporter."""
    metrics_path: str = EXPORTER_CONFIG["metrics_path"]
    default_fiat: str = EXPORTER_CONFIG["default_fiat"]
    pool_url: str = UPSTREAM_CONFIG["pool_url"]
    price_url: str = UPSTREAM_CONFIG["price_url"]
    timeout: float = Field(UPSTREAM_CONFIG["timeout"], gt=0)
    max_retries: int = Field(UPSTREAM_CONFIG["max_retries"], ge=0, le=10)

    @field_validator("metrics_path")
    @classmethod
    def validate_metrics_path(cls, v):
        """Metrics cannot share the landing page path."""
        if not v.startswith("/") or v == "/":
            raise ValueError(f"{v} is not a valid metrics path, use e.g. /metrics")
        return v
