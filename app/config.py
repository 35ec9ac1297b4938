"""Configuration settings for the Nearby Convenience API."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Settings
    app_name: str = "Nearby Convenience API"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 5000

    # Google Maps Platform Settings
    google_maps_api_key: Optional[str] = None
    places_base_url: str = "https://maps.googleapis.com/maps/api"
    places_timeout_seconds: float = 15.0

    # Search Defaults
    default_radius_m: int = 5000
    default_place_type: str = "store"
    transit_radius_m: int = 1000
    default_min_rating: float = 4.0
    cost_estimation_place_type: str = "restaurant"

    # CORS Settings
    cors_origins: list = ["*"]  # Restrict in production, e.g., ["https://yourdomain.com"]

    # Request Logging
    log_requests_to_file: bool = True
    request_log_file: str = "logs/requests.jsonl"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
