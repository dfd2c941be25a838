"""
Configuration settings for the LandQuote application.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Attributes:
        google_maps_api_key: Server-side key for the geocoding provider
        geocoder_timeout: Seconds before a geocoding call is abandoned
        base_latitude: Latitude of the crew's home base
        base_longitude: Longitude of the crew's home base
        fallback_latitude: Latitude used when an address cannot be resolved
        fallback_longitude: Longitude used when an address cannot be resolved
        quote_validity_days: Days a quote stays valid after it is issued
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="LANDQUOTE_",
    )

    # Geocoding provider
    google_maps_api_key: Optional[str] = None
    geocoder_timeout: float = 5.0
    geocoder_cache_ttl: int = 86400

    # Service base - 3634 Watermelon Lane, New Smyrna Beach, FL 32168
    base_address: str = "3634 Watermelon Lane, New Smyrna Beach, FL 32168"
    base_latitude: float = 29.0216
    base_longitude: float = -81.0770

    # Default service region used for unresolvable addresses
    fallback_latitude: float = 29.0216
    fallback_longitude: float = -81.0770

    # Quotes
    quote_validity_days: int = 30

    # API settings
    api_v1_prefix: str = "/api/v1"
    port: int = 8000

    # CORS settings
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    # Logging
    log_file: Optional[Path] = None

    # Environment
    environment: Literal["development", "staging", "production"] = "development"

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def geocoding_enabled(self) -> bool:
        """Whether a provider key is configured."""
        return bool(self.google_maps_api_key)


# Global settings instance
settings = Settings()
