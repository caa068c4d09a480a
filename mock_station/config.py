"""Configuration for the mock weather station."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    port: int = 5000
    # Readings exist only inside this box; everything else is a 404
    min_latitude: float = 35.47
    max_latitude: float = 35.88
    min_longitude: float = 51.17
    max_longitude: float = 51.63
    latency_seconds: float = 0.0
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="MOCK_STATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def covers(self, latitude: float, longitude: float) -> bool:
        return (
            self.min_latitude <= latitude <= self.max_latitude
            and self.min_longitude <= longitude <= self.max_longitude
        )


settings = Settings()

__all__ = ["settings", "Settings"]
