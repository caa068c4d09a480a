"""Application settings loaded from environment variables."""

from datetime import date

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "envprobe"
    app_version: str = "0.1.0"
    api_prefix: str = "/api"
    port: int = 8000
    weather_api_url: str = "http://localhost:5000"
    weather_api_timeout: float = 10.0
    log_level: str = "INFO"
    # Day whose 24 hourly slots make up the time selector (UTC)
    reference_day: date = date(2025, 1, 1)
    # Map viewport; clicks are expected to land inside these bounds
    center_latitude: float = 35.675
    center_longitude: float = 51.40
    min_latitude: float = 35.47
    max_latitude: float = 35.88
    min_longitude: float = 51.17
    max_longitude: float = 51.63
    map_zoom: int = 10
    min_zoom: int = 10
    max_zoom: int = 20

    model_config = SettingsConfigDict(
        env_prefix="ENVPROBE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()

__all__ = ["settings", "Settings"]
