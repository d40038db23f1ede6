from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Google Maps API configuration (Places, Directions, Elevation)
    google_maps_api_key: str = ""
    google_request_timeout_s: float = 10.0

    # API configuration
    api_version: str = "1.0"
    max_routes: int = 5

    # API call limits
    max_api_calls_per_day: int = 1000

    # OpenAI configuration
    openai_model: str = "gpt-4o-mini"
    openai_api_key: str = ""
    openai_base_url: Optional[str] = None
    # Higher creativity for route variety
    openai_temperature: float = 0.8

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
