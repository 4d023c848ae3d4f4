"""Application configuration loaded from environment variables."""
import os
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_prefix="WELLNESS_", env_file=".env", extra="ignore")

    # Database location
    data_path: str = os.getenv("DATA_PATH", os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

    @property
    def database_path(self) -> str:
        return os.path.join(self.data_path, "wellness.db")

    # Token signing
    jwt_secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    access_token_expire_days: int = 7

    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 5000

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]


@lru_cache
def get_settings() -> Settings:
    return Settings()
