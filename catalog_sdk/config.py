# catalog_sdk/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CATALOG_", env_file=".env", extra="ignore")

    api_url: str = "http://localhost:5000"
    timeout: float = 10.0
    log_level: str = "INFO"


def get_settings() -> Settings:
    return Settings()
