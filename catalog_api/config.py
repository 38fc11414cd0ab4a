# catalog_api/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CATALOG_API_", env_file=".env", extra="ignore")

    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "info"


settings = Settings()
