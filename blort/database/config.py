from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings, read from the environment and an optional .env file.
    """
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Database
    DATABASE_URL: Optional[str] = None
    DB_ECHO: bool = False

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3001

    # Application
    APP_NAME: str = "blort"
    APP_DESCRIPTION: str = "A name tracking web application"
    API_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"

    @property
    def DATABASE_URL_psycopg(self) -> str:
        """SQLAlchemy URL; Heroku/Render style postgres:// is mapped to psycopg2."""
        url = (self.DATABASE_URL or "").strip()
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+psycopg2://", 1)
        elif url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+psycopg2://", 1)
        return url

    def validate_required(self) -> None:
        if not self.DATABASE_URL or not self.DATABASE_URL.strip():
            raise RuntimeError("DATABASE_URL must be set")


@lru_cache()
def get_settings() -> Settings:
    settings = Settings()
    settings.validate_required()
    return settings
