from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
    DATABASE_URL: str = Field("postgresql+psycopg2://yelpcamp:changeme@db:5432/yelpcamp", alias="DATABASE_URL")
    SECRET_KEY: str = Field("dev-secret", alias="SESSION_SECRET")
    SESSION_COOKIE_NAME: str = "session"
    SESSION_MAX_AGE: int = 60 * 60 * 24 * 14   # 14 days
    SESSION_HTTPS_ONLY: bool = False

    CLOUDINARY_CLOUD_NAME: str = "dywbrzcuk"
    CLOUDINARY_API_KEY: str | None = None
    CLOUDINARY_API_SECRET: str | None = None
    MEDIA_TIMEOUT: float = 30.0

    # Registration elevation is disabled unless an operator sets a code.
    ADMIN_CODE: str | None = None
    ADMIN_USERNAME: str | None = None
    ADMIN_EMAIL: str | None = None
    ADMIN_PASSWORD: str | None = None

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def SESSION_SECRET(self) -> str:
        return self.SECRET_KEY

@lru_cache
def get_settings() -> Settings:
    return Settings()
