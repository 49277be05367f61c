# showcase/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - ACCESS_TOKEN_SECRET  (HS256 key for short-lived access tokens)
      - REFRESH_TOKEN_SECRET (HS256 key for long-lived refresh tokens)

    Optional:
      - DATABASE_URL (defaults to a local SQLite file)
      - SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY (profile image uploads)
      - ENVIRONMENT ("production" turns on the Secure cookie flag)

    The object is built once at startup and handed to the token issuer and
    session manager; business code never reads os.environ itself.
    """

    PROJECT_NAME: str = "Showcase Identity API"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "development"

    DATABASE_URL: str = "sqlite:///./showcase.db"

    # Token issuance: two independent keys and lifetimes
    ACCESS_TOKEN_SECRET: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_SECRET: str
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    JWT_ALG: str = "HS256"

    REFRESH_COOKIE_NAME: str = "refreshToken"

    # Supabase Storage for profile images
    SUPABASE_URL: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None
    STORAGE_BUCKET: str = "assets"

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.strip().lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
