# admin_api/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

# Values shipped in .env.example / Supabase docs that mean "not configured yet"
PLACEHOLDER_MARKERS = (
    "your-project",
    "your_supabase",
    "your-anon-key",
    "example.supabase.co",
    "placeholder",
)


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - SUPABASE_URL
      - SUPABASE_KEY (anon key)
      - DATABASE_URL (Supabase Postgres connection string)
      - SUPABASE_JWT_SECRET (JWT signing secret from Supabase project settings)

    Optional:
      - SUPABASE_SERVICE_ROLE_KEY (storage uploads, bypasses RLS)
      - STORAGE_BUCKET (defaults to "product-images")
      - MAX_UPLOAD_BYTES (raw upload limit before optimization)
    """

    PROJECT_NAME: str = "Rental Fashion Admin API"
    API_V1_STR: str = "/api/v1"

    # Supabase / DB config
    SUPABASE_URL: str
    SUPABASE_KEY: str
    DATABASE_URL: str

    # JWT verification (backend-side)
    SUPABASE_JWT_SECRET: str
    SUPABASE_JWT_ALG: str = "HS256"

    # Service role key bypasses RLS (backend only)
    SUPABASE_SERVICE_ROLE_KEY: str | None = None

    STORAGE_BUCKET: str = "product-images"
    MAX_UPLOAD_BYTES: int = 15 * 1024 * 1024

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def has_placeholder_supabase_config(self) -> bool:
        """
        True when SUPABASE_URL / SUPABASE_KEY still hold example values.

        Checked at login time so a half-configured deployment fails with a
        clear message instead of an opaque network error.
        """
        for value in (self.SUPABASE_URL, self.SUPABASE_KEY):
            lowered = value.strip().lower()
            if not lowered:
                return True
            if any(marker in lowered for marker in PLACEHOLDER_MARKERS):
                return True
        return False


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
