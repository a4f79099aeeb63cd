from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central settings object.
    The hosting platform provides env vars; locally you can use backend/.env.

    Leaving SUPABASE_URL / SUPABASE_ANON_KEY empty puts the scanner client in
    demo mode (built-in catalog, simulated detection, no network calls).
    """
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Hosted store / edge platform
    SUPABASE_URL: str = ""
    SUPABASE_ANON_KEY: str = ""

    # Label detection provider (Google Cloud Vision REST)
    GOOGLE_VISION_API_KEY: str = ""
    VISION_API_BASE: str = "https://vision.googleapis.com/v1"
    VISION_MAX_LABELS: int = 10
    # Upper bound on a single provider call; without it a stuck provider
    # would hold the request open forever.
    VISION_TIMEOUT_SECONDS: float = 60.0

    # Scanner client -> detect-product service. Kept above the provider
    # timeout so the service's own {"error"} reply arrives first.
    DETECT_TIMEOUT_SECONDS: float = 90.0

    # Client behaviour in demo mode
    DEMO_SCAN_DELAY_SECONDS: float = 1.5

    LOG_LEVEL: str = "INFO"

    # Versioning
    APP_VERSION: str = "0.1.0"
    BUILD_ID: str = "dev"

    @property
    def is_configured(self) -> bool:
        return bool(self.SUPABASE_URL.strip() and self.SUPABASE_ANON_KEY.strip())

    @property
    def functions_url(self) -> str:
        return f"{self.SUPABASE_URL.rstrip('/')}/functions/v1"


# other modules import this
settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency; tests override it via app.dependency_overrides."""
    return settings
