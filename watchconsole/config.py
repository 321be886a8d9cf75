from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="WATCHCONSOLE_")

    app_name: str = "WatchConsole"
    debug: bool = False
    log_level: str = "INFO"

    backend_url: str = "http://localhost:3000"
    backend_token: str = ""
    request_timeout: float = 30.0

    # Upper bound on in-flight title lookups during enrichment
    enrichment_concurrency: int = 8

    # Acting admin for the console session
    admin_user_id: str = ""
    admin_username: str = ""


settings = Settings()


# =============================================================================
# DISPLAY FALLBACKS
# =============================================================================

# Poster shown for a watchlist whose first title cannot be resolved
FALLBACK_POSTER_URL = "/src/assets/Images/default-title-image.png"

# Profile picture shown for accounts without a signed image URL
DEFAULT_PROFILE_IMAGE_URL = "/src/assets/Images/default-profile.jpg"


# =============================================================================
# DASHBOARD PREVIEW SIZES
# =============================================================================

DASHBOARD_ACCOUNT_PREVIEW = 3
DASHBOARD_WATCHLIST_PREVIEW = 3
DASHBOARD_COMMENT_PREVIEW = 4
