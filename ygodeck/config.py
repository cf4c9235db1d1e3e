from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="YGODECK_")

    app_name: str = "ygodeck"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./ygodeck.db"

    # Binary catalog produced by `python -m ygodeck.jobs.pack_catalog`
    catalog_path: str = "data/cards.bin.xz"


settings = Settings()


# =============================================================================
# DECK LIMITS
# =============================================================================

# Per-entry counters are unsigned bytes and saturate at this value
MAX_COUNT = 255

# =============================================================================
# YDK INTERCHANGE
# =============================================================================

YDK_FILE_EXTENSION = ".ydk"
YDK_MIME_TYPE = "text/ydk"
YDK_FILE_NAME = f"deck{YDK_FILE_EXTENSION}"
