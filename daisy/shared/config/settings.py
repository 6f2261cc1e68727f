# 📄 File: daisy/shared/config/settings.py
#
# 🧭 Purpose (Layman Explanation):
# The configuration center that reads all settings from environment variables
# (where the backend lives, which buckets and tables to use, how long to wait
# for a recognition) and hands them to the rest of the Daisy client.
#
# 🧪 Purpose (Technical Summary):
# Pydantic-based settings management with environment variable loading,
# validation, and type safety for backend resource identifiers and polling bounds.
#
# 🔗 Dependencies:
# - pydantic-settings for configuration management
# - python-dotenv for .env file loading
# - typing for type hints
#
# 🔄 Connected Modules / Calls From:
# - daisy.shared.config.supabase (client creation)
# - daisy.gateway (resource identifiers, polling bounds)
# - daisy.shared.utils.logging (log level and format)

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Client settings loaded from environment variables.

    Uses Pydantic for validation and type safety. Settings are loaded
    from environment variables with fallback to .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================

    APP_NAME: str = Field(default="Daisy", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(default="json", description="Log format: json or text")
    LOG_FILE: Optional[str] = Field(None, description="Optional log file path")

    # =========================================================================
    # SUPABASE CONNECTION
    # =========================================================================

    SUPABASE_URL: str = Field(..., description="Supabase project URL")
    SUPABASE_ANON_KEY: str = Field(..., description="Supabase anonymous key")
    SUPABASE_SCHEMA: str = Field(default="public", description="Database schema holding the collections")
    SUPABASE_CLIENT_TIMEOUT: int = Field(default=30, description="Storage/database client timeout (seconds)")

    # =========================================================================
    # BACKEND RESOURCES
    # =========================================================================

    BLOG_TABLE: str = Field(default="blog_entries", description="Blog documents table")
    EXECUTIONS_TABLE: str = Field(default="function_executions", description="Function executions table")
    IMAGES_BUCKET: str = Field(default="images", description="Bucket for recognition images")
    BLOG_IMAGES_BUCKET: str = Field(default="blog-images", description="Bucket for blog images")

    # =========================================================================
    # RECOGNITION FUNCTION
    # =========================================================================

    RECOGNITION_FUNCTION_ID: str = Field(
        default="recognize-plant",
        description="Identifier of the plant recognition function"
    )
    RECOGNITION_POLL_INTERVAL_SECONDS: float = Field(
        default=1.0,
        description="Delay between execution status checks"
    )
    RECOGNITION_TIMEOUT_SECONDS: Optional[float] = Field(
        default=120.0,
        description="Maximum wait for an execution; empty or 'none' for no limit"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level against the standard names."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of: {allowed}")
        return v.upper()

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v):
        if v.lower() not in ("json", "text"):
            raise ValueError("LOG_FORMAT must be 'json' or 'text'")
        return v.lower()

    @field_validator("RECOGNITION_POLL_INTERVAL_SECONDS")
    @classmethod
    def validate_poll_interval(cls, v):
        if v <= 0:
            raise ValueError("RECOGNITION_POLL_INTERVAL_SECONDS must be positive")
        return v

    @field_validator("RECOGNITION_TIMEOUT_SECONDS", mode="before")
    @classmethod
    def parse_no_timeout(cls, v):
        """Empty, 'none' and 'null' disable the recognition timeout."""
        if isinstance(v, str) and v.strip().lower() in ("", "none", "null"):
            return None
        return v

    @field_validator("RECOGNITION_TIMEOUT_SECONDS")
    @classmethod
    def validate_timeout(cls, v):
        if v is not None and v <= 0:
            raise ValueError("RECOGNITION_TIMEOUT_SECONDS must be positive when set")
        return v


# ============================================================================
# SETTINGS FACTORY
# ============================================================================

@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Uses lru_cache to ensure settings are loaded only once
    and reused throughout the application lifecycle.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
