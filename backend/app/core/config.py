"""
Application configuration using Pydantic Settings.

History store switching is controlled by the HISTORY_BACKEND variable.
"""

from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["local", "production"] = "local"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # ===========================================
    # History store
    # ===========================================
    # "sqlite": local SQLAlchemy database (DATABASE_URL)
    # "supabase": hosted Postgres through the Supabase REST API
    HISTORY_BACKEND: Literal["sqlite", "supabase"] = "sqlite"

    DATABASE_URL: str = "sqlite+aiosqlite:///./eq_chatbot.db"

    SUPABASE_URL: str = ""
    SUPABASE_KEY: str = ""
    SUPABASE_TABLE: str = "chats"

    # ===========================================
    # Completion API (Anthropic Messages)
    # ===========================================
    ANTHROPIC_API_KEY: str = ""
    ANTHROPIC_API_URL: str = "https://api.anthropic.com/v1/messages"
    ANTHROPIC_VERSION: str = "2023-06-01"

    COMPLETION_MODEL: str = "claude-3-haiku-20240307"
    COMPLETION_MAX_TOKENS: int = 1000
    COMPLETION_TEMPERATURE: float = 0.7

    # Unset means the upstream call may block indefinitely.
    COMPLETION_TIMEOUT_SECONDS: Optional[float] = None

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    ALLOWED_ORIGINS: List[str] = Field(default=["*"])

    @property
    def uses_supabase(self) -> bool:
        """Check if history is kept in Supabase."""
        return self.HISTORY_BACKEND == "supabase"

    @property
    def is_local(self) -> bool:
        """Check if running in local environment."""
        return self.ENVIRONMENT == "local"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
