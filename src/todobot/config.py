"""Application settings via pydantic-settings. Loads from environment and .env file."""

from __future__ import annotations

from pydantic import model_validator
from pydantic_settings import BaseSettings

from todobot.core.workflow import DEFAULT_SESSION_TTL_SECONDS


class Settings(BaseSettings):
    """Todo bot configuration.

    All values can be overridden via environment variables or .env file.
    """

    # Discord
    discord_bot_token: str = ""
    discord_guild_id: str = ""  # Sync commands to one guild instead of globally
    discord_enabled: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///todobot.db"

    # Environment
    todobot_env: str = "development"

    # Add workflow
    todobot_session_ttl_seconds: float = DEFAULT_SESSION_TTL_SECONDS
    todobot_enforce_initiator: bool = True  # Only the /todo add author may pick the team

    # Moderation
    todobot_language_filter_enabled: bool = True

    # Logging
    todobot_log_level: str = "INFO"

    model_config = {"env_prefix": "", "env_file": ".env", "extra": "ignore"}

    @model_validator(mode="after")
    def _check_session_ttl(self) -> Settings:
        if self.todobot_session_ttl_seconds <= 0:
            msg = "TODOBOT_SESSION_TTL_SECONDS must be positive."
            raise ValueError(msg)
        return self

    @model_validator(mode="after")
    def _require_token_in_production(self) -> Settings:
        """Reject an enabled bot without a token in production."""
        if self.todobot_env == "production" and self.discord_enabled and not self.discord_bot_token:
            msg = "DISCORD_BOT_TOKEN must be set when DISCORD_ENABLED is on in production."
            raise ValueError(msg)
        return self
