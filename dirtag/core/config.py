"""Application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Optional .env next to the working directory, e.g. for local development:
# DIRTAG_STATE_DIR=/tmp/dirtag-dev
ENV_FILE = Path.cwd() / ".env"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every setting can be overridden with a DIRTAG_-prefixed variable.
    Example: DIRTAG_LOG_LEVEL=DEBUG dirtag list
    """

    # =========================================================================
    # State / database
    # =========================================================================
    # STATE_DIR - where the database file lives.
    # When unset: $XDG_STATE_HOME/dirtag, then ~/.local/state/dirtag
    STATE_DIR: str | None = None

    # DB_FILENAME - name of the SQLite file inside STATE_DIR
    DB_FILENAME: str = "tag.db"

    # DATABASE_URL - full connection string, overrides STATE_DIR/DB_FILENAME
    # Format: sqlite+aiosqlite:////absolute/path/tag.db
    DATABASE_URL: str | None = None

    # DATABASE_ECHO - log every SQL statement (debugging)
    DATABASE_ECHO: bool = False

    # =========================================================================
    # Logging
    # =========================================================================
    # LOG_LEVEL - DEBUG, INFO, WARNING, ERROR, CRITICAL
    LOG_LEVEL: str = "WARNING"

    # LOG_FORMAT - "json" (structured) or "simple" (human-readable)
    LOG_FORMAT: str = "simple"

    model_config = SettingsConfigDict(
        env_prefix="DIRTAG_",
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    def resolve_database_url(self) -> str:
        """
        Return the SQLAlchemy URL of the state database.

        Resolving the default URL creates the state directory.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL

        from .paths import get_state_path

        return f"sqlite+aiosqlite:///{get_state_path(self.DB_FILENAME, self.STATE_DIR)}"


# Create global settings instance
settings = Settings()
