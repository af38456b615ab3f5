"""Application configuration loaded from the environment."""
import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables from a local .env if present
load_dotenv()

DEFAULT_DATABASE_URL = "sqlite:///./simplytodo.db"


@dataclass(frozen=True)
class Settings:
    """Process wide settings. Build with Settings.from_env() and pass it around."""

    database_url: str = DEFAULT_DATABASE_URL
    auth_secret: str = ""
    environment: str = "development"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL),
            auth_secret=os.environ.get("AUTH_SECRET", ""),
            environment=os.environ.get("ENVIRONMENT", "development"),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def logging_level(self) -> int:
        level = logging.getLevelName(self.log_level)
        return level if isinstance(level, int) else logging.INFO


def get_settings() -> Settings:
    """FastAPI dependency returning settings read from the current environment."""
    return Settings.from_env()
