"""
config.py — Process-wide settings for the Event Planner MCP server
===================================================================
Settings are read once at startup (environment + optional .env file) and
then passed explicitly to whatever needs them. Nothing else in the package
reads os.environ.

Placeholder values shipped in example env files ("YOUR_TOKEN_HERE",
"YOUR_ORG_ID_HERE") count as unset, so a half-configured server reports a
configuration problem instead of sending a bogus token to Eventbrite.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_API_BASE = "https://www.eventbriteapi.com/v3"
DEFAULT_PORT = 8787
DEFAULT_WIDGET_PATH = Path(__file__).parent / "assets" / "event-widget.html"

PLACEHOLDER_VALUES = {"YOUR_TOKEN_HERE", "YOUR_ORG_ID_HERE"}


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    api_base: str = DEFAULT_API_BASE
    token: Optional[str] = None
    org_id: Optional[str] = None
    timeout: float = 30.0
    widget_path: Path = DEFAULT_WIDGET_PATH
    log_level: str = "INFO"

    @field_validator("token", "org_id", mode="before")
    @classmethod
    def _blank_or_placeholder_is_unset(cls, value):
        if value is None:
            return None
        value = str(value).strip()
        if not value or value in PLACEHOLDER_VALUES:
            return None
        return value

    @field_validator("api_base")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Settings":
        """Load settings from the environment, after applying a .env file if present."""
        load_dotenv(env_file)
        values = {
            "host": os.getenv("HOST"),
            "port": os.getenv("PORT"),
            "api_base": os.getenv("EVENTBRITE_API_BASE"),
            "token": os.getenv("EVENTBRITE_TOKEN"),
            "org_id": os.getenv("EVENTBRITE_ORG_ID"),
            "timeout": os.getenv("EVENTBRITE_TIMEOUT"),
            "widget_path": os.getenv("EVENT_WIDGET_PATH"),
            "log_level": os.getenv("LOG_LEVEL"),
        }
        return cls(**{key: value for key, value in values.items() if value is not None})

    @property
    def has_token(self) -> bool:
        return self.token is not None

    @property
    def has_org_id(self) -> bool:
        return self.org_id is not None
