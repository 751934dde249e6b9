"""Configuration management for the Toggl to Asana synchronizer."""

from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from toggl_asana_sync.exceptions import ConfigurationError

DEFAULT_LEDGER_PATH = Path("synced-entries.json")


class Settings(BaseSettings):
    """Runtime configuration sourced from environment variables and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    toggl_api_token: str = Field(validation_alias="TOGGL_API_TOKEN")
    toggl_workspace_id: str = Field(validation_alias="TOGGL_WORKSPACE_ID")
    asana_token: str = Field(validation_alias="ASANA_TOKEN")
    ledger_path: Path = Field(default=DEFAULT_LEDGER_PATH, validation_alias="SYNC_LEDGER_PATH")
    log_dir: Path | None = Field(default=None, validation_alias="SYNC_LOG_DIR")
    http_timeout: float = Field(default=30.0, validation_alias="SYNC_HTTP_TIMEOUT")

    @field_validator("toggl_api_token", "toggl_workspace_id", "asana_token")
    @classmethod
    def _require_value(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("http_timeout")
    @classmethod
    def _validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("SYNC_HTTP_TIMEOUT must be > 0")
        return value


_FIELD_ENV_NAMES = {
    "toggl_api_token": "TOGGL_API_TOKEN",
    "toggl_workspace_id": "TOGGL_WORKSPACE_ID",
    "asana_token": "ASANA_TOKEN",
    "ledger_path": "SYNC_LEDGER_PATH",
    "log_dir": "SYNC_LOG_DIR",
    "http_timeout": "SYNC_HTTP_TIMEOUT",
}


def load_settings(**overrides: Any) -> Settings:
    """Build the settings for one run.

    Args:
        **overrides: Field values taking precedence over the environment
            (e.g. ledger_path from the command line). None values are ignored.

    Returns:
        Validated settings.

    Raises:
        ConfigurationError: If a required value is missing or invalid.
    """
    values = {
        _FIELD_ENV_NAMES.get(key, key): value for key, value in overrides.items() if value is not None
    }
    try:
        return Settings(**values)
    except ValidationError as e:
        problems = []
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else "?"
            name = _FIELD_ENV_NAMES.get(field, field)
            if error["type"] == "missing":
                problems.append(f"{name} is not set")
            else:
                problems.append(f"{name}: {error['msg']}")
        raise ConfigurationError("Invalid configuration: " + "; ".join(problems)) from e
