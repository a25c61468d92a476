"""Configuration loading and validation for mailprobe."""

import os
from pathlib import Path
from typing import Any

import keyring
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError

DEFAULT_BASE_URL = "https://mailtrap.io/api/{version}/"
KEYRING_SERVICE = "mailprobe"

ENV_VARS = {
    "client_id": "MAILTRAP_CLIENT_ID",
    "inbox_id": "MAILTRAP_INBOX_ID",
    "version": "MAILTRAP_API_VERSION",
}


def get_config_dir() -> Path:
    """Get the configuration directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "mailprobe"
    return Path.home() / ".config" / "mailprobe"


class MailtrapConfig(BaseModel):
    """Connection settings for one Mailtrap test inbox."""

    client_id: str = Field(description="Mailtrap API token")
    inbox_id: str = Field(description="Inbox the tests read from")
    version: str = Field(default="v1", description="API version path segment")
    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(default=30.0, gt=0)

    model_config = {"frozen": True}

    @field_validator("inbox_id", mode="before")
    @classmethod
    def coerce_inbox_id(cls, value: Any) -> Any:
        # YAML reads bare inbox ids as integers
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("client_id", "inbox_id", "version")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @property
    def api_base_url(self) -> str:
        """Base URL with the API version filled in."""
        return self.base_url.format(version=self.version)


def build_config(**values: Any) -> MailtrapConfig:
    """Validate raw settings, raising ConfigError instead of ValidationError."""
    values = {k: v for k, v in values.items() if v is not None}
    try:
        return MailtrapConfig.model_validate(values)
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
        raise ConfigError(f"Invalid Mailtrap configuration ({fields}): {e}") from e


def read_config_file(config_path: Path | None = None) -> dict[str, Any]:
    """Read the YAML config file, returning an empty mapping if absent."""
    if config_path is None:
        config_path = get_config_dir() / "config.yaml"

    if not config_path.exists():
        return {}

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")
    return data


def read_env() -> dict[str, str]:
    """Collect settings from MAILTRAP_* environment variables."""
    return {key: os.environ[var] for key, var in ENV_VARS.items() if os.environ.get(var)}


def load_config(config_path: Path | None = None, **overrides: Any) -> MailtrapConfig:
    """Load configuration from file, environment and keyring.

    Priority:
    1. Explicit overrides
    2. MAILTRAP_* environment variables
    3. YAML config file
    4. System keyring (API token only)
    """
    values: dict[str, Any] = read_config_file(config_path)
    values.update(read_env())
    values.update({k: v for k, v in overrides.items() if v is not None})

    if not values.get("client_id") and values.get("inbox_id"):
        values["client_id"] = get_token(str(values["inbox_id"]))

    return build_config(**values)


def get_token(inbox_id: str) -> str | None:
    """Retrieve the API token stored for an inbox in the system keyring."""
    try:
        return keyring.get_password(KEYRING_SERVICE, inbox_id)
    except keyring.errors.KeyringError:
        return None


def save_token(inbox_id: str, token: str) -> None:
    """Save the API token for an inbox to the system keyring."""
    keyring.set_password(KEYRING_SERVICE, inbox_id, token)


def delete_token(inbox_id: str) -> None:
    """Delete the API token for an inbox from the system keyring."""
    try:
        keyring.delete_password(KEYRING_SERVICE, inbox_id)
    except keyring.errors.PasswordDeleteError:
        pass  # Token didn't exist
