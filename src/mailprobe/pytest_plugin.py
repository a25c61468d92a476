"""pytest fixtures for asserting on emails captured by Mailtrap.

Loaded automatically through the ``pytest11`` entry point. Tests request the
``mailtrap`` fixture; the inbox is cleaned after every test whether it passes
or fails.

    def test_welcome_email(mailtrap):
        signup("user@example.com")
        mailtrap.receive_an_email_with_subject("Welcome!")
"""

from collections.abc import Iterator
from pathlib import Path

import httpx
import pytest

from .assertions import EmailAssertions
from .config import MailtrapConfig, load_config
from .errors import ConfigError
from .session import inbox_session

OPTIONS = {
    "client_id": "API token",
    "inbox_id": "inbox id to read and clean",
    "version": "API version path segment (default v1)",
    "config": "path to a mailprobe YAML config file",
}


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("mailtrap", "Mailtrap email assertions")
    for name, help_text in OPTIONS.items():
        flag = "--mailtrap-" + name.replace("_", "-")
        group.addoption(flag, dest=f"mailtrap_{name}", default=None, help=f"Mailtrap {help_text}")
        parser.addini(f"mailtrap_{name}", f"Mailtrap {help_text}", default="")


def get_setting(pytestconfig: pytest.Config, name: str) -> str | None:
    """Read a setting from the command line, falling back to the ini file."""
    value = pytestconfig.getoption(f"mailtrap_{name}") or pytestconfig.getini(f"mailtrap_{name}")
    return value or None


def config_from_pytest(pytestconfig: pytest.Config) -> MailtrapConfig:
    """Build the Mailtrap configuration for this test run."""
    config_file = get_setting(pytestconfig, "config")
    return load_config(
        Path(config_file) if config_file else None,
        client_id=get_setting(pytestconfig, "client_id"),
        inbox_id=get_setting(pytestconfig, "inbox_id"),
        version=get_setting(pytestconfig, "version"),
    )


@pytest.fixture(scope="session")
def mailtrap_config(pytestconfig: pytest.Config) -> MailtrapConfig:
    """Mailtrap settings resolved once per test session."""
    try:
        return config_from_pytest(pytestconfig)
    except ConfigError as e:
        raise pytest.UsageError(str(e)) from e


@pytest.fixture
def mailtrap_transport() -> httpx.BaseTransport | None:
    """Transport for the Mailtrap client; override to fake the API."""
    return None


@pytest.fixture
def mailtrap(
    mailtrap_config: MailtrapConfig,
    mailtrap_transport: httpx.BaseTransport | None,
) -> Iterator[EmailAssertions]:
    """Assertion helpers for the test inbox, cleaned after the test."""
    with inbox_session(mailtrap_config, transport=mailtrap_transport) as assertions:
        yield assertions
