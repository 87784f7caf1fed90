"""Pytest fixtures and configuration for the test suite."""

import tempfile
from collections.abc import Generator, Sequence
from pathlib import Path
from typing import cast

import pytest
from pydantic import HttpUrl

from habitica_mcp.api.client import HabiticaClient
from habitica_mcp.config import ServerConfig
from habitica_mcp.i18n import Localizer
from habitica_mcp.tools.dispatcher import ToolDispatcher
from habitica_mcp.tools.mcp_tools import build_dispatcher


@pytest.fixture
def default_config() -> ServerConfig:
    """Provide a default ServerConfig instance for testing.

    Returns:
        ServerConfig: A configured ServerConfig instance with test values.
    """
    return ServerConfig(
        habitica_user_id="user-123",
        habitica_api_token="test_api_token_123",
        habitica_base_url=HttpUrl("https://habitica.com/api/v3"),
        log_level="INFO",
        config_file=None,
    )


@pytest.fixture
def client(default_config: ServerConfig) -> HabiticaClient:
    """Provide a HabiticaClient instance for testing.

    Args:
        default_config: A ServerConfig fixture.

    Returns:
        HabiticaClient: A HabiticaClient instance.
    """
    return HabiticaClient(default_config)


@pytest.fixture
def localizer() -> Localizer:
    """Provide an English localizer."""
    return Localizer("en")


@pytest.fixture
def dispatcher(client: HabiticaClient, localizer: Localizer) -> ToolDispatcher:
    """Provide a dispatcher wired to the real handlers and the test client."""
    return build_dispatcher(client, localizer)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every environment variable the configuration loader reads."""
    for name in ("HABITICA_USER_ID", "HABITICA_API_TOKEN", "MCP_LANG", "LANG"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def temp_config_file() -> Generator[str, None, None]:
    """Create a temporary TOML config file.

    Yields:
        str: Path to a temporary TOML config file.
    """
    config_content = """
habitica_user_id = "file-user"
habitica_api_token = "file-token"
log_level = "WARNING"
"""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".toml", delete=False) as f:
        f.write(config_content)
        temp_path = f.name

    try:
        yield temp_path
    finally:
        Path(temp_path).unlink(missing_ok=True)


def extract_tool_response_text(result: object) -> str | None:
    """Extract text content from a FastMCP tool call result.

    Uses duck typing to avoid depending on internal FastMCP classes.

    Args:
        result: The FastMCP tool call result object.

    Returns:
        str | None: The extracted text content, or None if extraction fails.
    """

    try:
        contents = getattr(result, "content", None)
        if contents:
            for content_item in contents:
                text = getattr(content_item, "text", None)
                if text is not None:
                    return str(text)
            try:
                seq = cast(Sequence[object], contents)
                return str(seq[0])
            except Exception:
                return str(contents)
        return str(result)
    except Exception:
        return None
