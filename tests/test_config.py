# ruff: noqa: S105, PLR2004
"""Tests for the configuration module.

This module contains tests for the ServerConfig Pydantic model.
"""

import pytest
from pydantic import HttpUrl, ValidationError

from habitica_mcp.config import ServerConfig
from tests.test_api_client_common import TEST_API_TOKEN, TEST_USER_ID


class TestServerConfigModel:
    """Test suite for the ServerConfig Pydantic model."""

    def test_server_config_default_values(self) -> None:
        """Test that ServerConfig initializes with correct default values."""
        config = ServerConfig(habitica_user_id=TEST_USER_ID, habitica_api_token=TEST_API_TOKEN)

        assert str(config.habitica_base_url) == "https://habitica.com/api/v3"
        assert config.language == "en"
        assert config.log_level == "INFO"
        assert config.config_file is None
        assert config.test_connectivity_on_startup is False
        assert config.timeout_connect == 5.0
        assert config.timeout_read == 30.0
        assert config.http_user_agent.startswith("habitica-mcp/")

    def test_server_config_requires_both_credentials(self) -> None:
        """Test that the user ID and API token are both required."""
        with pytest.raises(ValidationError) as exc_info:
            ServerConfig()  # type: ignore[call-arg] - testing missing required parameters

        errors = exc_info.value.errors()
        missing = {error["loc"][0] for error in errors if error["type"] == "missing"}
        assert missing == {"habitica_user_id", "habitica_api_token"}

    def test_server_config_rejects_empty_credentials(self) -> None:
        """Test that empty strings are not accepted as credentials."""
        with pytest.raises(ValidationError):
            ServerConfig(habitica_user_id="", habitica_api_token=TEST_API_TOKEN)
        with pytest.raises(ValidationError):
            ServerConfig(habitica_user_id=TEST_USER_ID, habitica_api_token="")

    def test_server_config_rejects_http_url(self) -> None:
        """Test that a non-HTTPS base URL is rejected."""
        with pytest.raises(ValidationError, match="URL must use HTTPS"):
            ServerConfig(
                habitica_user_id=TEST_USER_ID,
                habitica_api_token=TEST_API_TOKEN,
                habitica_base_url=HttpUrl("http://habitica.com/api/v3"),
            )

    def test_server_config_invalid_log_level(self) -> None:
        """Test that log_level only accepts the standard level names."""
        with pytest.raises(ValidationError):
            ServerConfig(
                habitica_user_id=TEST_USER_ID,
                habitica_api_token=TEST_API_TOKEN,
                log_level="VERBOSE",  # type: ignore[arg-type]
            )

    def test_server_config_timeout_bounds(self) -> None:
        """Test that timeouts are range checked."""
        with pytest.raises(ValidationError):
            ServerConfig(
                habitica_user_id=TEST_USER_ID,
                habitica_api_token=TEST_API_TOKEN,
                timeout_connect=0.5,
            )
        with pytest.raises(ValidationError):
            ServerConfig(
                habitica_user_id=TEST_USER_ID,
                habitica_api_token=TEST_API_TOKEN,
                timeout_read=500.0,
            )

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("EN", "en"), ("  pt-BR ", "pt-br"), ("", "en"), ("   ", "en")],
    )
    def test_server_config_normalizes_language(self, raw: str, expected: str) -> None:
        """Test that the language is lowercased and defaults to English when blank."""
        config = ServerConfig(
            habitica_user_id=TEST_USER_ID, habitica_api_token=TEST_API_TOKEN, language=raw
        )
        assert config.language == expected

    def test_client_identifier_derived_from_user_id(self) -> None:
        """Test the x-client header value."""
        config = ServerConfig(habitica_user_id="abc", habitica_api_token=TEST_API_TOKEN)
        assert config.client_identifier == "abc-MCP-Server"

    def test_to_redacted_dict_hides_token(self) -> None:
        """Test that the redacted representation never contains the API token."""
        config = ServerConfig(habitica_user_id=TEST_USER_ID, habitica_api_token="very-secret")

        redacted = config.to_redacted_dict()

        assert redacted["habitica_api_token"] == "***redacted***"
        assert redacted["habitica_user_id"] == TEST_USER_ID
        assert redacted["habitica_base_url"] == "https://habitica.com/api/v3"
        assert "very-secret" not in str(redacted)
