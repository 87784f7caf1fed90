"""Configuration module for Habitica MCP server.

This module provides the ServerConfig Pydantic model for managing server
configuration from environment variables, files, command-line arguments,
and defaults.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field, HttpUrl, field_validator

from habitica_mcp import __version__

DEFAULT_BASE_URL = "https://habitica.com/api/v3"
DEFAULT_LANGUAGE = "en"


class ServerConfig(BaseModel):
    """Server configuration model with validation and default values.

    This Pydantic model handles all server configuration including Habitica
    credentials, the API base URL, display language, timeouts and logging
    levels with comprehensive validation.
    """

    habitica_user_id: str = Field(
        ...,
        min_length=1,
        description="Habitica user ID sent in the x-api-user header",
    )

    habitica_api_token: str = Field(
        ...,
        min_length=1,
        description="Habitica API token sent in the x-api-key header",
    )

    habitica_base_url: HttpUrl = Field(
        default=HttpUrl(DEFAULT_BASE_URL),
        description="Base URL for Habitica API endpoints",
    )

    language: str = Field(
        default=DEFAULT_LANGUAGE,
        description="Display language for tool descriptions and messages",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level for the application",
    )

    config_file: str | None = Field(
        default=None,
        description="Path to configuration file",
    )

    test_connectivity_on_startup: bool = Field(
        default=False,
        description="Test Habitica API connectivity during server startup",
    )

    http_user_agent: str = Field(
        default=f"habitica-mcp/{__version__}",
        description="HTTP client User-Agent header",
    )

    timeout_connect: float = Field(
        default=5.0,
        ge=1.0,
        le=30.0,
        description="HTTP connection timeout in seconds",
    )

    timeout_read: float = Field(
        default=30.0,
        ge=5.0,
        le=120.0,
        description="HTTP read timeout in seconds",
    )

    @field_validator("habitica_base_url")
    @classmethod
    def validate_https_url(cls, v: HttpUrl) -> HttpUrl:
        """Validate that the base URL uses HTTPS protocol.

        Args:
            v: The URL value to validate.

        Returns:
            HttpUrl: The validated HTTPS URL.

        Raises:
            ValueError: If the URL does not use HTTPS protocol.
        """
        if v.scheme != "https":
            msg = "URL must use HTTPS"
            raise ValueError(msg)
        return v

    @field_validator("language")
    @classmethod
    def normalize_language(cls, v: str) -> str:
        """Lowercase the language tag, falling back to English when blank."""
        return v.strip().lower() or DEFAULT_LANGUAGE

    @property
    def client_identifier(self) -> str:
        """Value of the x-client header Habitica asks third-party tools to send."""
        return f"{self.habitica_user_id}-MCP-Server"

    def to_redacted_dict(self) -> dict[str, Any]:
        """Return a dictionary representation with sensitive data redacted.

        This method creates a safe representation of the configuration
        for logging purposes, ensuring that the API token is not exposed.

        Returns:
            dict[str, Any]: Configuration dictionary with secrets redacted.
        """
        config_dict = self.model_dump()
        config_dict["habitica_api_token"] = "***redacted***"  # noqa: S105 - redaction placeholder, not actual secret
        # Convert HttpUrl to string for serialization
        config_dict["habitica_base_url"] = str(config_dict["habitica_base_url"])
        return config_dict
