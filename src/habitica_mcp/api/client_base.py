"""Base client for Habitica API with HTTP plumbing and authentication.

This module provides the BaseClient class containing the HTTP infrastructure,
authentication headers, error mapping and response-envelope helpers shared by
the feature-specific mixins.
"""

import logging
import types
from typing import Any, NoReturn
from urllib.parse import quote

import httpx

from habitica_mcp.api.exceptions import (
    HabiticaAPIError,
    HabiticaAuthenticationError,
    HabiticaBadRequestError,
    HabiticaMalformedResponseError,
    HabiticaNetworkError,
    HabiticaNotFoundError,
    HabiticaRateLimitError,
    HabiticaServerError,
    HabiticaTimeoutError,
)
from habitica_mcp.config import ServerConfig

# HTTP status code constants
_HTTP_NO_CONTENT = 204
_HTTP_BAD_REQUEST = 400
_HTTP_UNAUTHORIZED = 401
_HTTP_NOT_FOUND = 404
_HTTP_TOO_MANY_REQUESTS = 429
_HTTP_INTERNAL_SERVER_ERROR = 500
_HTTP_MAX_SERVER_ERROR = 600

# Configure logger to write to stderr
logger = logging.getLogger(__name__)


def path_segment(value: object) -> str:
    """Percent-encode a caller-supplied value for use as one URL path segment."""
    return quote(str(value), safe="")


def extract_remote_message(response: httpx.Response) -> str | None:
    """Pull the ``message`` field out of a Habitica error envelope.

    Habitica reports failures as ``{"success": false, "error": ..., "message": ...}``.
    Bodies that are not JSON objects, or that carry no non-empty string message,
    yield None.
    """
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    message = body.get("message")
    if isinstance(message, str) and message:
        return message
    return None


class BaseClient:
    """Base client providing HTTP plumbing and authentication for Habitica API.

    This class contains the core HTTP infrastructure including connection
    management, authentication and error mapping that is composed with
    feature-specific mixins. No retries are attempted; every failure is
    terminal for the request that produced it.
    """

    def __init__(self, config: ServerConfig) -> None:
        """Initialize the base Habitica API client.

        Args:
            config: Server configuration containing credentials and base URL
        """
        self._config = config
        self._base_url = str(config.habitica_base_url).rstrip("/")
        self._user_id = config.habitica_user_id
        self._api_token = config.habitica_api_token
        self._http_client: httpx.AsyncClient | None = None

    def __str__(self) -> str:
        """Return string representation without exposing the API token."""
        return f"BaseClient(base_url={self._base_url}, token=***redacted***)"

    def __repr__(self) -> str:
        """Return repr without exposing the API token."""
        return f"BaseClient(base_url='{self._base_url}', token='***redacted***')"

    async def __aenter__(self) -> "BaseClient":
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        """Async context manager exit with cleanup."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if one was created."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client with proper configuration.

        Returns:
            httpx.AsyncClient: Configured async HTTP client
        """
        if self._http_client is None:
            timeout = httpx.Timeout(
                connect=self._config.timeout_connect,
                read=self._config.timeout_read,
                write=10.0,
                pool=10.0,
            )

            limits = httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
            )

            headers = {"User-Agent": self._config.http_user_agent}

            self._http_client = httpx.AsyncClient(
                timeout=timeout,
                limits=limits,
                follow_redirects=True,
                headers=headers,
            )

        return self._http_client

    def _get_auth_headers(self) -> dict[str, str]:
        """Get the Habitica authentication headers.

        Returns:
            Dict[str, str]: Headers including x-api-user, x-api-key, x-client and Content-Type
        """
        return {
            "x-api-user": self._user_id,
            "x-api-key": self._api_token,
            "x-client": self._config.client_identifier,
            "Content-Type": "application/json",
        }

    def _get_redacted_headers(self) -> dict[str, str]:
        """Get headers with redacted API token for logging.

        Returns:
            Dict[str, str]: Headers with redacted x-api-key
        """
        headers = self._get_auth_headers()
        headers["x-api-key"] = "***redacted***"
        return headers

    def _handle_http_error(self, error: httpx.HTTPStatusError) -> NoReturn:
        """Handle HTTP status errors and raise appropriate exceptions.

        Args:
            error: HTTP status error from httpx

        Raises:
            HabiticaBadRequestError: For 400 Bad Request
            HabiticaAuthenticationError: For 401 Unauthorized
            HabiticaNotFoundError: For 404 Not Found
            HabiticaRateLimitError: For 429 Too Many Requests
            HabiticaServerError: For 5xx server errors
            HabiticaAPIError: For other HTTP errors
        """
        status_code = error.response.status_code
        remote_message = extract_remote_message(error.response)

        if status_code == _HTTP_BAD_REQUEST:
            logger.error("Bad request to Habitica API: %s", remote_message)
            raise HabiticaBadRequestError(remote_message=remote_message) from error
        if status_code == _HTTP_UNAUTHORIZED:
            logger.error("Authentication failed with Habitica API")
            raise HabiticaAuthenticationError(remote_message=remote_message) from error
        if status_code == _HTTP_NOT_FOUND:
            logger.error("Resource not found: %s", error.request.url)
            raise HabiticaNotFoundError(remote_message=remote_message) from error
        if status_code == _HTTP_TOO_MANY_REQUESTS:
            logger.error("Rate limit exceeded for Habitica API")
            raise HabiticaRateLimitError(remote_message=remote_message) from error
        if _HTTP_INTERNAL_SERVER_ERROR <= status_code < _HTTP_MAX_SERVER_ERROR:
            logger.error("Habitica API server error: %s", status_code)
            raise HabiticaServerError(
                f"Habitica server error ({status_code})",
                status_code=status_code,
                remote_message=remote_message,
            ) from error
        logger.error("Habitica API error: %s", status_code)
        raise HabiticaAPIError(
            f"Habitica API error ({status_code})",
            status_code=status_code,
            remote_message=remote_message,
        ) from error

    async def make_request(
        self,
        method: str,
        endpoint: str,
        data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an authenticated request to the Habitica API.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: API endpoint (without base URL)
            data: JSON data for request body
            params: Query parameters

        Returns:
            Any: Parsed JSON response body, ``{}`` for 204 No Content

        Raises:
            HabiticaBadRequestError: Invalid request parameters
            HabiticaAuthenticationError: Authentication failed
            HabiticaNotFoundError: Resource not found
            HabiticaRateLimitError: Rate limit exceeded
            HabiticaServerError: Server error
            HabiticaNetworkError: Network connectivity error
            HabiticaTimeoutError: Request timeout
            HabiticaMalformedResponseError: Response body is not JSON
            HabiticaAPIError: Other API errors
        """
        method_upper = method.upper()
        url = f"{self._base_url}/{endpoint.lstrip('/')}"
        headers = self._get_auth_headers()

        try:
            http_client = self._get_http_client()

            logger.debug(
                "Making %s request to %s with headers: %s",
                method_upper,
                url,
                self._get_redacted_headers(),
            )

            response = await http_client.request(
                method=method_upper,
                url=url,
                headers=headers,
                json=data,
                params=params,
            )

            response.raise_for_status()

        except httpx.HTTPStatusError as error:
            self._handle_http_error(error)
        except httpx.TimeoutException as error:
            logger.exception("Request timeout")
            raise HabiticaTimeoutError from error
        except httpx.NetworkError as error:
            logger.exception("Network error")
            raise HabiticaNetworkError from error
        except Exception as error:
            logger.exception("Unexpected error during API request")
            raise HabiticaAPIError.create_unexpected_error(method_upper, endpoint) from error

        if response.status_code == _HTTP_NO_CONTENT:
            logger.debug("Successful API response: %s (No Content)", response.status_code)
            return {}

        try:
            result = response.json()
        except ValueError as error:
            logger.exception("Habitica API returned a non-JSON body for %s %s", method_upper, url)
            raise HabiticaMalformedResponseError from error

        logger.debug("Successful API response: %s", response.status_code)
        return result

    @staticmethod
    def unwrap_data(body: Any, endpoint: str) -> Any:
        """Return the ``data`` member of a Habitica success envelope.

        Raises:
            HabiticaMalformedResponseError: When the body is not an envelope with ``data``
        """
        if not isinstance(body, dict) or "data" not in body:
            raise HabiticaMalformedResponseError.missing_field(endpoint, "data")
        return body["data"]

    @staticmethod
    def require_mapping(value: Any, endpoint: str, field: str) -> dict[str, Any]:
        """Check that a response member is a JSON object.

        Raises:
            HabiticaMalformedResponseError: When ``value`` is not a dict
        """
        if not isinstance(value, dict):
            raise HabiticaMalformedResponseError.missing_field(endpoint, field)
        return value

    async def test_connectivity(self) -> bool:
        """Test connectivity to the Habitica API.

        Queries the public status endpoint and checks that Habitica reports
        itself as up.

        Returns:
            bool: True if connectivity test succeeds, False otherwise
        """
        try:
            result = await self.make_request("GET", "status")
        except HabiticaAPIError as e:
            logger.warning("Habitica API connectivity test failed: %s", e)
            return False
        except Exception:
            logger.exception("Habitica API connectivity test failed with unexpected error")
            return False
        else:
            data = result.get("data") if isinstance(result, dict) else None
            if isinstance(data, dict) and data.get("status") == "up":
                logger.info("Habitica API connectivity test successful")
                return True
            logger.warning("Habitica API connectivity test failed: unexpected response")
            return False
