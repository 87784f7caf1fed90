"""HTTP plumbing, authentication and error-mapping tests for HabiticaClient."""
# pyright: reportPrivateUsage=false

from __future__ import annotations

import httpx
import pytest
from pytest_mock import MockerFixture

from habitica_mcp.api.client import HabiticaClient
from habitica_mcp.api.client_base import BaseClient, extract_remote_message, path_segment
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
from tests.test_api_client_common import (
    DEFAULT_BASE,
    HTTP_BAD_GATEWAY,
    HTTP_BAD_REQUEST,
    HTTP_INTERNAL_SERVER_ERROR,
    HTTP_NO_CONTENT,
    HTTP_NOT_FOUND,
    HTTP_OK,
    HTTP_TOO_MANY_REQUESTS,
    HTTP_UNAUTHORIZED,
    SECRET_API_TOKEN,
    TEST_USER_ID,
    error_body,
    get_auth_headers,
    get_client_base_url,
    get_client_http_client,
    get_http_client,
    get_redacted_headers,
    make_config,
    make_response,
    mock_http_client,
)


class TestHabiticaClientInitialization:
    """Test client construction and secret handling."""

    def test_base_url_trailing_slash_removed(self) -> None:
        """Test that the base URL is stored without a trailing slash."""
        client = HabiticaClient(make_config())
        assert get_client_base_url(client) == DEFAULT_BASE

    def test_str_and_repr_redact_token(self) -> None:
        """Test that the API token never appears in string representations."""
        client = HabiticaClient(make_config(habitica_api_token=SECRET_API_TOKEN))

        assert SECRET_API_TOKEN not in str(client)
        assert SECRET_API_TOKEN not in repr(client)
        assert "***redacted***" in str(client)

    def test_auth_headers(self) -> None:
        """Test the four headers attached to every Habitica request."""
        client = HabiticaClient(make_config())

        headers = get_auth_headers(client)

        assert headers == {
            "x-api-user": TEST_USER_ID,
            "x-api-key": "test_api_token_123",
            "x-client": f"{TEST_USER_ID}-MCP-Server",
            "Content-Type": "application/json",
        }

    def test_redacted_headers_hide_token(self) -> None:
        """Test that headers prepared for logging mask the API token."""
        client = HabiticaClient(make_config(habitica_api_token=SECRET_API_TOKEN))

        headers = get_redacted_headers(client)

        assert headers["x-api-key"] == "***redacted***"
        assert headers["x-api-user"] == TEST_USER_ID

    @pytest.mark.asyncio
    async def test_http_client_created_lazily_and_closed(self) -> None:
        """Test that the httpx client is built on demand and released by aclose()."""
        client = HabiticaClient(make_config(timeout_connect=2.0, timeout_read=15.0))
        assert get_client_http_client(client) is None

        http_client = get_http_client(client)

        assert get_http_client(client) is http_client
        assert http_client.timeout.connect == 2.0  # noqa: PLR2004
        assert http_client.timeout.read == 15.0  # noqa: PLR2004
        assert http_client.headers["User-Agent"].startswith("habitica-mcp/")

        await client.aclose()
        assert get_client_http_client(client) is None

    @pytest.mark.asyncio
    async def test_async_context_manager_closes_client(self) -> None:
        """Test that leaving the context manager closes the HTTP client."""
        client = HabiticaClient(make_config())
        async with client:
            get_http_client(client)
        assert get_client_http_client(client) is None


class TestHabiticaClientRequests:
    """Test make_request success paths."""

    @pytest.mark.asyncio
    async def test_make_request_success(self, mocker: MockerFixture) -> None:
        """Test a successful request returns the parsed JSON body."""
        client = HabiticaClient(make_config())
        http = mock_http_client(
            mocker, client, make_response(HTTP_OK, {"success": True, "data": {"id": "u"}})
        )

        result = await client.make_request("get", "/user", params={"a": "b"})

        assert result == {"success": True, "data": {"id": "u"}}
        http.request.assert_awaited_once()
        kwargs = http.request.call_args.kwargs
        assert kwargs["method"] == "GET"
        assert kwargs["url"] == f"{DEFAULT_BASE}/user"
        assert kwargs["params"] == {"a": "b"}
        assert kwargs["json"] is None
        assert kwargs["headers"]["x-api-user"] == TEST_USER_ID

    @pytest.mark.asyncio
    async def test_make_request_sends_json_body(self, mocker: MockerFixture) -> None:
        """Test that request data is sent as JSON."""
        client = HabiticaClient(make_config())
        http = mock_http_client(
            mocker, client, make_response(HTTP_OK, {"success": True}, method="POST", path="tags")
        )

        await client.make_request("POST", "tags", data={"name": "Health"})

        assert http.request.call_args.kwargs["json"] == {"name": "Health"}

    @pytest.mark.asyncio
    async def test_make_request_no_content(self, mocker: MockerFixture) -> None:
        """Test that 204 No Content yields an empty mapping."""
        client = HabiticaClient(make_config())
        mock_http_client(mocker, client, make_response(HTTP_NO_CONTENT, method="DELETE"))

        assert await client.make_request("DELETE", "tasks/t1") == {}

    @pytest.mark.asyncio
    async def test_make_request_non_json_body(self, mocker: MockerFixture) -> None:
        """Test that a 200 response with a non-JSON body is reported as malformed."""
        client = HabiticaClient(make_config())
        mock_http_client(mocker, client, make_response(HTTP_OK, content=b"<html>oops</html>"))

        with pytest.raises(HabiticaMalformedResponseError):
            await client.make_request("GET", "user")


class TestHabiticaClientErrorMapping:
    """Test that HTTP failures map onto the Habitica exception hierarchy."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status_code", "expected"),
        [
            (HTTP_BAD_REQUEST, HabiticaBadRequestError),
            (HTTP_UNAUTHORIZED, HabiticaAuthenticationError),
            (HTTP_NOT_FOUND, HabiticaNotFoundError),
            (HTTP_TOO_MANY_REQUESTS, HabiticaRateLimitError),
            (HTTP_INTERNAL_SERVER_ERROR, HabiticaServerError),
            (HTTP_BAD_GATEWAY, HabiticaServerError),
        ],
    )
    async def test_status_mapping_keeps_remote_message(
        self,
        mocker: MockerFixture,
        status_code: int,
        expected: type[HabiticaAPIError],
    ) -> None:
        """Test status-specific exceptions carry Habitica's error message."""
        client = HabiticaClient(make_config())
        mock_http_client(
            mocker, client, make_response(status_code, error_body("Task not found."))
        )

        with pytest.raises(expected) as exc_info:
            await client.make_request("GET", "tasks/missing")

        assert exc_info.value.status_code == status_code
        assert exc_info.value.remote_message == "Task not found."

    @pytest.mark.asyncio
    async def test_other_status_maps_to_base_error(self, mocker: MockerFixture) -> None:
        """Test that unlisted 4xx codes raise the base error with the status code."""
        client = HabiticaClient(make_config())
        mock_http_client(mocker, client, make_response(409, error_body("Conflict here")))

        with pytest.raises(HabiticaAPIError) as exc_info:
            await client.make_request("POST", "user/buy/x")

        assert type(exc_info.value) is HabiticaAPIError
        assert str(exc_info.value) == "Habitica API error (409)"
        assert exc_info.value.remote_message == "Conflict here"

    @pytest.mark.asyncio
    async def test_error_without_json_body(self, mocker: MockerFixture) -> None:
        """Test that an error page without JSON leaves remote_message unset."""
        client = HabiticaClient(make_config())
        mock_http_client(
            mocker, client, make_response(HTTP_INTERNAL_SERVER_ERROR, content=b"Bad things")
        )

        with pytest.raises(HabiticaServerError) as exc_info:
            await client.make_request("GET", "user")

        assert exc_info.value.remote_message is None
        assert str(exc_info.value) == "Habitica server error (500)"

    @pytest.mark.asyncio
    async def test_timeout(self, mocker: MockerFixture) -> None:
        """Test that httpx timeouts become HabiticaTimeoutError."""
        client = HabiticaClient(make_config())
        mock_http_client(mocker, client, httpx.ReadTimeout("timed out"))

        with pytest.raises(HabiticaTimeoutError, match="Request timeout"):
            await client.make_request("GET", "user")

    @pytest.mark.asyncio
    async def test_network_error(self, mocker: MockerFixture) -> None:
        """Test that connection failures become HabiticaNetworkError."""
        client = HabiticaClient(make_config())
        mock_http_client(mocker, client, httpx.ConnectError("refused"))

        with pytest.raises(HabiticaNetworkError):
            await client.make_request("GET", "user")

    @pytest.mark.asyncio
    async def test_unexpected_error(self, mocker: MockerFixture) -> None:
        """Test that other failures are wrapped with safe request context."""
        client = HabiticaClient(make_config())
        mock_http_client(mocker, client, RuntimeError("boom"))

        with pytest.raises(HabiticaAPIError, match="method=GET, endpoint=user"):
            await client.make_request("GET", "user")

    @pytest.mark.asyncio
    async def test_error_messages_never_contain_token(self, mocker: MockerFixture) -> None:
        """Test that the API token does not leak through raised errors."""
        client = HabiticaClient(make_config(habitica_api_token=SECRET_API_TOKEN))
        mock_http_client(mocker, client, make_response(HTTP_UNAUTHORIZED, error_body("nope")))

        with pytest.raises(HabiticaAuthenticationError) as exc_info:
            await client.make_request("GET", "user")

        assert SECRET_API_TOKEN not in str(exc_info.value)


class TestHabiticaClientConnectivity:
    """Test the startup connectivity check."""

    @pytest.mark.asyncio
    async def test_connectivity_up(self, mocker: MockerFixture) -> None:
        client = HabiticaClient(make_config())
        http = mock_http_client(
            mocker,
            client,
            make_response(HTTP_OK, {"success": True, "data": {"status": "up"}}, path="status"),
        )

        assert await client.test_connectivity() is True
        assert http.request.call_args.kwargs["url"] == f"{DEFAULT_BASE}/status"

    @pytest.mark.asyncio
    async def test_connectivity_down(self, mocker: MockerFixture) -> None:
        client = HabiticaClient(make_config())
        mock_http_client(
            mocker,
            client,
            make_response(HTTP_OK, {"success": True, "data": {"status": "down"}}, path="status"),
        )

        assert await client.test_connectivity() is False

    @pytest.mark.asyncio
    async def test_connectivity_error(self, mocker: MockerFixture) -> None:
        client = HabiticaClient(make_config())
        mock_http_client(mocker, client, httpx.ConnectError("refused"))

        assert await client.test_connectivity() is False


class TestHelpers:
    """Test the module-level helpers and envelope utilities."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("abc-123", "abc-123"), ("a/b", "a%2Fb"), ("a b?c", "a%20b%3Fc"), (5, "5")],
    )
    def test_path_segment(self, raw: object, expected: str) -> None:
        assert path_segment(raw) == expected

    def test_extract_remote_message(self) -> None:
        assert extract_remote_message(make_response(HTTP_NOT_FOUND, error_body("X"))) == "X"
        assert extract_remote_message(make_response(HTTP_NOT_FOUND, {"message": ""})) is None
        assert extract_remote_message(make_response(HTTP_NOT_FOUND, ["X"])) is None
        assert extract_remote_message(make_response(HTTP_NOT_FOUND, content=b"nope")) is None

    def test_unwrap_data(self) -> None:
        assert BaseClient.unwrap_data({"success": True, "data": [1]}, "tags") == [1]
        with pytest.raises(HabiticaMalformedResponseError, match="missing=data"):
            BaseClient.unwrap_data({"success": True}, "tags")
        with pytest.raises(HabiticaMalformedResponseError):
            BaseClient.unwrap_data([], "tags")

    def test_require_mapping(self) -> None:
        assert BaseClient.require_mapping({"a": 1}, "user", "data") == {"a": 1}
        with pytest.raises(HabiticaMalformedResponseError, match="endpoint=user, missing=stats"):
            BaseClient.require_mapping(None, "user", "stats")
