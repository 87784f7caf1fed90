"""Custom exceptions for Habitica API operations.

This module defines the exception hierarchy for Habitica API errors,
ensuring proper error handling and secure logging. Every error may carry the
``message`` field Habitica returns in its error envelope, which takes priority
over the generic message when the error is reported to a tool caller.
"""


class HabiticaAPIError(Exception):
    """Base exception for all Habitica API errors.

    This exception ensures that API tokens are never exposed
    in error messages or logs.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        remote_message: str | None = None,
    ) -> None:
        """Initialize Habitica API error.

        Args:
            message: Error message (must not contain the API token)
            status_code: HTTP status code if applicable
            remote_message: Message taken from the Habitica error body, if any
        """
        self.status_code = status_code
        self.remote_message = remote_message
        super().__init__(message)

    @classmethod
    def create_unexpected_error(cls, method: str, endpoint: str) -> "HabiticaAPIError":
        """Create an error for unexpected API errors with safe context.

        Args:
            method: HTTP method used
            endpoint: API endpoint called

        Returns:
            HabiticaAPIError with contextual message
        """
        safe_context = f"method={method}, endpoint={endpoint}, status_unknown"
        return cls(f"Unexpected API error ({safe_context})")


class HabiticaBadRequestError(HabiticaAPIError):
    """Raised when request parameters are invalid (400 Bad Request)."""

    def __init__(
        self,
        message: str = "Bad request - invalid parameters",
        remote_message: str | None = None,
    ) -> None:
        super().__init__(message, status_code=400, remote_message=remote_message)


class HabiticaAuthenticationError(HabiticaAPIError):
    """Raised when the user ID / API token pair is rejected (401 Unauthorized)."""

    def __init__(
        self,
        message: str = "Authentication failed",
        remote_message: str | None = None,
    ) -> None:
        super().__init__(message, status_code=401, remote_message=remote_message)


class HabiticaNotFoundError(HabiticaAPIError):
    """Raised when a resource is not found (404 Not Found)."""

    def __init__(
        self,
        message: str = "Resource not found",
        remote_message: str | None = None,
    ) -> None:
        super().__init__(message, status_code=404, remote_message=remote_message)


class HabiticaRateLimitError(HabiticaAPIError):
    """Raised when Habitica throttles the caller (429 Too Many Requests)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        remote_message: str | None = None,
    ) -> None:
        super().__init__(message, status_code=429, remote_message=remote_message)


class HabiticaServerError(HabiticaAPIError):
    """Raised when server returns 5xx errors."""

    def __init__(
        self,
        message: str = "Habitica server error",
        status_code: int = 500,
        remote_message: str | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code, remote_message=remote_message)


class HabiticaNetworkError(HabiticaAPIError):
    """Raised when network operations fail."""

    def __init__(self, message: str = "Network error occurred") -> None:
        super().__init__(message, status_code=None)


class HabiticaTimeoutError(HabiticaAPIError):
    """Raised when a request exceeds the configured connect or read timeout."""

    def __init__(self, message: str = "Request timeout") -> None:
        super().__init__(message, status_code=None)


class HabiticaMalformedResponseError(HabiticaAPIError):
    """Raised when a successful response does not have the expected shape."""

    def __init__(self, message: str = "Malformed response from Habitica API") -> None:
        super().__init__(message, status_code=None)

    @classmethod
    def missing_field(cls, endpoint: str, field: str) -> "HabiticaMalformedResponseError":
        """Create an error for a response lacking a required field.

        Args:
            endpoint: API endpoint that was called
            field: Name of the absent field

        Returns:
            HabiticaMalformedResponseError with contextual message
        """
        return cls(f"Malformed response from Habitica API (endpoint={endpoint}, missing={field})")
