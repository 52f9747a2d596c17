"""reposcope exception classes."""



class RepoScopeError(Exception):
    """Base exception for all reposcope errors."""

    def __init__(
        self, code: str, message: str, request_id: str | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(f"[{code}] {message}")


class ConfigurationError(RepoScopeError):
    """Raised when client configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class ValidationError(RepoScopeError):
    """Raised on invalid filter values or a 422 from the search endpoint."""

    pass


class TransportError(RepoScopeError):
    """Raised when the search endpoint could not be reached."""

    pass


class HTTPStatusError(RepoScopeError):
    """Raised on a non-success status without a more specific class."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)
        self.status_code = status_code


class NotFoundError(RepoScopeError):
    """Raised when the endpoint is not found."""

    pass


class RateLimitedError(RepoScopeError):
    """Raised when the search rate limit is exhausted."""

    def __init__(
        self,
        code: str,
        message: str,
        retry_after: int,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)
        self.retry_after = retry_after


class ServerError(RepoScopeError):
    """Raised on server errors (5xx)."""

    pass


class MalformedResponseError(RepoScopeError):
    """Raised when a success response body is not a search payload."""

    def __init__(self, message: str, request_id: str | None = None) -> None:
        super().__init__("MALFORMED_RESPONSE", message, request_id)
