"""Exception hierarchy for gitlab-api-client."""

# Maximum length for response bodies quoted in error messages
MAX_ERROR_DETAIL_LENGTH = 500


class GitLabError(Exception):
    """Base class for every error raised by the client."""


class ConfigurationError(GitLabError, ValueError):
    """Client configuration or call arguments are invalid."""


class TransportError(GitLabError):
    """The HTTP round trip itself failed (connection, TLS, timeout)."""

    def __init__(self, message: str, method: str, url: str):
        super().__init__(message)
        self.method = method
        self.url = url


class APIError(GitLabError):
    """GitLab answered with a non-success status code.

    Attributes:
        status_code: HTTP status returned by GitLab
        body: Raw response body, kept for upstream error-message extraction
        method: HTTP verb of the failed request
        url: Request URL with any token parameter removed
    """

    def __init__(self, status_code: int, body: str, method: str = "", url: str = ""):
        detail = body[:MAX_ERROR_DETAIL_LENGTH] if body else "No error details"
        super().__init__(f"{method} {url} failed with {status_code}: {detail}".strip())
        self.status_code = status_code
        self.body = body
        self.method = method
        self.url = url


class AuthenticationError(APIError):
    """The configured token was rejected."""


class NotFoundError(APIError):
    """An entity expected to exist was not returned."""

    def __init__(self, message: str, method: str = "", url: str = ""):
        super().__init__(404, message, method, url)


class DecodeError(GitLabError):
    """A successful response body did not match the requested shape."""

    def __init__(self, message: str, body: bytes = b""):
        super().__init__(message)
        self.body = body
