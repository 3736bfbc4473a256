"""Base GitLab client mixin with HTTP primitives."""

import logging
import os
import platform
from typing import Any
from urllib.parse import quote

import httpx
from dotenv import load_dotenv

from gitlab_api._version import __version__
from gitlab_api.errors import APIError, AuthenticationError, ConfigurationError, TransportError
from gitlab_api.http import AuthMethod, Credentials, Request, Single, TokenType
from gitlab_api.models import Version

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

API_NAMESPACE = "/api/v4"
PARAM_SUDO = "sudo"
DEFAULT_TIMEOUT = 30.0


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() not in ("0", "false", "no", "off")


class BaseClientMixin:
    """Base mixin providing configuration, transport and request factories."""

    base_url: str
    api_url: str
    credentials: Credentials
    client: httpx.Client

    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        token_type: TokenType = TokenType.PRIVATE_TOKEN,
        auth_method: AuthMethod = AuthMethod.HEADER,
        timeout: float | None = None,
        verify: bool | None = None,
        proxy: str | None = None,
        user_agent: str | None = None,
        validate: bool = True,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize GitLab API client.

        Args:
            token: GitLab token (falls back to GITLAB_TOKEN)
            base_url: GitLab instance URL (falls back to GITLAB_BASE_URL, GITLAB_URL, then gitlab.com)
            token_type: Kind of token, selects the header or parameter name
            auth_method: Send the token as a header or as a query parameter
            timeout: Per-request timeout in seconds (falls back to GITLAB_TIMEOUT, then 30s)
            verify: Verify TLS certificates (falls back to GITLAB_VERIFY_SSL, then True)
            proxy: Proxy URL passed unchanged to httpx
            user_agent: User-Agent header value
            validate: Whether to validate configuration and test connectivity on init
            transport: Custom httpx transport, mostly for tests
        """
        token = token or os.getenv("GITLAB_TOKEN")
        self.base_url = (
            base_url or os.getenv("GITLAB_BASE_URL") or os.getenv("GITLAB_URL") or "https://gitlab.com"
        ).rstrip("/")
        self.credentials = Credentials(token=token, token_type=token_type, auth_method=auth_method)

        self._validate_configuration()

        if timeout is None:
            timeout = float(os.getenv("GITLAB_TIMEOUT") or DEFAULT_TIMEOUT)
        if verify is None:
            verify = _env_bool("GITLAB_VERIFY_SSL", True)

        self.api_url = f"{self.base_url}{API_NAMESPACE}"
        self.user_agent = user_agent or f"gitlab-api-client/{__version__} python/{platform.python_version()}"
        # No default Content-Type: form and multipart bodies set their own
        self.client = httpx.Client(
            base_url=self.api_url,
            headers={"User-Agent": self.user_agent},
            timeout=timeout,
            verify=verify,
            proxy=proxy,
            transport=transport,
        )

        if validate:
            self._test_connectivity()
        else:
            logger.info(f"GitLab client initialized for {self.base_url} (validation skipped)")

    @property
    def token(self) -> str | None:
        return self.credentials.token

    def _validate_configuration(self) -> None:
        """Validate token and URL configuration."""
        if not self.credentials.token:
            logger.error("GITLAB_TOKEN not set in environment variables")
            raise ConfigurationError(
                "GITLAB_TOKEN environment variable is required. Set it in your .env file or environment."
            )

        if not self.base_url.startswith(("http://", "https://")):
            logger.error(f"Invalid GITLAB_URL: {self.base_url}")
            raise ConfigurationError(f"GITLAB_URL must start with http:// or https://, got: {self.base_url}")

    def _test_connectivity(self) -> None:
        """Test connectivity to GitLab instance."""
        try:
            version_info = self.get_version()
            logger.info(f"Connected to GitLab {version_info.version} at {self.base_url}")
        except APIError as e:
            if e.status_code == 401:
                logger.error("GitLab authentication failed - check your GITLAB_TOKEN")
                raise AuthenticationError(e.status_code, e.body, e.method, e.url) from e
            logger.error(f"GitLab API returned error: {e.status_code}")
            raise
        except TransportError as e:
            logger.error(f"Failed to connect to GitLab at {self.base_url}: {e}")
            raise ConfigurationError(f"Cannot connect to GitLab at {self.base_url}. Check your GITLAB_URL.") from e

    def retrieve(self) -> Request:
        """Start a read (GET) request carrying this client's credentials."""
        return Request(client=self.client, credentials=self.credentials)

    def dispatch(self) -> Request:
        """Start a mutating (POST) request carrying this client's credentials."""
        return self.retrieve().method("POST")

    def get_api_url(self, tail_api_url: str) -> str:
        """Absolute URL of an API path."""
        if not tail_api_url.startswith("/"):
            tail_api_url = f"/{tail_api_url}"
        return f"{self.api_url}{tail_api_url}"

    def get_url(self, tail_url: str) -> str:
        """Absolute URL of a non-API path on the instance."""
        if not tail_url.startswith("/"):
            tail_url = f"/{tail_url}"
        return f"{self.base_url}{tail_url}"

    @staticmethod
    def _encode_project_id(project_id: str | int) -> str:
        """Encode project ID or path for use as a URL path segment."""
        if isinstance(project_id, bool) or not isinstance(project_id, (str, int)):
            raise ConfigurationError(f"project_id must be a str or int, got {type(project_id).__name__}")
        return quote(str(project_id), safe="")

    def _project_url(self, project_id: str | int) -> str:
        return f"/projects/{self._encode_project_id(project_id)}"

    @staticmethod
    def _encode_path(path: str) -> str:
        """Encode a file path, branch or tag name as a single path segment."""
        return quote(path, safe="")

    def get_version(self) -> Version:
        """Get the GitLab version of the instance."""
        return self.retrieve().to("/version", Single(Version))

    def close(self) -> None:
        """Release the underlying HTTP connections."""
        self.client.close()

    def __enter__(self) -> Any:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
