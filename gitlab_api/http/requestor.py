"""Immutable request builder executing one GitLab API round trip."""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, TypeVar, overload

import httpx

from gitlab_api.errors import APIError, DecodeError, TransportError
from gitlab_api.http.auth import Credentials
from gitlab_api.http.paging import fetch_all
from gitlab_api.http.query import Query, to_wire
from gitlab_api.http.shapes import Collection, Discard, Raw, Shape, Single

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Attachment:
    """File sent as the multipart part ``name``."""

    name: str
    filename: str
    content: bytes = field(repr=False)


@dataclass(frozen=True, eq=False)
class Request:
    """Configuration of a single API call.

    Every builder method returns a new ``Request``; the terminal calls
    ``to()`` and ``get_all()`` leave it untouched, so a configured request
    can be reused safely.
    """

    client: httpx.Client = field(repr=False)
    credentials: Credentials
    verb: str = "GET"
    fields: tuple[tuple[str, str], ...] = ()
    attachment: Attachment | None = None

    def method(self, verb: str) -> "Request":
        return replace(self, verb=verb.upper())

    def with_field(self, key: str, value: Any) -> "Request":
        """Add a form field; ``None`` values are skipped."""
        if value is None:
            return self
        return replace(self, fields=self.fields + ((key, to_wire(value)),))

    def with_attachment(self, name: str, filename: str, content: bytes) -> "Request":
        """Attach a file, switching the body to multipart encoding."""
        return replace(self, attachment=Attachment(name, filename, content))

    def _form(self) -> dict[str, str | list[str]]:
        form: dict[str, list[str]] = {}
        for key, value in self.fields:
            form.setdefault(key, []).append(value)
        return {key: values[0] if len(values) == 1 else values for key, values in form.items()}

    def _build(self, path: str) -> tuple[str, str, dict[str, Any]]:
        """Return (request url, loggable url, httpx keyword arguments)."""
        url = path if path.startswith("/") else f"/{path}"
        kwargs: dict[str, Any] = {}

        if self.attachment is not None:
            kwargs["files"] = {self.attachment.name: (self.attachment.filename, self.attachment.content)}
            if self.fields:
                kwargs["data"] = self._form()
        elif self.fields:
            if self.verb == "GET":
                extra = Query()
                for key, value in self.fields:
                    extra.append(key, value)
                url = _join_query(url, extra)
            else:
                kwargs["data"] = self._form()

        log_url = url
        token_params = Query()
        for key, value in self.credentials.params().items():
            token_params.append(key, value)
        url = _join_query(url, token_params)

        headers = self.credentials.headers()
        if headers:
            kwargs["headers"] = headers
        return url, log_url, kwargs

    @overload
    def to(self, path: str, shape: Discard) -> None: ...

    @overload
    def to(self, path: str, shape: Raw) -> bytes: ...

    @overload
    def to(self, path: str, shape: Single[T]) -> T: ...

    @overload
    def to(self, path: str, shape: Collection[T]) -> list[T]: ...

    def to(self, path: str, shape: Shape) -> Any:
        """Execute exactly one HTTP call against ``path`` and decode it per ``shape``.

        Args:
            path: API path relative to the ``/api/v4`` namespace, including any
                rendered query string
            shape: How to turn the response body into a value

        Raises:
            TransportError: If the request could not be sent or answered
            APIError: If GitLab returned a non-2xx status
            DecodeError: If the body does not match ``shape``
        """
        url, log_url, kwargs = self._build(path)
        try:
            logger.debug(f"{self.verb} {log_url}")
            response = self.client.request(self.verb, url, **kwargs)
        except httpx.RequestError as e:
            logger.error(f"Network error for {self.verb} {log_url}: {e}")
            raise TransportError(f"{self.verb} {log_url} failed: {e}", self.verb, log_url) from e
        except Exception as e:
            logger.exception(f"Unexpected error for {self.verb} {log_url}: {type(e).__name__}")
            raise

        # httpx status errors embed the full request URL, so none is raised or chained here
        if not response.is_success:
            logger.error(f"GitLab API error for {self.verb} {log_url}: {response.status_code} - {response.text[:200]}")
            raise APIError(response.status_code, response.text, self.verb, log_url)

        try:
            return shape.decode(response)
        except DecodeError:
            logger.error(f"Unexpected response body for {self.verb} {log_url}")
            raise
        except Exception as e:
            logger.exception(f"Unexpected error decoding {self.verb} {log_url}: {type(e).__name__}")
            raise

    def get_all(self, path: str, shape: Collection[T]) -> list[T]:
        """Follow every page of a list endpoint and return the concatenated items."""
        return fetch_all(self, path, shape)


def _join_query(url: str, query: Query) -> str:
    rendered = query.render()
    if not rendered:
        return url
    if "?" in url:
        return f"{url}&{rendered[1:]}"
    return url + rendered
