"""Response shapes: how a response body is turned into a return value.

Callers pick one of a closed set of variants explicitly:

- ``Discard()``: only the status matters, the body is dropped
- ``Raw()``: the body bytes, untouched
- ``Single(Model)``: one JSON object validated into ``Model``
- ``Collection(Model)``: a JSON array validated into ``list[Model]``
"""

from dataclasses import dataclass
from functools import cached_property
from typing import Any, Generic, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from gitlab_api.errors import MAX_ERROR_DETAIL_LENGTH, DecodeError

T = TypeVar("T")


def _validate(adapter: TypeAdapter[Any], response: httpx.Response, target: str) -> Any:
    body = response.content
    try:
        return adapter.validate_json(body)
    except ValidationError as e:
        preview = body[:MAX_ERROR_DETAIL_LENGTH].decode("utf-8", errors="replace")
        raise DecodeError(f"Could not decode response as {target}: {e.error_count()} error(s); body: {preview}", body) from e


@dataclass(frozen=True)
class Discard:
    """Ignore the response body."""

    def decode(self, response: httpx.Response) -> None:
        return None


@dataclass(frozen=True)
class Raw:
    """Return the response body bytes as-is."""

    def decode(self, response: httpx.Response) -> bytes:
        return response.content


@dataclass(frozen=True)
class Single(Generic[T]):
    """Decode a JSON object into ``model``."""

    model: type[T]

    def describe(self) -> str:
        return getattr(self.model, "__name__", repr(self.model))

    @cached_property
    def adapter(self) -> TypeAdapter[T]:
        return TypeAdapter(self.model)

    def decode(self, response: httpx.Response) -> T:
        return _validate(self.adapter, response, self.describe())


@dataclass(frozen=True)
class Collection(Generic[T]):
    """Decode a JSON array into ``list[model]``; the only shape that can be paginated."""

    model: type[T]

    def describe(self) -> str:
        return f"list[{getattr(self.model, '__name__', repr(self.model))}]"

    @cached_property
    def adapter(self) -> TypeAdapter[list[T]]:
        return TypeAdapter(list[self.model])  # type: ignore[name-defined]

    def decode(self, response: httpx.Response) -> list[T]:
        return _validate(self.adapter, response, self.describe())


Shape = Discard | Raw | Single[Any] | Collection[Any]
