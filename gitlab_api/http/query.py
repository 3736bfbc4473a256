"""Ordered query-parameter builder."""

import datetime
import enum
from collections.abc import Iterator
from typing import Any
from urllib.parse import quote


def to_wire(value: Any) -> str:
    """Convert a parameter value to the string GitLab expects."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return str(value.value)
    if isinstance(value, datetime.datetime):
        return value.isoformat()
    if isinstance(value, datetime.date):
        return value.strftime("%Y-%m-%d")
    return str(value)


class Query:
    """Ordered multiset of key/value parameters.

    Values are stored raw and percent-encoded only when rendered, so the
    same key may appear several times and insertion order is preserved.
    """

    def __init__(self) -> None:
        self._params: list[tuple[str, str]] = []

    def append(self, key: str, value: Any) -> "Query":
        """Add a parameter unconditionally."""
        self._params.append((key, to_wire(value)))
        return self

    def append_if(self, key: str, value: Any) -> "Query":
        """Add a parameter unless the value is absent.

        ``None`` means "omit"; ``False``, ``0`` and ``""`` are real values and
        are sent.
        """
        if value is not None:
            self.append(key, value)
        return self

    def merge_with(self, other: "Query") -> "Query":
        """Append every pair of ``other`` after the current ones."""
        self._params.extend(other.items())
        return self

    def items(self) -> list[tuple[str, str]]:
        return list(self._params)

    def render(self) -> str:
        """Render as ``?k=v&k=v``, or an empty string when there are no pairs."""
        if not self._params:
            return ""
        return "?" + "&".join(f"{key}={quote(value, safe='')}" for key, value in self._params)

    def __str__(self) -> str:
        return self.render()

    def __len__(self) -> int:
        return len(self._params)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self.items())

    def __repr__(self) -> str:
        return f"Query({self._params!r})"
