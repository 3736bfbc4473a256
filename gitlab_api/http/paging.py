"""Page-walking engine for GitLab list endpoints."""

import logging
from typing import TYPE_CHECKING, TypeVar
from urllib.parse import parse_qsl

from gitlab_api.errors import ConfigurationError
from gitlab_api.http.pagination import MAX_ITEMS_PER_PAGE, PARAM_PAGE, PARAM_PER_PAGE
from gitlab_api.http.query import Query
from gitlab_api.http.shapes import Collection

if TYPE_CHECKING:
    from gitlab_api.http.requestor import Request

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _split(path: str) -> tuple[str, list[tuple[str, str]]]:
    base, _, query_string = path.partition("?")
    return base, parse_qsl(query_string, keep_blank_values=True)


def _with_page(base: str, params: list[tuple[str, str]], page: int) -> str:
    query = Query()
    for key, value in params:
        query.append(key, str(page) if key == PARAM_PAGE else value)
    if not any(key == PARAM_PAGE for key, _ in params):
        query.append(PARAM_PAGE, page)
    return base + query.render()


def fetch_all(request: "Request", path: str, shape: Collection[T]) -> list[T]:
    """Fetch every page of ``path`` and return the items in server order.

    Pages are requested one after another starting from the ``page`` already
    in ``path`` (or 1). The walk stops after an empty page or after a page
    holding fewer than ``per_page`` items. If ``path`` carries no ``per_page``
    the maximum page size is requested so the short-page rule has a known
    reference. Any failure propagates and the items gathered so far are
    dropped.

    Args:
        request: Configured request used for every page
        path: API path, optionally carrying ``page`` and ``per_page``
        shape: Collection shape the pages are decoded with

    Returns:
        Concatenation of all pages

    Raises:
        ConfigurationError: If ``page`` or ``per_page`` in ``path`` is not a valid number
    """
    if not isinstance(shape, Collection):
        raise TypeError(f"Pagination requires a Collection shape, got {type(shape).__name__}")

    base, params = _split(path)
    values = dict(params)
    if PARAM_PER_PAGE not in values:
        params.append((PARAM_PER_PAGE, str(MAX_ITEMS_PER_PAGE)))
        values[PARAM_PER_PAGE] = str(MAX_ITEMS_PER_PAGE)
    # GitLab truncates oversized pages, so compare against what it will actually send
    try:
        per_page = max(1, min(int(values[PARAM_PER_PAGE]), MAX_ITEMS_PER_PAGE))
        page = int(values.get(PARAM_PAGE, 1))
    except ValueError as e:
        raise ConfigurationError(f"Non-numeric page or per_page in {base}: {e}") from e
    if page < 1:
        raise ConfigurationError(f"page must be >= 1, got {page}")

    results: list[T] = []
    pages_fetched = 0
    while True:
        logger.debug(f"Fetching {base} page {page} (per_page={per_page})")
        items = request.to(_with_page(base, params, page), shape)
        pages_fetched += 1
        results.extend(items)

        if len(items) < per_page:
            break
        page += 1

    logger.debug(f"Fetched {len(results)} results from {pages_fetched} pages for {base}")
    return results
