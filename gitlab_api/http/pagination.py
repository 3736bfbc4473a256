"""Page number and page size descriptor."""

from dataclasses import dataclass, replace

from gitlab_api.http.query import Query

PARAM_PAGE = "page"
PARAM_PER_PAGE = "per_page"

# GitLab silently truncates larger page sizes to this value
MAX_ITEMS_PER_PAGE = 100
# Page size GitLab applies when per_page is not sent
DEFAULT_ITEMS_PER_PAGE = 20


@dataclass(frozen=True)
class Pagination:
    """Page cursor for list endpoints.

    Both fields are optional; only the fields that are set end up in the
    rendered query.
    """

    page: int | None = None
    per_page: int | None = None

    def with_page(self, page: int) -> "Pagination":
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        return replace(self, page=page)

    def with_per_page(self, per_page: int) -> "Pagination":
        """Return a copy with ``per_page`` clamped to ``[1, MAX_ITEMS_PER_PAGE]``."""
        return replace(self, per_page=max(1, min(per_page, MAX_ITEMS_PER_PAGE)))

    def as_query(self) -> Query:
        return Query().append_if(PARAM_PAGE, self.page).append_if(PARAM_PER_PAGE, self.per_page)

    def __str__(self) -> str:
        return self.as_query().render()


# Query fragment used by listings that want everything in as few pages as possible
MAX_PER_PAGE_QUERY = str(Pagination().with_per_page(MAX_ITEMS_PER_PAGE))
