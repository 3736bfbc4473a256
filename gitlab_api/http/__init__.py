"""Request/response pipeline shared by every endpoint."""

from gitlab_api.http.auth import AuthMethod, Credentials, TokenType
from gitlab_api.http.pagination import DEFAULT_ITEMS_PER_PAGE, MAX_ITEMS_PER_PAGE, MAX_PER_PAGE_QUERY, Pagination
from gitlab_api.http.paging import fetch_all
from gitlab_api.http.query import Query
from gitlab_api.http.requestor import Attachment, Request
from gitlab_api.http.shapes import Collection, Discard, Raw, Shape, Single

__all__ = [
    "DEFAULT_ITEMS_PER_PAGE",
    "MAX_ITEMS_PER_PAGE",
    "MAX_PER_PAGE_QUERY",
    "Attachment",
    "AuthMethod",
    "Collection",
    "Credentials",
    "Discard",
    "Pagination",
    "Query",
    "Raw",
    "Request",
    "Shape",
    "Single",
    "TokenType",
    "fetch_all",
]
