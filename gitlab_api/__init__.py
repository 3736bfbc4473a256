"""Typed client for the GitLab REST API (v4)."""

from gitlab_api._version import __version__
from gitlab_api.client import GitLabClient
from gitlab_api.errors import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    DecodeError,
    GitLabError,
    NotFoundError,
    TransportError,
)
from gitlab_api.http import (
    MAX_ITEMS_PER_PAGE,
    AuthMethod,
    Collection,
    Credentials,
    Discard,
    Pagination,
    Query,
    Raw,
    Request,
    Single,
    TokenType,
)
from gitlab_api.models import AccessLevel, FileFromBase64, FileFromPath, FileSource, IssueAction, MergeRequestState

__all__ = [
    "MAX_ITEMS_PER_PAGE",
    "APIError",
    "AccessLevel",
    "AuthMethod",
    "AuthenticationError",
    "Collection",
    "ConfigurationError",
    "Credentials",
    "DecodeError",
    "Discard",
    "FileFromBase64",
    "FileFromPath",
    "FileSource",
    "GitLabClient",
    "GitLabError",
    "IssueAction",
    "MergeRequestState",
    "NotFoundError",
    "Pagination",
    "Query",
    "Raw",
    "Request",
    "Single",
    "TokenType",
    "TransportError",
    "__version__",
]
