"""Shared test fixtures for gitlab-api-client tests."""

import os
from collections.abc import Callable, Generator, Iterable
from typing import Any
from unittest.mock import patch

import httpx
import pytest

from gitlab_api import GitLabClient


class RecordingHandler:
    """httpx.MockTransport handler that replays canned responses and records requests."""

    def __init__(self, responses: Iterable[httpx.Response | Exception]):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def mock_env_vars() -> Generator[dict[str, str], None, None]:
    """Set up test environment variables."""
    env = {
        "GITLAB_TOKEN": "test-token-12345",
        "GITLAB_URL": "https://gitlab.example.com",
    }
    with patch.dict(os.environ, env, clear=False):
        os.environ.pop("GITLAB_BASE_URL", None)
        yield env


@pytest.fixture
def make_client(mock_env_vars: dict[str, str]) -> Callable[..., tuple[GitLabClient, RecordingHandler]]:
    """Build a client whose transport replays the given responses."""

    def factory(*responses: httpx.Response | Exception, **kwargs: Any) -> tuple[GitLabClient, RecordingHandler]:
        handler = RecordingHandler(responses)
        client = GitLabClient(validate=False, transport=httpx.MockTransport(handler), **kwargs)
        return client, handler

    return factory


@pytest.fixture
def sample_project() -> dict:
    """Sample GitLab project response."""
    return {
        "id": 123,
        "name": "test-project",
        "path": "test-project",
        "path_with_namespace": "group/test-project",
        "web_url": "https://gitlab.example.com/group/test-project",
        "default_branch": "main",
        "description": "A test project",
        "visibility": "private",
        "squash_option": "default_on",
    }


@pytest.fixture
def sample_merge_request() -> dict:
    """Sample GitLab merge request response."""
    return {
        "id": 456,
        "iid": 1,
        "project_id": 123,
        "title": "Add new feature",
        "description": "This MR adds a new feature",
        "state": "opened",
        "source_branch": "feature-branch",
        "target_branch": "main",
        "author": {"id": 1, "username": "testuser", "name": "Test User"},
        "web_url": "https://gitlab.example.com/group/test-project/-/merge_requests/1",
        "draft": False,
        "merge_status": "can_be_merged",
        "has_conflicts": False,
    }


@pytest.fixture
def sample_issue() -> dict:
    """Sample GitLab issue response."""
    return {
        "id": 999,
        "iid": 42,
        "project_id": 123,
        "title": "Bug in login",
        "description": "Users cannot log in",
        "state": "opened",
        "author": {"id": 1, "username": "testuser", "name": "Test User"},
        "web_url": "https://gitlab.example.com/group/test-project/-/issues/42",
        "labels": ["bug"],
        "created_at": "2024-01-15T10:00:00Z",
    }


@pytest.fixture
def sample_note() -> dict:
    """Sample GitLab note/comment response."""
    return {
        "id": 2001,
        "type": "DiscussionNote",
        "body": "Closing this MR",
        "author": {"id": 1, "username": "testuser", "name": "Test User"},
        "created_at": "2024-01-15T10:00:00Z",
        "updated_at": "2024-01-15T10:00:00Z",
        "system": False,
        "noteable_id": 456,
        "noteable_type": "MergeRequest",
        "noteable_iid": 1,
    }


# Integration test fixtures


@pytest.fixture
def gitlab_token() -> str | None:
    """Get GitLab token from environment for integration tests."""
    return os.getenv("GITLAB_TOKEN")


@pytest.fixture
def gitlab_url() -> str:
    """Get GitLab URL from environment for integration tests."""
    return os.getenv("GITLAB_URL", "https://gitlab.com")


@pytest.fixture
def skip_without_token(gitlab_token: str | None) -> None:
    """Skip test if GITLAB_TOKEN is not set."""
    if not gitlab_token:
        pytest.skip("GITLAB_TOKEN not set - skipping integration test")
