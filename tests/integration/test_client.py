"""Integration tests for GitLabClient.

These tests require a valid GITLAB_TOKEN environment variable
and will make real API calls to GitLab.
"""

import pytest

from gitlab_api import Collection, GitLabClient
from gitlab_api.models import Project


@pytest.mark.integration
class TestGitLabClientIntegration:
    """Integration tests for GitLabClient."""

    def test_client_initialization(self, skip_without_token: None, gitlab_token: str, gitlab_url: str) -> None:
        """Test that client can connect to GitLab."""
        # Should not raise
        with GitLabClient(token=gitlab_token, base_url=gitlab_url, validate=True) as client:
            assert client.token == gitlab_token

    def test_get_version(self, skip_without_token: None, gitlab_token: str, gitlab_url: str) -> None:
        with GitLabClient(token=gitlab_token, base_url=gitlab_url, validate=False) as client:
            version_info = client.get_version()
        assert isinstance(version_info.version, str)

    def test_get_current_user(self, skip_without_token: None, gitlab_token: str, gitlab_url: str) -> None:
        with GitLabClient(token=gitlab_token, base_url=gitlab_url, validate=False) as client:
            user = client.get_user()
        assert user.username

    def test_owned_projects_walk_pages(self, skip_without_token: None, gitlab_token: str, gitlab_url: str) -> None:
        """Walking small pages yields the same projects as one large page."""
        with GitLabClient(token=gitlab_token, base_url=gitlab_url, validate=False) as client:
            walked = client.retrieve().get_all("/projects?owned=true&per_page=2", Collection(Project))
            projects = client.get_owned_projects()
        assert sorted(p.id for p in walked) == sorted(p.id for p in projects)
