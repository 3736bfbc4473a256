"""CI/CD variables client mixin."""

import logging

from gitlab_api.client.base import BaseClientMixin
from gitlab_api.http import MAX_PER_PAGE_QUERY, Collection, Discard, Single
from gitlab_api.models import BuildVariable

logger = logging.getLogger(__name__)


class VariablesMixin(BaseClientMixin):
    """Mixin for CI/CD variable operations."""

    def _variables_url(self, project_id: str | int) -> str:
        return f"{self._project_url(project_id)}/variables"

    def get_build_variables(self, project_id: str | int) -> list[BuildVariable]:
        """List all CI/CD variables for a project."""
        logger.debug(f"Listing CI/CD variables for project {project_id}")
        return self.retrieve().get_all(self._variables_url(project_id) + MAX_PER_PAGE_QUERY, Collection(BuildVariable))

    def get_build_variable(self, project_id: str | int, key: str) -> BuildVariable:
        """Get a specific CI/CD variable for a project.

        Args:
            project_id: Project ID or path
            key: Variable key/name

        Returns:
            Variable data, including its value

        Raises:
            APIError: If the variable does not exist (status 404) or the request fails
        """
        logger.debug(f"Getting CI/CD variable '{key}' from project {project_id}")
        # URL encode the key to handle special characters
        url = f"{self._variables_url(project_id)}/{self._encode_path(key)}"
        return self.retrieve().to(url, Single(BuildVariable))

    def create_build_variable(
        self,
        project_id: str | int,
        key: str,
        value: str,
        variable_type: str | None = None,
        protected: bool | None = None,
        masked: bool | None = None,
        environment_scope: str | None = None,
    ) -> BuildVariable:
        """Create a new CI/CD variable for a project.

        Args:
            project_id: Project ID or path
            key: Variable key/name
            value: Variable value
            variable_type: Type of variable ("env_var" or "file")
            protected: Whether variable is only available in protected branches
            masked: Whether variable is hidden in job logs
            environment_scope: Environment scope (e.g., "*", "production", "staging")

        Returns:
            Created variable
        """
        logger.info(f"Creating CI/CD variable '{key}' in project {project_id}")
        return (
            self.dispatch()
            .with_field("key", key)
            .with_field("value", value)
            .with_field("variable_type", variable_type)
            .with_field("protected", protected)
            .with_field("masked", masked)
            .with_field("environment_scope", environment_scope)
            .to(self._variables_url(project_id), Single(BuildVariable))
        )

    def update_build_variable(
        self,
        project_id: str | int,
        key: str,
        value: str,
        protected: bool | None = None,
        masked: bool | None = None,
    ) -> BuildVariable:
        logger.info(f"Updating CI/CD variable '{key}' in project {project_id}")
        return (
            self.retrieve()
            .method("PUT")
            .with_field("value", value)
            .with_field("protected", protected)
            .with_field("masked", masked)
            .to(f"{self._variables_url(project_id)}/{self._encode_path(key)}", Single(BuildVariable))
        )

    def delete_build_variable(self, project_id: str | int, key: str) -> None:
        logger.info(f"Deleting CI/CD variable '{key}' from project {project_id}")
        url = f"{self._variables_url(project_id)}/{self._encode_path(key)}"
        self.retrieve().method("DELETE").to(url, Discard())
