"""CI job and pipeline trigger client mixin."""

import logging

from gitlab_api.client.base import BaseClientMixin
from gitlab_api.http import MAX_PER_PAGE_QUERY, Collection, Raw, Single
from gitlab_api.models import Job, Trigger

logger = logging.getLogger(__name__)


class JobsMixin(BaseClientMixin):
    """Mixin for CI job operations."""

    def get_project_jobs(self, project_id: str | int) -> list[Job]:
        """Get every job of a project, newest first."""
        return self.retrieve().get_all(f"{self._project_url(project_id)}/jobs{MAX_PER_PAGE_QUERY}", Collection(Job))

    def get_project_job(self, project_id: str | int, job_id: int) -> Job:
        return self.retrieve().to(f"{self._project_url(project_id)}/jobs/{job_id}", Single(Job))

    def get_job_artifact(self, project_id: str | int, job_id: int) -> bytes:
        """Download the artifacts archive of a job.

        Returns:
            The archive bytes (usually a zip file)
        """
        logger.debug(f"Downloading artifacts of job {job_id} in project {project_id}")
        return self.retrieve().to(f"{self._project_url(project_id)}/jobs/{job_id}/artifacts", Raw())

    def get_pipeline_triggers(self, project_id: str | int) -> list[Trigger]:
        """Get the pipeline triggers of a project.

        GitLab answers 403 when CI/CD is disabled for the project.
        """
        return self.retrieve().get_all(f"{self._project_url(project_id)}/triggers{MAX_PER_PAGE_QUERY}", Collection(Trigger))
