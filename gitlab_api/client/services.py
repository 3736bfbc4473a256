"""Project integration (service) settings: emails on push and Jira."""

import logging

from gitlab_api.client.base import BaseClientMixin
from gitlab_api.http import Discard, Query, Single
from gitlab_api.models import EmailsOnPushService, JiraService

logger = logging.getLogger(__name__)

SERVICES_URL = "/services"
EMAILS_ON_PUSH = "emails-on-push"
JIRA = "jira"


class ServicesMixin(BaseClientMixin):
    """Mixin for project service settings."""

    def _service_url(self, project_id: str | int, service: str) -> str:
        return f"{self._project_url(project_id)}{SERVICES_URL}/{service}"

    def get_emails_on_push(self, project_id: str | int) -> EmailsOnPushService:
        return self.retrieve().to(self._service_url(project_id, EMAILS_ON_PUSH), Single(EmailsOnPushService))

    def update_emails_on_push(self, project_id: str | int, email_address: str) -> None:
        """Add ``email_address`` to the push notification recipients and activate the service.

        Existing recipients are kept. Nothing is sent when the address is
        already a recipient.
        """
        recipients = self.get_emails_on_push(project_id).properties.recipients.split()
        if email_address in recipients:
            logger.debug(f"{email_address} already receives push emails for project {project_id}")
            return
        recipients.append(email_address)
        query = Query().append("active", True).append("recipients", " ".join(recipients))
        logger.info(f"Adding {email_address} to push email recipients of project {project_id}")
        self.retrieve().method("PUT").to(self._service_url(project_id, EMAILS_ON_PUSH) + query.render(), Discard())

    def get_jira_service(self, project_id: str | int) -> JiraService:
        return self.retrieve().to(self._service_url(project_id, JIRA), Single(JiraService))

    def create_or_edit_jira_service(
        self,
        project_id: str | int,
        url: str,
        project_key: str | None = None,
        username: str | None = None,
        password: str | None = None,
        jira_issue_transition_id: str | int | None = None,
    ) -> None:
        """Configure the Jira integration of a project.

        Args:
            project_id: Project ID or path
            url: Base URL of the Jira instance
            project_key: Key of the Jira project linked to this GitLab project
            username: Jira user; left unchanged when empty
            password: Jira password or API token; left unchanged when empty
            jira_issue_transition_id: Transition applied when a commit closes an issue
        """
        request = (
            self.retrieve()
            .method("PUT")
            .with_field("url", url)
            .with_field("project_key", project_key)
            .with_field("username", username or None)
            .with_field("password", password or None)
            .with_field("jira_issue_transition_id", jira_issue_transition_id)
        )
        logger.info(f"Configuring Jira integration of project {project_id}")
        request.to(self._service_url(project_id, JIRA), Discard())

    def delete_jira_service(self, project_id: str | int) -> None:
        logger.info(f"Removing Jira integration of project {project_id}")
        self.retrieve().method("DELETE").to(self._service_url(project_id, JIRA), Discard())
