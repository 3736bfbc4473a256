"""Issue client mixin."""

import logging

from gitlab_api.client.base import BaseClientMixin
from gitlab_api.http import MAX_ITEMS_PER_PAGE, Collection, Discard, Pagination, Query, Request, Single
from gitlab_api.models import Issue, IssueAction, Note

logger = logging.getLogger(__name__)


class IssuesMixin(BaseClientMixin):
    """Mixin for issue operations."""

    def get_issues(
        self,
        project_id: str | int,
        state: str | None = None,
        labels: str | None = None,
        assignee_id: int | None = None,
        milestone: str | None = None,
    ) -> list[Issue]:
        """Get issues for a project with optional filters.

        Args:
            project_id: Project ID or path
            state: Issue state - "opened", "closed", or None for all
            labels: Comma-separated label names to filter by
            assignee_id: Filter by assignee user ID
            milestone: Filter by milestone title

        Returns:
            Every matching issue
        """
        query = (
            Query()
            .append_if("state", state)
            .append_if("labels", labels)
            .append_if("assignee_id", assignee_id)
            .append_if("milestone", milestone)
        )
        query.merge_with(Pagination().with_per_page(MAX_ITEMS_PER_PAGE).as_query())
        return self.retrieve().get_all(f"{self._project_url(project_id)}/issues{query.render()}", Collection(Issue))

    def get_issue(self, project_id: str | int, issue_iid: int) -> Issue:
        """Get a specific issue by IID."""
        return self.retrieve().to(f"{self._project_url(project_id)}/issues/{issue_iid}", Single(Issue))

    @staticmethod
    def _apply_issue(
        request: Request,
        title: str | None,
        description: str | None,
        labels: str | None,
        assignee_id: int | None,
        milestone_id: int | None,
    ) -> Request:
        return (
            request.with_field("title", title)
            .with_field("description", description)
            .with_field("labels", labels)
            .with_field("assignee_id", assignee_id)
            .with_field("milestone_id", milestone_id)
        )

    def create_issue(
        self,
        project_id: str | int,
        title: str,
        description: str | None = None,
        labels: str | None = None,
        assignee_id: int | None = None,
        milestone_id: int | None = None,
    ) -> Issue:
        """Create a new issue.

        Args:
            project_id: Project ID or path
            title: Issue title (required)
            description: Issue description (optional, supports Markdown)
            labels: Comma-separated label names
            assignee_id: User ID to assign
            milestone_id: Milestone ID to assign

        Returns:
            Created issue
        """
        logger.info(f"Creating issue '{title}' in project {project_id}")
        request = self._apply_issue(self.dispatch(), title, description, labels, assignee_id, milestone_id)
        return request.to(f"{self._project_url(project_id)}/issues", Single(Issue))

    def edit_issue(
        self,
        project_id: str | int,
        issue_iid: int,
        title: str | None = None,
        description: str | None = None,
        labels: str | None = None,
        assignee_id: int | None = None,
        milestone_id: int | None = None,
        action: IssueAction = IssueAction.LEAVE,
    ) -> Issue:
        """Update an issue; ``action`` closes or reopens it.

        Pass ``assignee_id=0`` to unassign; None leaves the assignee unchanged.
        """
        request = self._apply_issue(
            self.retrieve().method("PUT"), title, description, labels, assignee_id, milestone_id
        )
        if action is not IssueAction.LEAVE:
            request = request.with_field("state_event", action)
        logger.info(f"Updating issue #{issue_iid} in project {project_id}")
        return request.to(f"{self._project_url(project_id)}/issues/{issue_iid}", Single(Issue))

    def move_issue(self, project_id: str | int, issue_iid: int, to_project_id: int) -> Issue:
        logger.info(f"Moving issue #{issue_iid} from project {project_id} to {to_project_id}")
        return (
            self.dispatch()
            .with_field("to_project_id", to_project_id)
            .to(f"{self._project_url(project_id)}/issues/{issue_iid}/move", Single(Issue))
        )

    def get_issue_notes(self, project_id: str | int, issue_iid: int) -> list[Note]:
        return self.retrieve().to(f"{self._project_url(project_id)}/issues/{issue_iid}/notes", Collection(Note))

    def get_issue_note(self, project_id: str | int, issue_iid: int, note_id: int) -> Note:
        return self.retrieve().to(f"{self._project_url(project_id)}/issues/{issue_iid}/notes/{note_id}", Single(Note))

    def create_issue_note(self, project_id: str | int, issue_iid: int, body: str) -> Note:
        logger.info(f"Creating note on issue #{issue_iid} in project {project_id}")
        return (
            self.dispatch()
            .with_field("body", body)
            .to(f"{self._project_url(project_id)}/issues/{issue_iid}/notes", Single(Note))
        )

    def delete_issue_note(self, project_id: str | int, issue_iid: int, note_id: int) -> None:
        logger.info(f"Deleting note {note_id} on issue #{issue_iid}")
        url = f"{self._project_url(project_id)}/issues/{issue_iid}/notes/{note_id}"
        self.retrieve().method("DELETE").to(url, Discard())
