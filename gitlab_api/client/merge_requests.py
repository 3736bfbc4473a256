"""Merge request client mixin."""

import logging

from gitlab_api.client.base import BaseClientMixin
from gitlab_api.errors import NotFoundError
from gitlab_api.http import MAX_ITEMS_PER_PAGE, MAX_PER_PAGE_QUERY, Collection, Discard, Pagination, Query, Single
from gitlab_api.models import Commit, MergeRequest, MergeRequestState, Note

logger = logging.getLogger(__name__)


class MergeRequestsMixin(BaseClientMixin):
    """Mixin for merge request operations."""

    def get_merge_requests(
        self,
        project_id: str | int,
        state: MergeRequestState | None = None,
        pagination: Pagination | None = None,
    ) -> list[MergeRequest]:
        """Get merge requests for a project.

        Args:
            project_id: Project ID or path
            state: Only return merge requests in this state
            pagination: Start page and page size; defaults to the largest page size

        Returns:
            Merge requests from the starting page through the last one
        """
        if pagination is None:
            pagination = Pagination().with_per_page(MAX_ITEMS_PER_PAGE)
        query = pagination.as_query().append_if("state", state)
        url = f"{self._project_url(project_id)}/merge_requests{query.render()}"
        return self.retrieve().get_all(url, Collection(MergeRequest))

    def get_open_merge_requests(self, project_id: str | int, pagination: Pagination | None = None) -> list[MergeRequest]:
        return self.get_merge_requests(project_id, MergeRequestState.OPENED, pagination)

    def get_merged_merge_requests(self, project_id: str | int, pagination: Pagination | None = None) -> list[MergeRequest]:
        return self.get_merge_requests(project_id, MergeRequestState.MERGED, pagination)

    def get_closed_merge_requests(self, project_id: str | int, pagination: Pagination | None = None) -> list[MergeRequest]:
        return self.get_merge_requests(project_id, MergeRequestState.CLOSED, pagination)

    def get_merge_request(self, project_id: str | int, mr_iid: int) -> MergeRequest:
        """Get a specific merge request."""
        return self.retrieve().to(f"{self._project_url(project_id)}/merge_requests/{mr_iid}", Single(MergeRequest))

    def get_merge_request_by_iid(self, project_id: str | int, mr_iid: int) -> MergeRequest:
        """Look up a merge request through the list endpoint's ``iids[]`` filter.

        Raises:
            NotFoundError: If no merge request has this IID
        """
        query = Query().append("iids[]", mr_iid)
        query.merge_with(Pagination().with_per_page(MAX_ITEMS_PER_PAGE).as_query())
        url = f"{self._project_url(project_id)}/merge_requests{query.render()}"
        results = self.retrieve().get_all(url, Collection(MergeRequest))
        if not results:
            logger.debug(f"No merge request !{mr_iid} in project {project_id}")
            raise NotFoundError(f"Merge request !{mr_iid} not found in project {project_id}", "GET", url)
        return results[0]

    def get_merge_request_changes(self, project_id: str | int, mr_iid: int) -> MergeRequest:
        """Get a merge request together with its diff in ``changes``."""
        url = f"{self._project_url(project_id)}/merge_requests/{mr_iid}/changes"
        return self.retrieve().to(url, Single(MergeRequest))

    def create_merge_request(
        self,
        project_id: str | int,
        source_branch: str,
        target_branch: str,
        title: str,
        assignee_id: int | None = None,
        description: str | None = None,
        labels: str | None = None,
    ) -> MergeRequest:
        query = (
            Query()
            .append("source_branch", source_branch)
            .append("target_branch", target_branch)
            .append("title", title)
            .append_if("assignee_id", assignee_id)
            .append_if("description", description)
            .append_if("labels", labels)
        )
        logger.info(f"Creating MR '{title}' ({source_branch} -> {target_branch}) in project {project_id}")
        return self.dispatch().to(f"{self._project_url(project_id)}/merge_requests{query.render()}", Single(MergeRequest))

    def update_merge_request(
        self,
        project_id: str | int,
        mr_iid: int,
        target_branch: str | None = None,
        assignee_id: int | None = None,
        title: str | None = None,
        description: str | None = None,
        state_event: str | None = None,
        labels: str | None = None,
    ) -> MergeRequest:
        """Update a merge request.

        Args:
            project_id: Project ID or path
            mr_iid: Merge request IID
            target_branch: New target branch
            assignee_id: New assignee (0 unassigns)
            title: New title
            description: New description
            state_event: "close" or "reopen"
            labels: Comma-separated labels replacing the current ones

        Returns:
            The updated merge request
        """
        query = (
            Query()
            .append_if("target_branch", target_branch)
            .append_if("assignee_id", assignee_id)
            .append_if("title", title)
            .append_if("description", description)
            .append_if("state_event", state_event)
            .append_if("labels", labels)
        )
        logger.info(f"Updating MR !{mr_iid} in project {project_id}")
        url = f"{self._project_url(project_id)}/merge_requests/{mr_iid}{query.render()}"
        return self.retrieve().method("PUT").to(url, Single(MergeRequest))

    def accept_merge_request(self, project_id: str | int, mr_iid: int, merge_commit_message: str | None = None) -> MergeRequest:
        """Merge a merge request."""
        logger.info(f"Merging MR !{mr_iid} in project {project_id}")
        return (
            self.retrieve()
            .method("PUT")
            .with_field("merge_commit_message", merge_commit_message)
            .to(f"{self._project_url(project_id)}/merge_requests/{mr_iid}/merge", Single(MergeRequest))
        )

    def get_merge_request_notes(self, project_id: str | int, mr_iid: int) -> list[Note]:
        """Get every note (comment) of a merge request."""
        url = f"{self._project_url(project_id)}/merge_requests/{mr_iid}/notes{MAX_PER_PAGE_QUERY}"
        return self.retrieve().get_all(url, Collection(Note))

    def get_merge_request_note(self, project_id: str | int, mr_iid: int, note_id: int) -> Note:
        url = f"{self._project_url(project_id)}/merge_requests/{mr_iid}/notes/{note_id}"
        return self.retrieve().to(url, Single(Note))

    def create_merge_request_note(self, project_id: str | int, mr_iid: int, body: str) -> Note:
        logger.info(f"Creating note on MR !{mr_iid} in project {project_id}")
        url = f"{self._project_url(project_id)}/merge_requests/{mr_iid}/notes"
        return self.dispatch().with_field("body", body).to(url, Single(Note))

    def update_merge_request_note(self, project_id: str | int, mr_iid: int, note_id: int, body: str) -> Note:
        query = Query().append("body", body)
        url = f"{self._project_url(project_id)}/merge_requests/{mr_iid}/notes/{note_id}{query.render()}"
        logger.info(f"Updating note {note_id} on MR !{mr_iid}")
        return self.retrieve().method("PUT").to(url, Single(Note))

    def delete_merge_request_note(self, project_id: str | int, mr_iid: int, note_id: int) -> None:
        logger.info(f"Deleting note {note_id} on MR !{mr_iid}")
        url = f"{self._project_url(project_id)}/merge_requests/{mr_iid}/notes/{note_id}"
        self.retrieve().method("DELETE").to(url, Discard())

    def get_merge_request_commits(self, project_id: str | int, mr_iid: int) -> list[Commit]:
        url = f"{self._project_url(project_id)}/merge_requests/{mr_iid}/commits{MAX_PER_PAGE_QUERY}"
        return self.retrieve().get_all(url, Collection(Commit))
