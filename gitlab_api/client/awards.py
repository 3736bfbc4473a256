"""Award emoji client mixin for merge requests, issues and issue notes."""

import logging

from gitlab_api.client.base import BaseClientMixin
from gitlab_api.http import MAX_PER_PAGE_QUERY, Collection, Discard, Single
from gitlab_api.models import Award

logger = logging.getLogger(__name__)

AWARDS_URL = "/award_emoji"


class AwardsMixin(BaseClientMixin):
    """Mixin for award emoji operations."""

    def _awards_url(self, project_id: str | int, awardable: str, iid: int, note_id: int | None = None) -> str:
        url = f"{self._project_url(project_id)}/{awardable}/{iid}"
        if note_id is not None:
            url += f"/notes/{note_id}"
        return url + AWARDS_URL

    def _get_awards(self, url: str) -> list[Award]:
        return self.retrieve().get_all(url + MAX_PER_PAGE_QUERY, Collection(Award))

    def _create_award(self, url: str, name: str) -> Award:
        logger.info(f"Awarding :{name}: at {url}")
        return self.dispatch().with_field("name", name).to(url, Single(Award))

    def _delete_award(self, url: str, award_id: int) -> None:
        logger.info(f"Removing award {award_id} at {url}")
        self.retrieve().method("DELETE").to(f"{url}/{award_id}", Discard())

    # Merge requests

    def get_merge_request_awards(self, project_id: str | int, mr_iid: int) -> list[Award]:
        """Get every award emoji on a merge request."""
        return self._get_awards(self._awards_url(project_id, "merge_requests", mr_iid))

    def get_merge_request_award(self, project_id: str | int, mr_iid: int, award_id: int) -> Award:
        url = f"{self._awards_url(project_id, 'merge_requests', mr_iid)}/{award_id}"
        return self.retrieve().to(url, Single(Award))

    def create_merge_request_award(self, project_id: str | int, mr_iid: int, name: str) -> Award:
        """Award an emoji (by name, e.g. ``thumbsup``) to a merge request."""
        return self._create_award(self._awards_url(project_id, "merge_requests", mr_iid), name)

    def delete_merge_request_award(self, project_id: str | int, mr_iid: int, award_id: int) -> None:
        self._delete_award(self._awards_url(project_id, "merge_requests", mr_iid), award_id)

    # Issues

    def get_issue_awards(self, project_id: str | int, issue_iid: int) -> list[Award]:
        return self._get_awards(self._awards_url(project_id, "issues", issue_iid))

    def get_issue_award(self, project_id: str | int, issue_iid: int, award_id: int) -> Award:
        url = f"{self._awards_url(project_id, 'issues', issue_iid)}/{award_id}"
        return self.retrieve().to(url, Single(Award))

    def create_issue_award(self, project_id: str | int, issue_iid: int, name: str) -> Award:
        return self._create_award(self._awards_url(project_id, "issues", issue_iid), name)

    def delete_issue_award(self, project_id: str | int, issue_iid: int, award_id: int) -> None:
        self._delete_award(self._awards_url(project_id, "issues", issue_iid), award_id)

    # Issue notes

    def get_issue_note_awards(self, project_id: str | int, issue_iid: int, note_id: int) -> list[Award]:
        """Get every award emoji on a comment of an issue."""
        return self._get_awards(self._awards_url(project_id, "issues", issue_iid, note_id))

    def get_issue_note_award(self, project_id: str | int, issue_iid: int, note_id: int, award_id: int) -> Award:
        url = f"{self._awards_url(project_id, 'issues', issue_iid, note_id)}/{award_id}"
        return self.retrieve().to(url, Single(Award))

    def create_issue_note_award(self, project_id: str | int, issue_iid: int, note_id: int, name: str) -> Award:
        return self._create_award(self._awards_url(project_id, "issues", issue_iid, note_id), name)

    def delete_issue_note_award(self, project_id: str | int, issue_iid: int, note_id: int, award_id: int) -> None:
        self._delete_award(self._awards_url(project_id, "issues", issue_iid, note_id), award_id)
