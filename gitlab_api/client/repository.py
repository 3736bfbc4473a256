"""Repository client mixin: branches, tags, commits, files and archives."""

import logging

from gitlab_api.client.base import BaseClientMixin
from gitlab_api.http import MAX_ITEMS_PER_PAGE, MAX_PER_PAGE_QUERY, Collection, Discard, Pagination, Query, Raw, Single
from gitlab_api.models import (
    Branch,
    Commit,
    CommitComment,
    CommitComparison,
    CommitDiff,
    CommitStatus,
    RepositoryFile,
    RepositoryTreeItem,
    SimpleRepositoryFile,
    Tag,
)

logger = logging.getLogger(__name__)


class RepositoryMixin(BaseClientMixin):
    """Mixin for repository operations."""

    def _repository_url(self, project_id: str | int) -> str:
        return f"{self._project_url(project_id)}/repository"

    # Branches

    def get_branches(self, project_id: str | int) -> list[Branch]:
        url = f"{self._repository_url(project_id)}/branches{MAX_PER_PAGE_QUERY}"
        return self.retrieve().get_all(url, Collection(Branch))

    def get_branch(self, project_id: str | int, branch_name: str) -> Branch:
        url = f"{self._repository_url(project_id)}/branches/{self._encode_path(branch_name)}"
        return self.retrieve().to(url, Single(Branch))

    def create_branch(self, project_id: str | int, branch_name: str, ref: str) -> None:
        """Create ``branch_name`` pointing at ``ref`` (branch, tag or SHA)."""
        logger.info(f"Creating branch '{branch_name}' from {ref} in project {project_id}")
        (
            self.dispatch()
            .with_field("branch", branch_name)
            .with_field("ref", ref)
            .to(f"{self._repository_url(project_id)}/branches", Discard())
        )

    def delete_branch(self, project_id: str | int, branch_name: str) -> None:
        logger.info(f"Deleting branch '{branch_name}' in project {project_id}")
        url = f"{self._repository_url(project_id)}/branches/{self._encode_path(branch_name)}"
        self.retrieve().method("DELETE").to(url, Discard())

    def protect_branch(
        self,
        project_id: str | int,
        branch_name: str,
        developers_can_push: bool = False,
        developers_can_merge: bool = False,
    ) -> None:
        query = (
            Query()
            .append("developers_can_push", developers_can_push)
            .append("developers_can_merge", developers_can_merge)
        )
        logger.info(f"Protecting branch '{branch_name}' in project {project_id}")
        url = f"{self._repository_url(project_id)}/branches/{self._encode_path(branch_name)}/protect{query.render()}"
        self.retrieve().method("PUT").to(url, Discard())

    def unprotect_branch(self, project_id: str | int, branch_name: str) -> None:
        logger.info(f"Unprotecting branch '{branch_name}' in project {project_id}")
        url = f"{self._repository_url(project_id)}/branches/{self._encode_path(branch_name)}/unprotect"
        self.retrieve().method("PUT").to(url, Discard())

    # Tags

    def get_tags(self, project_id: str | int) -> list[Tag]:
        url = f"{self._repository_url(project_id)}/tags{MAX_PER_PAGE_QUERY}"
        return self.retrieve().get_all(url, Collection(Tag))

    def add_tag(
        self,
        project_id: str | int,
        tag_name: str,
        ref: str,
        message: str | None = None,
        release_description: str | None = None,
    ) -> Tag:
        """Create a tag, optionally annotated and with release notes."""
        query = (
            Query()
            .append("tag_name", tag_name)
            .append("ref", ref)
            .append_if("message", message)
            .append_if("release_description", release_description)
        )
        logger.info(f"Creating tag '{tag_name}' at {ref} in project {project_id}")
        return self.dispatch().to(f"{self._repository_url(project_id)}/tags{query.render()}", Single(Tag))

    def delete_tag(self, project_id: str | int, tag_name: str) -> None:
        logger.info(f"Deleting tag '{tag_name}' in project {project_id}")
        url = f"{self._repository_url(project_id)}/tags/{self._encode_path(tag_name)}"
        self.retrieve().method("DELETE").to(url, Discard())

    # Commits

    def get_commit(self, project_id: str | int, sha: str) -> Commit:
        """Get a commit by SHA, branch or tag name."""
        url = f"{self._repository_url(project_id)}/commits/{self._encode_path(sha)}"
        return self.retrieve().to(url, Single(Commit))

    def _commits_url(self, project_id: str | int, pagination: Pagination | None, ref_name: str | None) -> str:
        query = Query().append_if("ref_name", ref_name)
        if pagination is not None:
            query.merge_with(pagination.as_query())
        return f"{self._repository_url(project_id)}/commits{query.render()}"

    def get_commits(
        self, project_id: str | int, pagination: Pagination | None = None, ref_name: str | None = None
    ) -> list[Commit]:
        """Get a single page of commits, newest first."""
        return self.retrieve().to(self._commits_url(project_id, pagination, ref_name), Collection(Commit))

    def get_all_commits(
        self, project_id: str | int, pagination: Pagination | None = None, ref_name: str | None = None
    ) -> list[Commit]:
        """Get every commit reachable from ``ref_name`` (default branch when None)."""
        if pagination is None:
            pagination = Pagination().with_per_page(MAX_ITEMS_PER_PAGE)
        return self.retrieve().get_all(self._commits_url(project_id, pagination, ref_name), Collection(Commit))

    def get_commit_diffs(self, project_id: str | int, sha: str, pagination: Pagination | None = None) -> list[CommitDiff]:
        url = f"{self._repository_url(project_id)}/commits/{self._encode_path(sha)}/diff{pagination or ''}"
        return self.retrieve().to(url, Collection(CommitDiff))

    def compare_commits(self, project_id: str | int, from_ref: str, to_ref: str) -> CommitComparison:
        query = Query().append("from", from_ref).append("to", to_ref)
        return self.retrieve().to(f"{self._repository_url(project_id)}/compare{query.render()}", Single(CommitComparison))

    def cherry_pick(self, project_id: str | int, sha: str, target_branch: str) -> Commit:
        """Cherry-pick ``sha`` onto ``target_branch``."""
        logger.info(f"Cherry-picking {sha} onto '{target_branch}' in project {project_id}")
        url = f"{self._repository_url(project_id)}/commits/{self._encode_path(sha)}/cherry_pick"
        return self.dispatch().with_field("branch", target_branch).to(url, Single(Commit))

    def get_last_commits(self, project_id: str | int, branch_or_tag: str | None = None) -> list[Commit]:
        """Get the first page of commits on ``branch_or_tag`` (default branch when None)."""
        return self.get_commits(project_id, ref_name=branch_or_tag)

    def get_commit_statuses(
        self, project_id: str | int, sha: str, pagination: Pagination | None = None
    ) -> list[CommitStatus]:
        """Get one page of the external CI statuses of a commit."""
        url = f"{self._repository_url(project_id)}/commits/{self._encode_path(sha)}/statuses{pagination or ''}"
        return self.retrieve().to(url, Collection(CommitStatus))

    def create_commit_status(
        self,
        project_id: str | int,
        sha: str,
        state: str,
        ref: str | None = None,
        name: str | None = None,
        target_url: str | None = None,
        description: str | None = None,
    ) -> CommitStatus:
        """Set an external CI status on a commit.

        Args:
            project_id: Project ID or path
            sha: Commit SHA
            state: One of "pending", "running", "success", "failed" or "canceled"
            ref: Branch or tag the status refers to
            name: Label distinguishing this status from other CI systems
            target_url: Link shown next to the status
            description: Short description of the status

        Returns:
            The created status
        """
        logger.info(f"Setting status '{state}' on {sha} in project {project_id}")
        return (
            self.dispatch()
            .with_field("state", state)
            .with_field("ref", ref)
            .with_field("name", name)
            .with_field("target_url", target_url)
            .with_field("description", description)
            .to(f"{self._project_url(project_id)}/statuses/{self._encode_path(sha)}", Single(CommitStatus))
        )

    def get_commit_comments(self, project_id: str | int, sha: str) -> list[CommitComment]:
        url = f"{self._repository_url(project_id)}/commits/{self._encode_path(sha)}/comments"
        return self.retrieve().get_all(url + MAX_PER_PAGE_QUERY, Collection(CommitComment))

    def create_commit_comment(
        self,
        project_id: str | int,
        sha: str,
        note: str,
        path: str | None = None,
        line: int | None = None,
        line_type: str | None = None,
    ) -> CommitComment:
        """Comment on a commit, optionally on a specific line of ``path``.

        ``line_type`` is "new" or "old" and selects which side of the diff
        ``line`` refers to.
        """
        logger.info(f"Commenting on {sha} in project {project_id}")
        return (
            self.dispatch()
            .with_field("note", note)
            .with_field("path", path)
            .with_field("line", line)
            .with_field("line_type", line_type)
            .to(f"{self._repository_url(project_id)}/commits/{self._encode_path(sha)}/comments", Single(CommitComment))
        )

    # Files

    def get_raw_file_content(self, project_id: str | int, ref: str, file_path: str) -> bytes:
        """Get raw file content at a specific ref (commit SHA, branch, tag).

        Args:
            project_id: Project ID or path
            ref: Git ref (commit SHA, branch name, or tag)
            file_path: Path to file in repository

        Returns:
            File content exactly as stored, without decoding

        Raises:
            APIError: If the file does not exist at ``ref``
        """
        query = Query().append("ref", ref)
        url = f"{self._repository_url(project_id)}/files/{self._encode_path(file_path)}/raw{query.render()}"
        return self.retrieve().to(url, Raw())

    def get_raw_blob_content(self, project_id: str | int, blob_sha: str) -> bytes:
        return self.retrieve().to(f"{self._repository_url(project_id)}/blobs/{blob_sha}/raw", Raw())

    def get_file_archive(self, project_id: str | int, sha: str | None = None) -> bytes:
        """Download the repository as a tar.gz archive."""
        query = Query().append_if("sha", sha)
        return self.retrieve().to(f"{self._repository_url(project_id)}/archive{query.render()}", Raw())

    def get_repository_tree(
        self, project_id: str | int, path: str | None = None, ref: str | None = None, recursive: bool = False
    ) -> list[RepositoryTreeItem]:
        query = (
            Pagination()
            .with_per_page(MAX_ITEMS_PER_PAGE)
            .as_query()
            .append_if("path", path)
            .append_if("ref", ref)
            .append("recursive", recursive)
        )
        return self.retrieve().get_all(f"{self._repository_url(project_id)}/tree{query.render()}", Collection(RepositoryTreeItem))

    def get_repository_file(self, project_id: str | int, file_path: str, ref: str) -> RepositoryFile:
        """Get file metadata and base64 content."""
        query = Query().append("ref", ref)
        url = f"{self._repository_url(project_id)}/files/{self._encode_path(file_path)}{query.render()}"
        return self.retrieve().to(url, Single(RepositoryFile))

    def create_repository_file(
        self, project_id: str | int, file_path: str, branch: str, commit_message: str, content: str
    ) -> SimpleRepositoryFile:
        """Commit a new file; ``content`` must already be base64 encoded."""
        logger.info(f"Creating file '{file_path}' on '{branch}' in project {project_id}")
        return (
            self.dispatch()
            .with_field("branch", branch)
            .with_field("encoding", "base64")
            .with_field("commit_message", commit_message)
            .with_field("content", content)
            .to(f"{self._repository_url(project_id)}/files/{self._encode_path(file_path)}", Single(SimpleRepositoryFile))
        )

    def update_repository_file(
        self, project_id: str | int, file_path: str, branch: str, commit_message: str, content: str
    ) -> SimpleRepositoryFile:
        """Commit new content for an existing file; ``content`` must be base64 encoded."""
        logger.info(f"Updating file '{file_path}' on '{branch}' in project {project_id}")
        return (
            self.retrieve()
            .method("PUT")
            .with_field("branch", branch)
            .with_field("encoding", "base64")
            .with_field("commit_message", commit_message)
            .with_field("content", content)
            .to(f"{self._repository_url(project_id)}/files/{self._encode_path(file_path)}", Single(SimpleRepositoryFile))
        )

    def delete_repository_file(self, project_id: str | int, file_path: str, branch: str, commit_message: str) -> None:
        logger.info(f"Deleting file '{file_path}' on '{branch}' in project {project_id}")
        (
            self.retrieve()
            .method("DELETE")
            .with_field("branch", branch)
            .with_field("commit_message", commit_message)
            .to(f"{self._repository_url(project_id)}/files/{self._encode_path(file_path)}", Discard())
        )
