"""Type definitions for gitlab-api-client.

Entity models only declare the fields the client relies on; unknown fields in
GitLab responses are ignored so newer GitLab versions keep decoding.
"""

import datetime
import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import TypedDict


class FileFromPath(TypedDict):
    """File input from local filesystem path."""

    path: str


class FileFromBase64(TypedDict):
    """File input from base64-encoded data."""

    base64: str
    filename: str


# Union type - either path OR base64+filename, not both
FileSource = FileFromPath | FileFromBase64


class AccessLevel(enum.Enum):
    """Member permission levels, sent by numeric value."""

    GUEST = 10
    REPORTER = 20
    DEVELOPER = 30
    MAINTAINER = 40
    OWNER = 50


class IssueAction(enum.Enum):
    LEAVE = "leave"
    CLOSE = "close"
    REOPEN = "reopen"


class MergeRequestState(enum.Enum):
    OPENED = "opened"
    MERGED = "merged"
    CLOSED = "closed"
    ALL = "all"


class GitLabModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Version(GitLabModel):
    version: str
    revision: str | None = None


class User(GitLabModel):
    id: int
    username: str
    name: str | None = None
    email: str | None = None
    state: str | None = None
    avatar_url: str | None = None
    web_url: str | None = None
    bio: str | None = None
    is_admin: bool | None = None
    can_create_group: bool | None = None
    projects_limit: int | None = None
    created_at: datetime.datetime | None = None


class Session(User):
    """The authenticated user, as returned by ``GET /user``."""

    private_token: str | None = Field(default=None, repr=False)


class SSHKey(GitLabModel):
    id: int
    title: str | None = None
    key: str | None = None
    can_push: bool | None = None
    user: User | None = None


class Namespace(GitLabModel):
    id: int
    name: str | None = None
    path: str | None = None
    kind: str | None = None
    full_path: str | None = None


class Group(GitLabModel):
    id: int
    name: str
    path: str
    full_path: str | None = None
    description: str | None = None
    visibility: str | None = None
    parent_id: int | None = None
    web_url: str | None = None


class Member(GitLabModel):
    """Project or group member."""

    id: int
    username: str
    name: str | None = None
    state: str | None = None
    access_level: int | None = None
    expires_at: datetime.date | None = None


class Project(GitLabModel):
    id: int
    name: str
    path: str | None = None
    path_with_namespace: str | None = None
    name_with_namespace: str | None = None
    description: str | None = None
    default_branch: str | None = None
    visibility: str | None = None
    web_url: str | None = None
    ssh_url_to_repo: str | None = None
    http_url_to_repo: str | None = None
    namespace: Namespace | None = None
    archived: bool | None = None
    issues_enabled: bool | None = None
    merge_requests_enabled: bool | None = None
    wiki_enabled: bool | None = None
    snippets_enabled: bool | None = None
    jobs_enabled: bool | None = None
    created_at: datetime.datetime | None = None
    last_activity_at: datetime.datetime | None = None


class Upload(GitLabModel):
    """Result of a markdown upload; ``markdown`` is ready to embed."""

    alt: str | None = None
    url: str
    full_path: str | None = None
    markdown: str | None = None


class Commit(GitLabModel):
    id: str
    short_id: str | None = None
    title: str | None = None
    message: str | None = None
    author_name: str | None = None
    author_email: str | None = None
    created_at: datetime.datetime | None = None
    parent_ids: list[str] = Field(default_factory=list)
    web_url: str | None = None


class CommitDiff(GitLabModel):
    diff: str
    old_path: str
    new_path: str
    new_file: bool = False
    renamed_file: bool = False
    deleted_file: bool = False


class CommitComparison(GitLabModel):
    commit: Commit | None = None
    commits: list[Commit] = Field(default_factory=list)
    diffs: list[CommitDiff] = Field(default_factory=list)
    compare_timeout: bool | None = None
    compare_same_ref: bool | None = None


class CommitStatus(GitLabModel):
    """External CI status attached to a commit."""

    id: int
    sha: str | None = None
    ref: str | None = None
    status: str
    name: str | None = None
    target_url: str | None = None
    description: str | None = None
    author: User | None = None
    created_at: datetime.datetime | None = None
    started_at: datetime.datetime | None = None
    finished_at: datetime.datetime | None = None


class CommitComment(GitLabModel):
    note: str
    path: str | None = None
    line: int | None = None
    line_type: str | None = None
    author: User | None = None
    created_at: datetime.datetime | None = None


class MergeRequest(GitLabModel):
    id: int
    iid: int
    project_id: int | None = None
    title: str
    description: str | None = None
    state: str | None = None
    source_branch: str | None = None
    target_branch: str | None = None
    source_project_id: int | None = None
    target_project_id: int | None = None
    author: User | None = None
    assignee: User | None = None
    labels: list[str] = Field(default_factory=list)
    draft: bool | None = None
    merge_status: str | None = None
    sha: str | None = None
    web_url: str | None = None
    changes: list[CommitDiff] | None = None
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None


class Note(GitLabModel):
    id: int
    body: str
    author: User | None = None
    system: bool | None = None
    noteable_id: int | None = None
    noteable_type: str | None = None
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None


class Award(GitLabModel):
    """Award emoji on a merge request, issue or note."""

    id: int
    name: str
    user: User | None = None
    awardable_id: int | None = None
    awardable_type: str | None = None
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None


class Branch(GitLabModel):
    name: str
    commit: Commit | None = None
    merged: bool | None = None
    protected: bool | None = None
    developers_can_push: bool | None = None
    developers_can_merge: bool | None = None
    default: bool | None = None


class Tag(GitLabModel):
    name: str
    message: str | None = None
    target: str | None = None
    commit: Commit | None = None
    protected: bool | None = None
    release: dict[str, Any] | None = None


class RepositoryTreeItem(GitLabModel):
    id: str
    name: str
    type: str
    path: str
    mode: str | None = None


class RepositoryFile(GitLabModel):
    file_name: str
    file_path: str
    size: int | None = None
    encoding: str | None = None
    content: str | None = None
    ref: str | None = None
    blob_id: str | None = None
    commit_id: str | None = None
    last_commit_id: str | None = None


class SimpleRepositoryFile(GitLabModel):
    """Result of creating, updating or deleting a repository file."""

    file_path: str | None = None
    branch: str | None = None


class Milestone(GitLabModel):
    id: int
    iid: int | None = None
    project_id: int | None = None
    title: str
    description: str | None = None
    state: str | None = None
    due_date: datetime.date | None = None
    start_date: datetime.date | None = None


class Issue(GitLabModel):
    id: int
    iid: int
    project_id: int | None = None
    title: str
    description: str | None = None
    state: str | None = None
    labels: list[str] = Field(default_factory=list)
    author: User | None = None
    assignee: User | None = None
    assignees: list[User] = Field(default_factory=list)
    milestone: Milestone | None = None
    web_url: str | None = None
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None
    closed_at: datetime.datetime | None = None


class Label(GitLabModel):
    id: int | None = None
    name: str
    color: str | None = None
    description: str | None = None


class Job(GitLabModel):
    id: int
    name: str | None = None
    status: str | None = None
    stage: str | None = None
    ref: str | None = None
    tag: bool | None = None
    duration: float | None = None
    web_url: str | None = None
    commit: Commit | None = None
    user: User | None = None
    created_at: datetime.datetime | None = None
    started_at: datetime.datetime | None = None
    finished_at: datetime.datetime | None = None


class BuildVariable(GitLabModel):
    """CI/CD variable of a project."""

    key: str
    value: str | None = Field(default=None, repr=False)
    variable_type: str | None = None
    protected: bool | None = None
    masked: bool | None = None
    environment_scope: str | None = None


class ProjectHook(GitLabModel):
    id: int
    url: str
    project_id: int | None = None
    push_events: bool | None = None
    issues_events: bool | None = None
    merge_requests_events: bool | None = None
    tag_push_events: bool | None = None
    enable_ssl_verification: bool | None = None
    created_at: datetime.datetime | None = None


class SystemHook(GitLabModel):
    id: int
    url: str
    created_at: datetime.datetime | None = None



class Trigger(GitLabModel):
    """Pipeline trigger of a project."""

    id: int
    description: str | None = None
    token: str | None = Field(default=None, repr=False)
    owner: User | None = None
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None
    last_used: datetime.datetime | None = None


class EmailsOnPushProperties(GitLabModel):
    recipients: str = ""
    disable_diffs: bool | None = None
    send_from_committer_email: bool | None = None


class EmailsOnPushService(GitLabModel):
    id: int | None = None
    title: str | None = None
    active: bool | None = None
    properties: EmailsOnPushProperties = Field(default_factory=EmailsOnPushProperties)


class JiraProperties(GitLabModel):
    url: str | None = None
    project_key: str | None = None
    username: str | None = None
    jira_issue_transition_id: str | None = None


class JiraService(GitLabModel):
    id: int | None = None
    title: str | None = None
    active: bool | None = None
    properties: JiraProperties = Field(default_factory=JiraProperties)
