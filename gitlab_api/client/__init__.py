"""GitLab API client composed from mixins."""

from gitlab_api.client.awards import AwardsMixin
from gitlab_api.client.files import FilesMixin
from gitlab_api.client.groups import GroupsMixin
from gitlab_api.client.hooks import SystemHooksMixin
from gitlab_api.client.issues import IssuesMixin
from gitlab_api.client.jobs import JobsMixin
from gitlab_api.client.labels import LabelsMixin
from gitlab_api.client.merge_requests import MergeRequestsMixin
from gitlab_api.client.projects import ProjectsMixin
from gitlab_api.client.repository import RepositoryMixin
from gitlab_api.client.services import ServicesMixin
from gitlab_api.client.users import UsersMixin
from gitlab_api.client.variables import VariablesMixin


class GitLabClient(
    UsersMixin,
    GroupsMixin,
    ProjectsMixin,
    MergeRequestsMixin,
    RepositoryMixin,
    IssuesMixin,
    AwardsMixin,
    LabelsMixin,
    JobsMixin,
    VariablesMixin,
    SystemHooksMixin,
    ServicesMixin,
    FilesMixin,
):
    """GitLab API client composed from mixins.

    This client provides methods for interacting with GitLab's API including:
    - Users, SSH keys and groups
    - Projects, members, deploy keys and webhooks
    - Merge requests, notes and award emoji
    - Branches, tags, commits, commit statuses and comments, repository files
    - Issues, labels and milestones
    - CI jobs, pipeline triggers and CI/CD variables
    - System hooks and project integrations (emails on push, Jira)
    - File uploads

    Every method goes through ``retrieve()`` / ``dispatch()``, which build an
    immutable ``Request`` carrying the client's credentials.
    """


__all__ = ["GitLabClient"]
