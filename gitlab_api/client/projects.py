"""Project client mixin: projects, members, sharing, deploy keys and hooks."""

import datetime
import logging

from gitlab_api.client.base import PARAM_SUDO, BaseClientMixin
from gitlab_api.http import MAX_ITEMS_PER_PAGE, MAX_PER_PAGE_QUERY, Collection, Discard, Pagination, Query, Single
from gitlab_api.models import AccessLevel, Member, Project, ProjectHook, SSHKey

logger = logging.getLogger(__name__)

PROJECTS_URL = "/projects"
NAMESPACES_URL = "/namespaces"


class ProjectsMixin(BaseClientMixin):
    """Mixin for project operations."""

    def get_project(self, project_id: str | int) -> Project:
        """Get a specific project by ID or path."""
        return self.retrieve().to(self._project_url(project_id), Single(Project))

    def get_projects(self) -> list[Project]:
        """Get all projects accessible by the authenticated user."""
        return self.retrieve().get_all(PROJECTS_URL + MAX_PER_PAGE_QUERY, Collection(Project))

    def get_owned_projects(self) -> list[Project]:
        query = Query().append("owned", True)
        query.merge_with(Pagination().with_per_page(MAX_ITEMS_PER_PAGE).as_query())
        return self.retrieve().get_all(PROJECTS_URL + query.render(), Collection(Project))

    def get_starred_projects(self) -> list[Project]:
        query = Query().append("starred", True)
        query.merge_with(Pagination().with_per_page(MAX_ITEMS_PER_PAGE).as_query())
        return self.retrieve().get_all(PROJECTS_URL + query.render(), Collection(Project))

    def get_projects_via_sudo(self, user_id: int) -> list[Project]:
        """Get all projects accessible by another user (admin tokens only)."""
        query = Query().append(PARAM_SUDO, user_id)
        query.merge_with(Pagination().with_per_page(MAX_ITEMS_PER_PAGE).as_query())
        return self.retrieve().get_all(PROJECTS_URL + query.render(), Collection(Project))

    def search_projects(self, search: str) -> list[Project]:
        """Search projects by name; returns the first page only."""
        query = Query().append("search", search)
        return self.retrieve().to(PROJECTS_URL + query.render(), Collection(Project))

    def create_project(
        self,
        name: str,
        path: str | None = None,
        namespace_id: int | None = None,
        description: str | None = None,
        default_branch: str | None = None,
        issues_enabled: bool | None = None,
        merge_requests_enabled: bool | None = None,
        wiki_enabled: bool | None = None,
        snippets_enabled: bool | None = None,
        visibility: str | None = None,
        import_url: str | None = None,
    ) -> Project:
        """Create a project.

        Args:
            name: Project name
            path: Repository path (GitLab derives it from ``name`` when omitted)
            namespace_id: Namespace (user or group) to create the project in
            description: Project description
            default_branch: Default branch name
            issues_enabled: Enable issues
            merge_requests_enabled: Enable merge requests
            wiki_enabled: Enable the wiki
            snippets_enabled: Enable snippets
            visibility: "private", "internal" or "public"
            import_url: Repository URL to import from

        Returns:
            The created project
        """
        query = (
            Query()
            .append("name", name)
            .append_if("path", path)
            .append_if("namespace_id", namespace_id)
            .append_if("description", description)
            .append_if("default_branch", default_branch)
            .append_if("issues_enabled", issues_enabled)
            .append_if("merge_requests_enabled", merge_requests_enabled)
            .append_if("wiki_enabled", wiki_enabled)
            .append_if("snippets_enabled", snippets_enabled)
            .append_if("visibility", visibility)
            .append_if("import_url", import_url)
        )
        logger.info(f"Creating project '{name}'")
        return self.dispatch().to(PROJECTS_URL + query.render(), Single(Project))

    def create_project_for_group(
        self, name: str, group_id: int, description: str | None = None, visibility: str | None = None
    ) -> Project:
        """Create a project inside the group ``group_id``."""
        return self.create_project(name, namespace_id=group_id, description=description, visibility=visibility)

    def create_user_project(self, user_id: int, name: str, description: str | None = None, visibility: str | None = None) -> Project:
        """Create a project owned by another user (admin only)."""
        query = Query().append("name", name).append_if("description", description).append_if("visibility", visibility)
        logger.info(f"Creating project '{name}' for user {user_id}")
        return self.dispatch().to(f"{PROJECTS_URL}/user/{user_id}{query.render()}", Single(Project))

    def update_project(
        self,
        project_id: str | int,
        name: str | None = None,
        description: str | None = None,
        default_branch: str | None = None,
        issues_enabled: bool | None = None,
        merge_requests_enabled: bool | None = None,
        wiki_enabled: bool | None = None,
        snippets_enabled: bool | None = None,
        visibility: str | None = None,
    ) -> Project:
        """Update project settings; None arguments are left unchanged."""
        query = (
            Query()
            .append_if("name", name)
            .append_if("description", description)
            .append_if("default_branch", default_branch)
            .append_if("issues_enabled", issues_enabled)
            .append_if("merge_requests_enabled", merge_requests_enabled)
            .append_if("wiki_enabled", wiki_enabled)
            .append_if("snippets_enabled", snippets_enabled)
            .append_if("visibility", visibility)
        )
        logger.info(f"Updating project {project_id}")
        return self.retrieve().method("PUT").to(self._project_url(project_id) + query.render(), Single(Project))

    def delete_project(self, project_id: str | int) -> None:
        logger.info(f"Deleting project {project_id}")
        self.retrieve().method("DELETE").to(self._project_url(project_id), Discard())

    def transfer_project(self, namespace_id: int, project_id: int) -> None:
        """Move a project into another namespace."""
        logger.info(f"Transferring project {project_id} to namespace {namespace_id}")
        self.dispatch().to(f"{NAMESPACES_URL}/{namespace_id}{PROJECTS_URL}/{project_id}", Discard())

    def get_namespace_members(self, namespace_id: int) -> list[Member]:
        """Get the members of a group namespace; GitLab rejects user namespaces."""
        url = f"{NAMESPACES_URL}/{namespace_id}/members{MAX_PER_PAGE_QUERY}"
        return self.retrieve().get_all(url, Collection(Member))

    def get_project_members(self, project_id: str | int, pagination: Pagination | None = None) -> list[Member]:
        """Get project members; without ``pagination`` every page is fetched."""
        url = f"{self._project_url(project_id)}/members"
        if pagination is None:
            return self.retrieve().get_all(url + MAX_PER_PAGE_QUERY, Collection(Member))
        return self.retrieve().to(url + str(pagination), Collection(Member))

    def add_project_member(self, project_id: str | int, user_id: int, access_level: AccessLevel) -> Member:
        query = Query().append("user_id", user_id).append("access_level", access_level)
        logger.info(f"Adding user {user_id} to project {project_id} as {access_level.name}")
        return self.dispatch().to(f"{self._project_url(project_id)}/members{query.render()}", Single(Member))

    def delete_project_member(self, project_id: str | int, user_id: int) -> None:
        logger.info(f"Removing user {user_id} from project {project_id}")
        self.retrieve().method("DELETE").to(f"{self._project_url(project_id)}/members/{user_id}", Discard())

    def share_project_with_group(
        self,
        project_id: str | int,
        group_id: int,
        access_level: AccessLevel,
        expires_at: datetime.date | None = None,
    ) -> None:
        """Share a project with a group, optionally until ``expires_at``."""
        query = (
            Query()
            .append("group_id", group_id)
            .append("group_access", access_level)
            .append_if("expires_at", expires_at)
        )
        logger.info(f"Sharing project {project_id} with group {group_id}")
        self.dispatch().to(f"{self._project_url(project_id)}/share{query.render()}", Discard())

    def delete_shared_project_group_link(self, project_id: str | int, group_id: int) -> None:
        logger.info(f"Unsharing project {project_id} from group {group_id}")
        self.retrieve().method("DELETE").to(f"{self._project_url(project_id)}/share/{group_id}", Discard())

    def get_deploy_keys(self, project_id: str | int) -> list[SSHKey]:
        return self.retrieve().to(f"{self._project_url(project_id)}/deploy_keys", Collection(SSHKey))

    def create_deploy_key(self, project_id: str | int, title: str, key: str, can_push: bool = False) -> SSHKey:
        """Add a deploy key; ``can_push`` grants write access."""
        query = Query().append("title", title).append("key", key).append("can_push", can_push)
        logger.info(f"Adding deploy key '{title}' to project {project_id}")
        return self.dispatch().to(f"{self._project_url(project_id)}/deploy_keys{query.render()}", Single(SSHKey))

    def delete_deploy_key(self, project_id: str | int, key_id: int) -> None:
        logger.info(f"Deleting deploy key {key_id} from project {project_id}")
        self.retrieve().method("DELETE").to(f"{self._project_url(project_id)}/deploy_keys/{key_id}", Discard())

    def get_project_hooks(self, project_id: str | int) -> list[ProjectHook]:
        return self.retrieve().to(f"{self._project_url(project_id)}/hooks", Collection(ProjectHook))

    def get_project_hook(self, project_id: str | int, hook_id: int) -> ProjectHook:
        return self.retrieve().to(f"{self._project_url(project_id)}/hooks/{hook_id}", Single(ProjectHook))

    def add_project_hook(
        self,
        project_id: str | int,
        url: str,
        token: str | None = None,
        push_events: bool | None = None,
        issues_events: bool | None = None,
        merge_requests_events: bool | None = None,
        tag_push_events: bool | None = None,
        enable_ssl_verification: bool | None = None,
    ) -> ProjectHook:
        """Add a webhook; unset event flags keep GitLab's defaults."""
        logger.info(f"Adding hook to project {project_id}")
        return (
            self.dispatch()
            .with_field("url", url)
            .with_field("token", token)
            .with_field("push_events", push_events)
            .with_field("issues_events", issues_events)
            .with_field("merge_requests_events", merge_requests_events)
            .with_field("tag_push_events", tag_push_events)
            .with_field("enable_ssl_verification", enable_ssl_verification)
            .to(f"{self._project_url(project_id)}/hooks", Single(ProjectHook))
        )

    def edit_project_hook(self, project_id: str | int, hook_id: int, url: str) -> ProjectHook:
        query = Query().append("url", url)
        logger.info(f"Updating hook {hook_id} of project {project_id}")
        return self.retrieve().method("PUT").to(f"{self._project_url(project_id)}/hooks/{hook_id}{query.render()}", Single(ProjectHook))

    def delete_project_hook(self, project_id: str | int, hook_id: int) -> None:
        logger.info(f"Deleting hook {hook_id} of project {project_id}")
        self.retrieve().method("DELETE").to(f"{self._project_url(project_id)}/hooks/{hook_id}", Discard())
