"""Group client mixin."""

import logging

from gitlab_api.client.base import PARAM_SUDO, BaseClientMixin
from gitlab_api.http import MAX_ITEMS_PER_PAGE, MAX_PER_PAGE_QUERY, Collection, Discard, Pagination, Query, Single
from gitlab_api.models import AccessLevel, Group, Member, Project

logger = logging.getLogger(__name__)

GROUPS_URL = "/groups"
MEMBERS_URL = "/members"


class GroupsMixin(BaseClientMixin):
    """Mixin for group operations."""

    def get_group(self, group_id: int | str) -> Group:
        """Get a group by numeric ID or full path."""
        return self.retrieve().to(f"{GROUPS_URL}/{self._encode_path(str(group_id))}", Single(Group))

    def get_groups(self) -> list[Group]:
        """Get all groups visible to the token."""
        return self.get_groups_via_sudo(None, Pagination().with_per_page(MAX_ITEMS_PER_PAGE))

    def get_groups_via_sudo(self, username: str | None, pagination: Pagination | None = None) -> list[Group]:
        """Get all groups visible to ``username`` (admin tokens only when set)."""
        query = Query().append_if(PARAM_SUDO, username)
        if pagination is not None:
            query.merge_with(pagination.as_query())
        return self.retrieve().get_all(GROUPS_URL + query.render(), Collection(Group))

    def get_group_projects(self, group_id: int) -> list[Project]:
        return self.retrieve().get_all(f"{GROUPS_URL}/{group_id}/projects{MAX_PER_PAGE_QUERY}", Collection(Project))

    def get_group_members(self, group_id: int) -> list[Member]:
        return self.retrieve().get_all(f"{GROUPS_URL}/{group_id}{MEMBERS_URL}{MAX_PER_PAGE_QUERY}", Collection(Member))

    def create_group(
        self,
        name: str,
        path: str | None = None,
        description: str | None = None,
        visibility: str | None = None,
        parent_id: int | None = None,
        ldap_cn: str | None = None,
        ldap_access: AccessLevel | None = None,
        lfs_enabled: bool | None = None,
        request_access_enabled: bool | None = None,
        share_with_group_lock: bool | None = None,
        sudo_user_id: int | None = None,
    ) -> Group:
        """Create a group.

        Args:
            name: Group name
            path: URL path of the group (defaults to ``name``)
            description: Group description
            visibility: "private", "internal" or "public"
            parent_id: Parent group ID for subgroups
            ldap_cn: LDAP group common name to sync with
            ldap_access: Access level granted to LDAP members
            lfs_enabled: Enable Git LFS for the group's projects
            request_access_enabled: Allow users to request access
            share_with_group_lock: Prevent sharing projects with other groups
            sudo_user_id: Create the group on behalf of this user

        Returns:
            The created group
        """
        query = (
            Query()
            .append("name", name)
            .append("path", path if path is not None else name)
            .append_if("description", description)
            .append_if("visibility", visibility)
            .append_if("parent_id", parent_id)
            .append_if("ldap_cn", ldap_cn)
            .append_if("ldap_access", ldap_access)
            .append_if("lfs_enabled", lfs_enabled)
            .append_if("request_access_enabled", request_access_enabled)
            .append_if("share_with_group_lock", share_with_group_lock)
            .append_if(PARAM_SUDO, sudo_user_id)
        )
        logger.info(f"Creating group '{name}'")
        return self.dispatch().to(GROUPS_URL + query.render(), Single(Group))

    def add_group_member(self, group_id: int, user_id: int, access_level: AccessLevel) -> Member:
        query = Query().append("id", group_id).append("user_id", user_id).append("access_level", access_level)
        logger.info(f"Adding user {user_id} to group {group_id} as {access_level.name}")
        return self.dispatch().to(f"{GROUPS_URL}/{group_id}{MEMBERS_URL}{query.render()}", Single(Member))

    def delete_group_member(self, group_id: int, user_id: int) -> None:
        logger.info(f"Removing user {user_id} from group {group_id}")
        self.retrieve().method("DELETE").to(f"{GROUPS_URL}/{group_id}{MEMBERS_URL}/{user_id}", Discard())

    def delete_group(self, group_id: int) -> None:
        logger.info(f"Deleting group {group_id}")
        self.retrieve().method("DELETE").to(f"{GROUPS_URL}/{group_id}", Discard())
