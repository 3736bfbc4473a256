"""User and SSH key client mixin."""

import logging

from gitlab_api.client.base import PARAM_SUDO, BaseClientMixin
from gitlab_api.http import MAX_PER_PAGE_QUERY, Collection, Discard, Query, Single
from gitlab_api.models import Session, SSHKey, User

logger = logging.getLogger(__name__)

USERS_URL = "/users"
USER_URL = "/user"
KEYS_URL = "/keys"


class UsersMixin(BaseClientMixin):
    """Mixin for user operations."""

    def get_users(self) -> list[User]:
        """Get all users visible to the token."""
        return self.retrieve().get_all(USERS_URL + MAX_PER_PAGE_QUERY, Collection(User))

    def find_users(self, email_or_username: str | None) -> list[User]:
        """Find users by a portion of their email address or username.

        Returns an empty list without calling GitLab when the search term is empty.
        """
        if not email_or_username:
            return []
        query = Query().append("search", email_or_username)
        return self.retrieve().to(USERS_URL + query.render(), Collection(User))

    def get_user(self) -> User:
        """Get the user the token belongs to."""
        return self.retrieve().to(USER_URL, Single(User))

    def get_current_session(self) -> Session:
        """Get the authenticated user as a session object."""
        return self.retrieve().to(USER_URL, Single(Session))

    def get_user_by_id(self, user_id: int) -> User:
        return self.retrieve().to(f"{USERS_URL}/{user_id}", Single(User))

    def get_user_via_sudo(self, username: str) -> User:
        """Get a user by impersonating them (admin tokens only)."""
        query = Query().append(PARAM_SUDO, username)
        return self.retrieve().to(USER_URL + query.render(), Single(User))

    def create_user(
        self,
        email: str,
        password: str | None = None,
        username: str | None = None,
        full_name: str | None = None,
        skype_id: str | None = None,
        linkedin: str | None = None,
        twitter: str | None = None,
        website_url: str | None = None,
        projects_limit: int | None = None,
        extern_uid: str | None = None,
        extern_provider_name: str | None = None,
        bio: str | None = None,
        is_admin: bool | None = None,
        can_create_group: bool | None = None,
        skip_confirmation: bool | None = None,
    ) -> User:
        """Create a new user (admin only).

        Optional arguments left as None are not sent, so GitLab applies its
        own defaults. ``skip_confirmation`` maps onto GitLab's inverted
        ``confirm`` flag and is only sent when given.

        Returns:
            The created user
        """
        confirm = None if skip_confirmation is None else not skip_confirmation
        query = (
            Query()
            .append("email", email)
            .append_if("confirm", confirm)
            .append_if("password", password)
            .append_if("username", username)
            .append_if("name", full_name)
            .append_if("skype", skype_id)
            .append_if("linkedin", linkedin)
            .append_if("twitter", twitter)
            .append_if("website_url", website_url)
            .append_if("projects_limit", projects_limit)
            .append_if("extern_uid", extern_uid)
            .append_if("provider", extern_provider_name)
            .append_if("bio", bio)
            .append_if("admin", is_admin)
            .append_if("can_create_group", can_create_group)
        )
        logger.info(f"Creating user {username or email}")
        return self.dispatch().to(USERS_URL + query.render(), Single(User))

    def update_user(
        self,
        user_id: int,
        email: str,
        password: str | None = None,
        username: str | None = None,
        full_name: str | None = None,
        skype_id: str | None = None,
        linkedin: str | None = None,
        twitter: str | None = None,
        website_url: str | None = None,
        projects_limit: int | None = None,
        extern_uid: str | None = None,
        extern_provider_name: str | None = None,
        bio: str | None = None,
        is_admin: bool | None = None,
        can_create_group: bool | None = None,
    ) -> User:
        """Update a user (admin only); None arguments are left unchanged."""
        query = (
            Query()
            .append("email", email)
            .append_if("password", password)
            .append_if("username", username)
            .append_if("name", full_name)
            .append_if("skype", skype_id)
            .append_if("linkedin", linkedin)
            .append_if("twitter", twitter)
            .append_if("website_url", website_url)
            .append_if("projects_limit", projects_limit)
            .append_if("extern_uid", extern_uid)
            .append_if("provider", extern_provider_name)
            .append_if("bio", bio)
            .append_if("admin", is_admin)
            .append_if("can_create_group", can_create_group)
        )
        logger.info(f"Updating user {user_id}")
        return self.retrieve().method("PUT").to(f"{USERS_URL}/{user_id}{query.render()}", Single(User))

    def block_user(self, user_id: int) -> None:
        logger.info(f"Blocking user {user_id}")
        self.dispatch().to(f"{USERS_URL}/{user_id}/block", Discard())

    def unblock_user(self, user_id: int) -> None:
        logger.info(f"Unblocking user {user_id}")
        self.dispatch().to(f"{USERS_URL}/{user_id}/unblock", Discard())

    def delete_user(self, user_id: int) -> None:
        logger.info(f"Deleting user {user_id}")
        self.retrieve().method("DELETE").to(f"{USERS_URL}/{user_id}", Discard())

    def get_ssh_keys(self, user_id: int) -> list[SSHKey]:
        return self.retrieve().to(f"{USERS_URL}/{user_id}{KEYS_URL}", Collection(SSHKey))

    def get_ssh_key(self, key_id: int) -> SSHKey:
        """Get an SSH key, including the user it belongs to."""
        return self.retrieve().to(f"{KEYS_URL}/{key_id}", Single(SSHKey))

    def create_ssh_key(self, user_id: int, title: str, key: str) -> SSHKey:
        query = Query().append("title", title).append("key", key)
        logger.info(f"Adding SSH key '{title}' for user {user_id}")
        return self.dispatch().to(f"{USERS_URL}/{user_id}{KEYS_URL}{query.render()}", Single(SSHKey))

    def delete_ssh_key(self, user_id: int, key_id: int) -> None:
        logger.info(f"Deleting SSH key {key_id} of user {user_id}")
        self.retrieve().method("DELETE").to(f"{USERS_URL}/{user_id}{KEYS_URL}/{key_id}", Discard())
