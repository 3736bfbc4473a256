"""System hook client mixin (admin only)."""

import logging

from gitlab_api.client.base import BaseClientMixin
from gitlab_api.http import Collection, Discard, Single
from gitlab_api.models import SystemHook

logger = logging.getLogger(__name__)

HOOKS_URL = "/hooks"


class SystemHooksMixin(BaseClientMixin):
    """Mixin for instance-wide system hooks."""

    def get_system_hooks(self) -> list[SystemHook]:
        return self.retrieve().to(HOOKS_URL, Collection(SystemHook))

    def add_system_hook(self, url: str, token: str | None = None) -> SystemHook:
        logger.info("Adding system hook")
        return self.dispatch().with_field("url", url).with_field("token", token).to(HOOKS_URL, Single(SystemHook))

    def test_system_hook(self, hook_id: int) -> None:
        """Trigger a test event for a system hook."""
        self.dispatch().to(f"{HOOKS_URL}/{hook_id}", Discard())

    def delete_system_hook(self, hook_id: int) -> None:
        logger.info(f"Deleting system hook {hook_id}")
        self.retrieve().method("DELETE").to(f"{HOOKS_URL}/{hook_id}", Discard())
