"""Label and milestone client mixin."""

import datetime
import logging

from gitlab_api.client.base import BaseClientMixin
from gitlab_api.http import Collection, Discard, Query, Single
from gitlab_api.models import Label, Milestone

logger = logging.getLogger(__name__)


class LabelsMixin(BaseClientMixin):
    """Mixin for label and milestone operations."""

    def get_labels(self, project_id: str | int) -> list[Label]:
        return self.retrieve().to(f"{self._project_url(project_id)}/labels", Collection(Label))

    def create_label(self, project_id: str | int, name: str, color: str, description: str | None = None) -> Label:
        """Create a label; ``color`` is a ``#RRGGBB`` string or CSS color name."""
        logger.info(f"Creating label '{name}' in project {project_id}")
        return (
            self.dispatch()
            .with_field("name", name)
            .with_field("color", color)
            .with_field("description", description)
            .to(f"{self._project_url(project_id)}/labels", Single(Label))
        )

    def update_label(
        self, project_id: str | int, name: str, new_name: str | None = None, new_color: str | None = None
    ) -> Label:
        logger.info(f"Updating label '{name}' in project {project_id}")
        return (
            self.retrieve()
            .method("PUT")
            .with_field("name", name)
            .with_field("new_name", new_name)
            .with_field("color", new_color)
            .to(f"{self._project_url(project_id)}/labels", Single(Label))
        )

    def delete_label(self, project_id: str | int, name: str) -> None:
        query = Query().append("name", name)
        logger.info(f"Deleting label '{name}' in project {project_id}")
        self.retrieve().method("DELETE").to(f"{self._project_url(project_id)}/labels{query.render()}", Discard())

    def get_milestones(self, project_id: str | int) -> list[Milestone]:
        return self.retrieve().to(f"{self._project_url(project_id)}/milestones", Collection(Milestone))

    def create_milestone(
        self,
        project_id: str | int,
        title: str,
        description: str | None = None,
        due_date: datetime.date | None = None,
    ) -> Milestone:
        logger.info(f"Creating milestone '{title}' in project {project_id}")
        return (
            self.dispatch()
            .with_field("title", title)
            .with_field("description", description)
            .with_field("due_date", due_date)
            .to(f"{self._project_url(project_id)}/milestones", Single(Milestone))
        )

    def update_milestone(
        self,
        project_id: str | int,
        milestone_id: int,
        title: str | None = None,
        description: str | None = None,
        due_date: datetime.date | None = None,
        state_event: str | None = None,
    ) -> Milestone:
        """Update a milestone; ``state_event`` is "close" or "activate"."""
        logger.info(f"Updating milestone {milestone_id} in project {project_id}")
        return (
            self.retrieve()
            .method("PUT")
            .with_field("title", title)
            .with_field("description", description)
            .with_field("due_date", due_date)
            .with_field("state_event", state_event)
            .to(f"{self._project_url(project_id)}/milestones/{milestone_id}", Single(Milestone))
        )
