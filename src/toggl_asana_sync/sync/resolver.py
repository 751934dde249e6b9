"""Resolution of Toggl tasks to their linked Asana tasks."""

import logging

from toggl_asana_sync.sync.cache import RunCache
from toggl_asana_sync.toggl import LinkedTask, TogglClient

logger = logging.getLogger(__name__)


class TaskResolver:
    """Looks up Toggl task details once per task per run."""

    def __init__(self, toggl_client: TogglClient, cache: RunCache[str, LinkedTask]) -> None:
        """Initialize task resolver.

        Args:
            toggl_client: Toggl API client.
            cache: Run-scoped cache keyed by Toggl task ID.
        """
        self.toggl = toggl_client
        self.cache = cache

    def resolve(self, project_id: str | None, task_id: str) -> LinkedTask:
        """Resolve a Toggl task to its integration link.

        Args:
            project_id: Toggl project ID the task belongs to.
            task_id: Toggl task ID.

        Returns:
            Linked task descriptor.

        Raises:
            RemoteFetchError: If the Toggl API returns a non-success response.
        """
        def fetch() -> LinkedTask:
            logger.debug(f"Fetching Toggl task {task_id} (project {project_id})")
            return self.toggl.get_task(project_id, task_id)

        return self.cache.get_or_fetch(task_id, fetch)
