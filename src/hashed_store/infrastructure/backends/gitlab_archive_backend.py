"""GitLab archive backend.

Serves GitLab projects as ``Archive`` objects keyed by their namespaced path.
The project's ``last_activity_at`` timestamp is the archive hash: it is cheap
to read from the project endpoint and changes whenever refs are pushed.
"""

import logging
from typing import Any, Dict, List, Optional

from ...config.settings import HashedStoreSettings, get_settings
from ...core.entities import Archive
from ...core.protocols.store_backend import HashedStoreBackend
from .gitlab_client import GitLabClient, encode_path

logger = logging.getLogger(__name__)


class GitLabArchiveBackend(HashedStoreBackend[Archive, str, str]):
    """Backend listing and fetching GitLab projects as archives."""

    def __init__(
        self,
        client: GitLabClient,
        group: Optional[str] = None,
        per_page: int = 100,
        max_pages: int = 10
    ):
        """Initialize archive backend.

        Args:
            client: GitLab client
            group: Optional group full path limiting which projects are listed
            per_page: Page size for list endpoints
            max_pages: Maximum number of pages read from list endpoints
        """
        self.client = client
        self.group = group
        self.per_page = per_page
        self.max_pages = max_pages

    @classmethod
    def from_settings(
        cls,
        settings: Optional[HashedStoreSettings] = None,
        group: Optional[str] = None
    ) -> "GitLabArchiveBackend":
        """Create backend and its client from settings."""
        settings = settings or get_settings()
        return cls(
            GitLabClient.from_settings(settings),
            group=group,
            per_page=settings.gitlab_per_page,
            max_pages=settings.gitlab_max_pages
        )

    async def fetch_object_hash(self, name: str) -> Optional[str]:
        project = await self._get_project(name)
        return project.get("last_activity_at")

    def get_object_hash(self, obj: Archive) -> Optional[str]:
        return obj.last_update

    async def fetch_object_names(self) -> List[str]:
        if self.group:
            path = f"/groups/{encode_path(self.group)}/projects"
            params = {"include_subgroups": "true"}
        else:
            path = "/projects"
            params = {}

        projects = await self.client.get_paginated(
            path,
            params=params,
            per_page=self.per_page,
            max_pages=self.max_pages
        )
        return [project["path_with_namespace"] for project in projects]

    async def fetch_object(self, name: str) -> Archive:
        project = await self._get_project(name)
        project_id = project["id"]

        branches = await self.client.get_paginated(
            f"/projects/{project_id}/repository/branches",
            per_page=self.per_page,
            max_pages=self.max_pages
        )
        tags = await self.client.get_paginated(
            f"/projects/{project_id}/repository/tags",
            per_page=self.per_page,
            max_pages=self.max_pages
        )

        logger.debug(f"Fetched archive {name} with {len(branches)} branches and {len(tags)} tags")
        return Archive(
            archive_id=project["path_with_namespace"],
            last_update=project["last_activity_at"],
            group_id=project["namespace"]["full_path"],
            refs=[ref["name"] for ref in branches + tags]
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _get_project(self, name: str) -> Dict[str, Any]:
        return await self.client.get_json(f"/projects/{encode_path(name)}", name=name)
