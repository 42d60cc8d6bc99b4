"""GitLab group backend.

Serves GitLab groups as ``Group`` objects keyed by their full path.
"""

import logging
from typing import List, Optional

from ...config.settings import HashedStoreSettings, get_settings
from ...core.entities import Group
from ...core.protocols.store_backend import HashedStoreBackend
from .gitlab_client import GitLabClient, encode_path

logger = logging.getLogger(__name__)


class GitLabGroupBackend(HashedStoreBackend[Group, str, str]):
    """Backend listing and fetching GitLab groups.

    GitLab exposes no cheap fingerprint for a group, so both hash methods
    return None and a store over this backend refetches groups on every
    access.
    """

    def __init__(self, client: GitLabClient, per_page: int = 100, max_pages: int = 10):
        self.client = client
        self.per_page = per_page
        self.max_pages = max_pages

    @classmethod
    def from_settings(cls, settings: Optional[HashedStoreSettings] = None) -> "GitLabGroupBackend":
        """Create backend and its client from settings."""
        settings = settings or get_settings()
        return cls(
            GitLabClient.from_settings(settings),
            per_page=settings.gitlab_per_page,
            max_pages=settings.gitlab_max_pages
        )

    async def fetch_object_hash(self, name: str) -> Optional[str]:
        return None

    def get_object_hash(self, obj: Group) -> Optional[str]:
        return None

    async def fetch_object_names(self) -> List[str]:
        groups = await self.client.get_paginated(
            "/groups",
            per_page=self.per_page,
            max_pages=self.max_pages
        )
        return [group["full_path"] for group in groups]

    async def fetch_object(self, name: str) -> Group:
        group = await self.client.get_json(f"/groups/{encode_path(name)}", name=name)
        projects = await self.client.get_paginated(
            f"/groups/{group['id']}/projects",
            per_page=self.per_page,
            max_pages=self.max_pages
        )

        logger.debug(f"Fetched group {name} with {len(projects)} projects")
        return Group(
            group_id=group["full_path"],
            archives=[project["path_with_namespace"] for project in projects]
        )

    async def aclose(self) -> None:
        await self.client.aclose()
