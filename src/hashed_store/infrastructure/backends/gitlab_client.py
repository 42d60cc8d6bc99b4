"""
Async GitLab REST client used by the bundled backends.

Wraps httpx with the small subset of the GitLab v4 API the backends need and
maps HTTP failures onto the package exception hierarchy.
"""
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from ...config.settings import HashedStoreSettings
from ...core.exceptions import BackendRequestFailed, ObjectNotFound

logger = logging.getLogger(__name__)


def encode_path(path: str) -> str:
    """URL-encode a namespaced path for use as a GitLab resource id."""
    return quote(path, safe="")


class GitLabClient:
    """HTTP client for the GitLab v4 API using httpx."""

    def __init__(
        self,
        url: str,
        token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """Initialize GitLab client.

        Args:
            url: GitLab instance URL, without the ``/api/v4`` suffix
            token: Optional private token for authenticated requests
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used for testing)
        """
        self.base_url = f"{url.rstrip('/')}/api/v4"

        headers = {"Accept": "application/json"}
        if token:
            headers["PRIVATE-TOKEN"] = token

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=httpx.Timeout(timeout),
            transport=transport
        )

    @classmethod
    def from_settings(
        cls,
        settings: HashedStoreSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "GitLabClient":
        """Create client from settings."""
        return cls(
            url=settings.gitlab_url,
            token=settings.get_gitlab_token(),
            timeout=settings.request_timeout,
            transport=transport
        )

    async def get_json(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        name: Optional[Any] = None
    ) -> Any:
        """Perform GET request and decode the JSON body.

        Args:
            path: API path relative to ``/api/v4``
            params: Optional query parameters
            name: Object name reported by ObjectNotFound on 404

        Raises:
            ObjectNotFound: If GitLab answers 404
            BackendRequestFailed: On any other HTTP, transport or decoding error
        """
        url = f"{self.base_url}{path}"

        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            raise BackendRequestFailed(f"GitLab request failed: {e}", url=url) from e

        if response.status_code == 404:
            raise ObjectNotFound(name if name is not None else path, url=url)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise BackendRequestFailed(
                f"GitLab returned {response.status_code} for {path}",
                url=url,
                status_code=response.status_code
            ) from e

        try:
            return response.json()
        except ValueError as e:
            raise BackendRequestFailed(
                f"GitLab returned invalid JSON for {path}",
                url=url,
                status_code=response.status_code
            ) from e

    async def get_paginated(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        per_page: int = 100,
        max_pages: int = 10
    ) -> List[Dict[str, Any]]:
        """Collect items from an offset-paginated list endpoint.

        Stops at the first short page or after ``max_pages`` pages.
        """
        items: List[Dict[str, Any]] = []

        for page in range(1, max_pages + 1):
            page_params = dict(params or {})
            page_params.update({"per_page": per_page, "page": page})

            batch = await self.get_json(path, params=page_params)
            if not isinstance(batch, list):
                raise BackendRequestFailed(
                    f"GitLab returned a non-list page for {path}",
                    url=f"{self.base_url}{path}"
                )

            items.extend(batch)
            if len(batch) < per_page:
                break
        else:
            logger.debug(f"Stopped paginating {path} after {max_pages} pages")

        return items

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "GitLabClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
