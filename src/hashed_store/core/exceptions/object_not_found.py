"""Object not found exception."""

from typing import Any, Optional

from .backend_request_failed import BackendRequestFailed


class ObjectNotFound(BackendRequestFailed):
    """The remote service has no object under the requested name.

    The store evicts a cached entry whose refetch fails this way, since the
    object no longer exists remotely.
    """

    def __init__(self, name: Any, url: Optional[str] = None):
        self.name = name
        super().__init__(
            f"Object not found: {name}",
            url=url,
            status_code=404,
            error_code="OBJECT_NOT_FOUND",
            details={"name": str(name)}
        )
