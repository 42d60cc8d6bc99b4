"""Unknown event kind exception.

ONLY subscription key errors - raised when a handler is registered for an
event kind outside the store's fixed taxonomy.
"""

from typing import Any

from .base import HashedStoreError


class UnknownEventKind(HashedStoreError, ValueError):
    """Event kind is not part of the store event taxonomy."""

    def __init__(self, kind: Any):
        self.kind = kind
        super().__init__(
            f"Unknown event kind: {kind!r}",
            error_code="UNKNOWN_EVENT_KIND",
            details={"kind": str(kind)}
        )
