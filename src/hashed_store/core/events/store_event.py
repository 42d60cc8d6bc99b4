"""Base store event.

Following maximum separation architecture - one file = one purpose.
"""

import uuid
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, ClassVar, Dict

from ..exceptions.base import HashedStoreError
from .event_kind import StoreEventKind


@dataclass(frozen=True)
class StoreEvent:
    """Base class for store events.

    Subclasses declare their payload fields and bind ``kind``. Identity and
    timestamp are keyword-only so payload fields stay positional.
    """

    kind: ClassVar[StoreEventKind]

    event_id: str = field(default_factory=lambda: str(uuid.uuid4()), kw_only=True)
    timestamp: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc),
        kw_only=True,
        compare=False
    )

    def get_event_type(self) -> str:
        """Get event type identifier."""
        return self.kind.value

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization.

        Opaque payloads (objects, hashes) are rendered with ``repr``. Package
        errors keep their code and details, other errors are rendered with ``str``.
        """
        data: Dict[str, Any] = {
            "event_type": self.get_event_type(),
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
        }
        for item in fields(self):
            if item.name in ("event_id", "timestamp"):
                continue
            value = getattr(self, item.name)
            if isinstance(value, HashedStoreError):
                data[item.name] = value.to_dict()
            elif isinstance(value, BaseException):
                data[item.name] = str(value)
            elif value is None or isinstance(value, (str, int, float, bool)):
                data[item.name] = value
            else:
                data[item.name] = repr(value)
        return data
