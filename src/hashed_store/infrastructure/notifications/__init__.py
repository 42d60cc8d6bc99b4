"""Store notification delivery."""

from .notification_channel import NotificationChannel

__all__ = [
    "NotificationChannel",
]
