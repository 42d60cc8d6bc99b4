"""Hashed store infrastructure layer.

Notification delivery and the bundled GitLab backends.
"""

from .notifications import NotificationChannel
from .backends import GitLabClient, GitLabGroupBackend, GitLabArchiveBackend

__all__ = [
    "NotificationChannel",
    "GitLabClient",
    "GitLabGroupBackend",
    "GitLabArchiveBackend",
]
