"""Bundled hashed store backends."""

from .gitlab_client import GitLabClient
from .gitlab_group_backend import GitLabGroupBackend
from .gitlab_archive_backend import GitLabArchiveBackend

__all__ = [
    "GitLabClient",
    "GitLabGroupBackend",
    "GitLabArchiveBackend",
]
