"""Hashed store domain entities.

Objects served by the bundled GitLab backends.
"""

from .group import Group
from .archive import Archive

__all__ = [
    "Group",
    "Archive",
]
