"""Base exception for hashed-store.

All exceptions raised by the package itself inherit from HashedStoreError and
carry an error code and structured details. Errors raised by a backend pass
through the store unchanged.
"""

from typing import Any, Dict, Optional


class HashedStoreError(Exception):
    """Base exception for all hashed-store errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args
    ):
        super().__init__(message, *args)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "code": self.error_code,
            "message": self.message,
            "details": self.details,
            "type": self.__class__.__name__,
        }
