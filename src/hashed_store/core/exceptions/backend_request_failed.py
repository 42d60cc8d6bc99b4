"""Backend request failure exception.

ONLY remote request errors - raised by the bundled backends when the remote
service answers with an error status or cannot be reached.
"""

from typing import Any, Dict, Optional

from .base import HashedStoreError


class BackendRequestFailed(HashedStoreError):
    """Remote backend request failed.

    Raised for:
    - Non-success HTTP status codes
    - Transport errors (DNS, connection refused, timeouts)
    - Responses that cannot be decoded
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.url = url
        self.status_code = status_code
        merged = {"url": url, "status_code": status_code}
        merged.update(details or {})
        super().__init__(
            message,
            error_code=error_code or "BACKEND_REQUEST_FAILED",
            details=merged
        )
