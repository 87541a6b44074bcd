"""Error taxonomy for the proxy.

Every failure a request can hit maps to one of these, and each one knows
the status code and plain-text body it is answered with.
"""

from typing import Optional


class ProxyError(Exception):
    """Base error for a request the proxy refuses or cannot complete."""

    status_code: int = 500
    body: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message or self.body)
        if status_code is not None:
            self.status_code = status_code


class AccessDenied(ProxyError):
    """Access or routing prefix missing.

    Answered exactly like a missing page so the access gate is not revealed.
    """

    status_code = 404
    body = "404 Not Found"


class RouteUnmatched(ProxyError):
    """Path is under the routing prefix but matches no known shape."""

    status_code = 400
    body = "Bad Request"


class UpstreamMissing(ProxyError):
    """Release asset existence probe did not succeed."""

    status_code = 404
    body = "File not found"


class UpstreamFault(ProxyError):
    """Network-level failure talking to GitHub."""

    status_code = 500
    body = "Internal Server Error"
