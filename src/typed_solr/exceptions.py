"""
Exceptions raised by the SOLR client.

Every failure surfaces as a subclass of :class:`SOLRClientError`. Nothing is
retried or swallowed internally; retry policy belongs to the caller.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .models import ErrorInfo


class SOLRClientError(Exception):
    """Base exception for SOLR client errors."""

    pass


class SOLRConfigurationError(SOLRClientError):
    """Raised when the client is pointed at an invalid URL or a missing core."""

    pass


class SOLRTransportError(SOLRClientError):
    """
    Raised when a request to SOLR fails.

    Covers connection failures, timeouts and non-2xx responses. For HTTP
    errors the status code and raw body are kept, along with SOLR's own
    ``error`` block when the body carried one.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[bytes] = None,
        error: Optional["ErrorInfo"] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.error = error


class SOLRDecodeError(SOLRClientError):
    """Raised when a SOLR response cannot be decoded into the requested types."""

    pass
