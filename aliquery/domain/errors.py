"""Error types raised or returned by aliquery.

Errors from the request pipeline are carried inside `Err` result values by the
transport and the service façades; encoding, signing and parameter-shaping
errors indicate a caller bug and are raised directly.
"""

from typing import Optional


class AliqueryError(Exception):
    """Base class for every aliquery error."""


class EncodingError(AliqueryError):
    """A parameter name or value cannot be represented as a query string."""


class SigningFailure(AliqueryError):
    """The HMAC primitive is unavailable or rejected its inputs. Not retryable."""


class ParameterError(AliqueryError, ValueError):
    """An action was called with a missing or unknown parameter."""


class ConfigurationError(AliqueryError):
    """Required configuration (e.g. credentials) could not be found."""


class TransportFailure(AliqueryError):
    """The request did not produce an HTTP 200 response.

    Attributes:
        status: HTTP status code, or None when no response was received.
        uri: The signed URI that was requested.
        body: Raw response body, or None when no response was received.
    """

    def __init__(self, message: str, uri: str, status: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.uri = uri
        self.status = status
        self.body = body


class RequestFailed(TransportFailure):
    """The provider answered with a non-200 status."""

    def __init__(self, status: int, uri: str, body: str):
        super().__init__(f"Request failed with HTTP {status}: {uri}", uri=uri, status=status, body=body)


class ResponseParseError(AliqueryError):
    """The provider answered 200 but the body is not valid JSON."""

    def __init__(self, uri: str, body: str):
        super().__init__(f"Response body is not valid JSON: {uri}")
        self.uri = uri
        self.body = body


class ProfileResolutionError(AliqueryError):
    """No registrant profile could be resolved for a domain order."""
