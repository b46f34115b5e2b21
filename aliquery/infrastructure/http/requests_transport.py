"""Concrete implementation of the Transport interface using `requests`.

Issues exactly one GET per call: no retries, no session reuse, and the
client library's default timeout.
"""

import logging
from typing import Optional

import requests

from aliquery.domain.errors import RequestFailed, ResponseParseError, TransportFailure
from aliquery.domain.interfaces.diagnostics import DiagnosticSink, NullDiagnosticSink
from aliquery.domain.interfaces.transport import Transport, TransportResult
from aliquery.domain.models.result import Err, Ok


class RequestsTransport(Transport):
    """Sends signed URIs with `requests.get` and decodes JSON bodies."""

    def __init__(self, diagnostics: Optional[DiagnosticSink] = None):
        self.diagnostics = diagnostics or NullDiagnosticSink()

    def get(self, uri: str) -> TransportResult:
        try:
            response = requests.get(uri)
        except requests.RequestException as e:
            self.diagnostics.record(logging.ERROR, f"Failed to request with URL: {uri} ({type(e).__name__}: {e})")
            failure = TransportFailure(f"Network error requesting {uri}: {e}", uri=uri)
            failure.__cause__ = e
            return Err(failure)

        body = response.text
        if response.status_code != 200:
            self.diagnostics.record(logging.ERROR, f"Failed to request with URL: {uri} (HTTP {response.status_code})")
            self.diagnostics.record(logging.DEBUG, body)
            return Err(RequestFailed(status=response.status_code, uri=uri, body=body))

        self.diagnostics.record(logging.DEBUG, body)
        try:
            return Ok(response.json())
        except ValueError as e:
            self.diagnostics.record(logging.ERROR, f"Malformed JSON from URL: {uri}")
            error = ResponseParseError(uri=uri, body=body)
            error.__cause__ = e
            return Err(error)
