"""Interface for sending signed requests to the provider.

Defines the contract the service façades depend on; the concrete HTTP
client lives in the infrastructure layer.
"""

import abc
from typing import Union

from aliquery.domain.errors import ResponseParseError, TransportFailure
from aliquery.domain.models.common import JsonValue
from aliquery.domain.models.result import Result

TransportResult = Result[JsonValue, Union[TransportFailure, ResponseParseError]]


class Transport(abc.ABC):
    """Abstract Base Class for a single synchronous GET round trip."""

    @abc.abstractmethod
    def get(self, uri: str) -> TransportResult:
        """Issues one GET against a signed URI.

        Args:
            uri: The fully signed request URI.

        Returns:
            `Ok` with the parsed JSON body on HTTP 200. `Err` with a
            `TransportFailure` (non-200 or network failure) or a
            `ResponseParseError` (200 with a malformed body).
        """
        pass
