"""Interface for presenting results to the user.

Defines the contract for displaying responses, signed URIs and errors,
allowing different UI implementations (e.g., console, tests).
"""

import abc
from typing import Any

from aliquery.domain.models.common import JsonValue


class UserInterface(abc.ABC):
    """Abstract Base Class for user-facing output."""

    @abc.abstractmethod
    def display_response(self, response: JsonValue, **kwargs: Any) -> None:
        """Displays a parsed JSON response.

        Args:
            response: The decoded JSON body returned by the provider.
            **kwargs: Additional arguments for formatting (e.g., title).
        """
        pass

    @abc.abstractmethod
    def display_uri(self, uri: str, **kwargs: Any) -> None:
        """Displays a signed request URI."""
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message to the user.

        Args:
            error_message: The error message string.
            **kwargs: Additional arguments, e.g. `detail` for a raw body.
        """
        pass
