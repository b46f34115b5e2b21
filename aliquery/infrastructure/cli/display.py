import json
from typing import Any, Optional

from rich.box import HEAVY, ROUNDED
from rich.console import Console, Group
from rich.json import JSON
from rich.panel import Panel
from rich.text import Text

from aliquery.domain.interfaces.user_interface import UserInterface
from aliquery.domain.models.common import JsonValue


class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Optional[Console] = None):
        self._console = console or Console()

    @property
    def console(self) -> Console:
        """Get the Rich console instance for direct operations."""
        return self._console

    @console.setter
    def console(self, value: Console) -> None:
        self._console = value

    def display_response(self, response: JsonValue, **kwargs: Any) -> None:
        """Pretty-prints a JSON response inside a panel.

        Args:
            response: The decoded JSON body.
            **kwargs: `title` for the panel (default: "Response").
        """
        title = kwargs.get("title", "Response")
        panel = Panel(
            JSON(json.dumps(response, ensure_ascii=False)),
            title=f"[bold green]{title}[/bold green]",
            border_style="green",
            box=ROUNDED,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_uri(self, uri: str, **kwargs: Any) -> None:
        """Prints a signed URI unwrapped and unstyled so it can be copied verbatim."""
        self.console.print(uri, soft_wrap=True, markup=False, highlight=False)

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message in a distinct style.

        Args:
            error_message: The error message to display.
            **kwargs: `detail`, e.g. the raw response body, shown below the message.
        """
        detail = kwargs.get("detail")
        body = Text(error_message, style="white")
        if detail:
            body = Group(body, Text(str(detail), style="dim"))
        panel = Panel(
            body,
            title="[bold red]Error[/bold red]",
            border_style="red",
            box=HEAVY,
            padding=(0, 1)
        )
        self.console.print(panel)
