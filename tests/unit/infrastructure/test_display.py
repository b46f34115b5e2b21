import io

import pytest
from unittest.mock import MagicMock
from rich.console import Console

from aliquery.infrastructure.cli.display import ConsoleDisplay


@pytest.fixture
def mock_console():
    """Fixture to create a mock rich Console object."""
    return MagicMock()


@pytest.fixture
def console_display(mock_console: MagicMock):
    """Fixture to create a ConsoleDisplay instance with a mocked console."""
    display = ConsoleDisplay()
    display.console = mock_console  # Inject the mock
    return display


@pytest.fixture
def recorded_display():
    buffer = io.StringIO()
    return ConsoleDisplay(console=Console(file=buffer, width=120, color_system=None)), buffer


def test_display_uri_prints_verbatim(console_display: ConsoleDisplay, mock_console: MagicMock):
    uri = "http://x/?Signature=a%2Bb&Action=SendSms"
    console_display.display_uri(uri)
    mock_console.print.assert_called_once_with(uri, soft_wrap=True, markup=False, highlight=False)


def test_display_response_renders_json(recorded_display):
    display, buffer = recorded_display
    display.display_response({"Code": "OK", "BizId": "900619746936498440^0"}, title="SendSms")
    output = buffer.getvalue()
    assert "SendSms" in output
    assert '"BizId"' in output
    assert "900619746936498440^0" in output


def test_display_error_includes_detail(recorded_display):
    display, buffer = recorded_display
    display.display_error("SendSms failed (500)", detail="boom")
    output = buffer.getvalue()
    assert "Error" in output
    assert "SendSms failed (500)" in output
    assert "boom" in output
