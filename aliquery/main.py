"""Main entry point for the aliquery application.

Sets up the Typer CLI application, performs dependency injection (Composition
Root), defines CLI commands, and delegates execution to the CommandHandler.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

import typer
from typing_extensions import Annotated

from aliquery.core.command_handler import CommandHandler
from aliquery.core.services.domain_service import create_domain_service
from aliquery.core.services.sms_service import create_sms_service
from aliquery.domain.errors import ConfigurationError
from aliquery.infrastructure.cli.display import ConsoleDisplay
from aliquery.infrastructure.config.settings import get_config, get_credential, get_sms_defaults, load_configuration
from aliquery.infrastructure.http.requests_transport import RequestsTransport
from aliquery.infrastructure.monitoring.logger_setup import LoggingDiagnosticSink, setup_logging

logger = logging.getLogger(__name__)

# --- Dependency Injection Container (Manual) ---

_dependencies: Optional[Dict[str, Any]] = None


def create_dependencies(verbose: bool = False) -> Dict[str, Any]:
    """Creates and wires up all dependencies for the application.

    This acts as the Composition Root.
    """
    dependencies: Dict[str, Any] = {'ui': ConsoleDisplay()}

    # 1. Configuration first, then logging based on it
    load_configuration()
    log_level_name = "DEBUG" if verbose else str(get_config('logging.level', 'WARNING')).upper()
    setup_logging(
        log_level=getattr(logging, log_level_name, logging.WARNING),
        log_file=get_config('logging.file'),
        log_format=get_config('logging.format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s'),
    )

    # 2. Infrastructure adapters
    diagnostics = LoggingDiagnosticSink()
    transport = RequestsTransport(diagnostics=diagnostics)
    credential = get_credential()
    logger.debug(f"Using credential {credential!r}")

    # 3. Façades, each with its own assembler
    sms_defaults = get_sms_defaults()
    dependencies['sms_service'] = create_sms_service(
        credential,
        transport,
        template_code=sms_defaults['template_code'],
        sign_name=sms_defaults['sign_name'],
        diagnostics=diagnostics,
    )
    dependencies['domain_service'] = create_domain_service(credential, transport, diagnostics=diagnostics)

    # 4. Command handler
    dependencies['command_handler'] = CommandHandler(
        sms_service=dependencies['sms_service'],
        domain_service=dependencies['domain_service'],
        ui=dependencies['ui'],
    )
    logger.debug("All dependencies initialized successfully.")
    return dependencies


def get_handler() -> CommandHandler:
    """Returns the wired CommandHandler, exiting with an error if it cannot be built."""
    global _dependencies
    if _dependencies is None:
        try:
            _dependencies = create_dependencies(verbose=_state["verbose"])
        except ConfigurationError as e:
            ConsoleDisplay().display_error(str(e))
            raise typer.Exit(code=1)
    return _dependencies['command_handler']


def finish(exit_code: int) -> None:
    if exit_code:
        raise typer.Exit(code=exit_code)


def parse_params(pairs: Optional[List[str]]) -> Dict[str, str]:
    """Parses repeated `Key=Value` options into a dict."""
    params: Dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected Key=Value, got '{pair}'")
        params[key] = value
    return params

# --- Typer App Definition ---

_state = {"verbose": False}

app = typer.Typer(
    name="aliquery",
    help="aliquery: signed-query client for the SMS and Domain APIs.",
    add_completion=False,
)
sms_app = typer.Typer(help="Send SMS and query delivery details.")
domain_app = typer.Typer(help="Check, order and track domains.")
app.add_typer(sms_app, name="sms")
app.add_typer(domain_app, name="domain")

ParamOption = Annotated[
    Optional[List[str]],
    typer.Option("--param", "-P", help="Parameter as Key=Value. Repeatable.")
]
PageNumOption = Annotated[int, typer.Option("--page", help="1-based page number.")]
PageSizeOption = Annotated[int, typer.Option("--page-size", help="Results per page.")]


@app.callback()
def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log signed URIs and raw responses.")] = False,
):
    """Signed-query client for the SMS and Domain APIs."""
    _state["verbose"] = verbose


@app.command()
def presign(
    service: Annotated[str, typer.Argument(help="API family: 'sms' or 'domain'.")],
    action: Annotated[str, typer.Argument(help="Action name, e.g. 'SendSms'.")],
    param: ParamOption = None,
):
    """Print the signed URI for an action without sending it."""
    finish(get_handler().handle_presign(service, action, parse_params(param)))

# --- SMS Commands ---

@sms_app.command("send")
def sms_send(
    phone_numbers: Annotated[List[str], typer.Argument(help="Receiving phone numbers.")],
    param: ParamOption = None,
    template: Annotated[Optional[str], typer.Option("--template", "-t", help="Template code. Defaults to sms.template_code.")] = None,
    sign_name: Annotated[Optional[str], typer.Option("--sign-name", "-s", help="Signature name. Defaults to sms.sign_name.")] = None,
):
    """Send a templated SMS; --param values fill the template variables."""
    template_param = parse_params(param) or None
    finish(get_handler().handle_sms_send(phone_numbers, template_param, template, sign_name))


@sms_app.command("query")
def sms_query(
    phone_number: Annotated[str, typer.Argument(help="Receiving phone number.")],
    send_date: Annotated[Optional[str], typer.Option("--date", "-d", help="Send date as yyyyMMdd. Defaults to today.")] = None,
    biz_id: Annotated[Optional[str], typer.Option("--biz-id", help="Receipt id returned by 'sms send'.")] = None,
    page_size: PageSizeOption = 10,
    page: PageNumOption = 1,
):
    """Query delivery details for a phone number."""
    finish(get_handler().handle_sms_query(phone_number, send_date or date.today(), biz_id, page_size, page))

# --- Domain Commands ---

@domain_app.command("check")
def domain_check(
    domain_name: Annotated[str, typer.Argument(help="Domain to check, e.g. example.com.")],
    fee_command: Annotated[str, typer.Option("--fee-command", help="create, renew, transfer or restore.")] = "create",
    currency: Annotated[str, typer.Option("--currency", help="CNY or USD.")] = "CNY",
    years: Annotated[int, typer.Option("--years", help="Fee period in years.")] = 1,
):
    """Check whether a domain can be registered."""
    finish(get_handler().handle_domain_check(domain_name, fee_command, currency, years))


@domain_app.command("list")
def domain_list(page: PageNumOption = 1, page_size: PageSizeOption = 100):
    """List the account's domains."""
    finish(get_handler().handle_domain_list(page, page_size))


@domain_app.command("profiles")
def domain_profiles():
    """List registrant profiles."""
    finish(get_handler().handle_registrant_profiles())


@domain_app.command("order")
def domain_order(
    domain_name: Annotated[str, typer.Argument(help="Domain to register.")],
    profile_id: Annotated[Optional[str], typer.Option("--profile-id", help="Registrant profile. Defaults to the account default.")] = None,
    years: Annotated[int, typer.Option("--years", help="Subscription duration in years.")] = 1,
):
    """Order registration of a domain."""
    finish(get_handler().handle_create_order(domain_name, profile_id, years))


@domain_app.command("tasks")
def domain_tasks(page: PageNumOption = 1, page_size: PageSizeOption = 100):
    """List domain tasks."""
    finish(get_handler().handle_task_list(page, page_size))


@domain_app.command("task-detail")
def domain_task_detail(
    task_no: Annotated[str, typer.Argument(help="Task number, e.g. from 'domain order'.")],
    page: PageNumOption = 1,
    page_size: PageSizeOption = 100,
):
    """Show per-domain details of a task."""
    finish(get_handler().handle_task_detail(task_no, page, page_size))

# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()


if __name__ == "__main__":
    cli_entry_point()
