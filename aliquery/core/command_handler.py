"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py), delegates the work to
the SMS and Domain façades and renders each `Result` through the injected
UserInterface. Every handler returns the process exit code.
"""

import logging
from datetime import date
from typing import Any, Dict, Iterable, Optional, Union

from aliquery.core.services.actions import DOMAIN_ACTIONS, SMS_ACTIONS
from aliquery.core.services.domain_service import DomainService
from aliquery.core.services.sms_service import SmsService
from aliquery.domain.errors import AliqueryError, ResponseParseError, TransportFailure
from aliquery.domain.interfaces.user_interface import UserInterface
from aliquery.domain.models.result import Result

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


class CommandHandler:
    """Handles incoming commands and delegates to the service façades."""

    def __init__(self, sms_service: SmsService, domain_service: DomainService, ui: UserInterface):
        self.sms_service = sms_service
        self.domain_service = domain_service
        self.ui = ui

    # --- SMS ---

    def handle_sms_send(
        self,
        phone_numbers: Iterable[str],
        template_param: Optional[Dict[str, Any]] = None,
        template_code: Optional[str] = None,
        sign_name: Optional[str] = None,
    ) -> int:
        return self._run(
            "SendSms",
            lambda: self.sms_service.send(
                list(phone_numbers),
                template_param,
                template_code=template_code,
                sign_name=sign_name,
            ),
        )

    def handle_sms_query(
        self,
        phone_number: str,
        send_date: Union[date, str],
        biz_id: Optional[str] = None,
        page_size: int = 10,
        current_page: int = 1,
    ) -> int:
        return self._run(
            "QuerySendDetails",
            lambda: self.sms_service.query_send_details(phone_number, send_date, biz_id, page_size, current_page),
        )

    # --- Domain ---

    def handle_domain_check(self, domain_name: str, fee_command: str = "create", fee_currency: str = "CNY", fee_period: int = 1) -> int:
        return self._run(
            "CheckDomain",
            lambda: self.domain_service.check_domain(domain_name, fee_command, fee_currency, fee_period),
        )

    def handle_domain_list(self, page_num: int = 1, page_size: int = 100) -> int:
        return self._run("QueryDomainList", lambda: self.domain_service.query_domain_list(page_num, page_size))

    def handle_registrant_profiles(self) -> int:
        return self._run("QueryRegistrantProfiles", self.domain_service.query_registrant_profiles)

    def handle_create_order(self, domain_name: str, profile_id: Optional[str] = None, years: int = 1) -> int:
        return self._run("CreateOrder", lambda: self.domain_service.create_order(domain_name, profile_id, years))

    def handle_task_list(self, page_num: int = 1, page_size: int = 100) -> int:
        return self._run("QueryTaskList", lambda: self.domain_service.query_task_list(page_num, page_size))

    def handle_task_detail(self, task_no: str, page_num: int = 1, page_size: int = 100) -> int:
        return self._run("QueryTaskDetailList", lambda: self.domain_service.query_task_detail(task_no, page_num, page_size))

    # --- Signing only ---

    def handle_presign(self, service: str, action: str, params: Dict[str, str]) -> int:
        """Prints the signed URI for an action without sending it."""
        if service == "sms":
            table, assembler = SMS_ACTIONS, self.sms_service.assembler
        elif service == "domain":
            table, assembler = DOMAIN_ACTIONS, self.domain_service.assembler
        else:
            self.ui.display_error(f"Unknown service '{service}'. Use 'sms' or 'domain'.")
            return EXIT_FAILURE

        spec = table.get(action)
        if spec is None:
            self.ui.display_error(f"Unknown {service} action '{action}'. Known: {', '.join(sorted(table))}")
            return EXIT_FAILURE
        try:
            uri = assembler.assemble(spec.build(**params))
        except AliqueryError as e:
            self.ui.display_error(str(e))
            return EXIT_FAILURE
        self.ui.display_uri(uri)
        return EXIT_OK

    def _run(self, title: str, call) -> int:
        try:
            result: Result = call()
        except AliqueryError as e:
            logger.error(f"{title} rejected before sending: {e}")
            self.ui.display_error(str(e))
            return EXIT_FAILURE
        return self._render(title, result)

    def _render(self, title: str, result: Result) -> int:
        if result.is_ok:
            self.ui.display_response(result.value, title=title)
            return EXIT_OK

        error = result.error
        if isinstance(error, TransportFailure):
            status = error.status if error.status is not None else "no response"
            self.ui.display_error(f"{title} failed ({status}): {error.uri}", detail=error.body)
        elif isinstance(error, ResponseParseError):
            self.ui.display_error(f"{title} returned malformed JSON: {error.uri}", detail=error.body)
        else:
            self.ui.display_error(f"{title} failed: {error}")
        return EXIT_FAILURE
