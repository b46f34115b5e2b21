"""SMS façade: SendSms and QuerySendDetails.

Shapes arguments into the action parameter tables and dispatches each call
through the SMS request assembler and the injected transport. Every call is
exactly one signed GET.
"""

import json
import logging
from datetime import date
from typing import Any, Dict, Iterable, Optional, Union

from aliquery.core.services.actions import QUERY_SEND_DETAILS, SEND_SMS, ActionSpec
from aliquery.core.signing.assembler import RequestAssembler
from aliquery.domain.interfaces.diagnostics import DiagnosticSink, NullDiagnosticSink
from aliquery.domain.interfaces.transport import Transport, TransportResult
from aliquery.domain.models.common import Credential, ParameterValue

SMS_API_URL = "http://dysmsapi.aliyuncs.com"
SMS_API_VERSION = "2017-05-25"
SMS_REGION_ID = "cn-hangzhou"
SEND_DATE_FORMAT = "%Y%m%d"


class SmsService:
    """Sends SMS through approved templates and queries delivery details."""

    def __init__(
        self,
        assembler: RequestAssembler,
        transport: Transport,
        template_code: Optional[str] = None,
        sign_name: Optional[str] = None,
        diagnostics: Optional[DiagnosticSink] = None,
    ):
        """Initializes the SMS façade.

        Args:
            assembler: Signs requests for the SMS endpoint.
            transport: Performs the GET round trip.
            template_code: Default approved template id (e.g. 'SMS_150123456').
            sign_name: Default approved signature name shown in the message.
            diagnostics: Sink for call outcomes; discarded if None.
        """
        self.assembler = assembler
        self.transport = transport
        self.template_code = template_code
        self.sign_name = sign_name
        self.diagnostics = diagnostics or NullDiagnosticSink()

    def send(
        self,
        phone_numbers: Union[str, Iterable[str]],
        template_param: Optional[Dict[str, Any]] = None,
        *,
        template_code: Optional[str] = None,
        sign_name: Optional[str] = None,
        out_id: Optional[str] = None,
    ) -> TransportResult:
        """Sends a templated SMS.

        Args:
            phone_numbers: One number, a comma-separated string, or an
                iterable of numbers (up to 1000 per call).
            template_param: Values for the template's variables. Serialized
                to a JSON string before signing.
            template_code: Overrides the service's default template.
            sign_name: Overrides the service's default signature name.
            out_id: Caller-side correlation id echoed back by the provider.

        Returns:
            `Ok` with `RequestId`, `Code`, `Message` and `BizId` (the receipt
            id for `query_send_details`), or `Err` with the failure.
        """
        if not isinstance(phone_numbers, str):
            phone_numbers = ",".join(phone_numbers)
        params = SEND_SMS.build(
            PhoneNumbers=phone_numbers,
            SignName=sign_name or self.sign_name,
            TemplateCode=template_code or self.template_code,
            TemplateParam=serialize_template_param(template_param),
            OutId=out_id,
        )
        return self._call(SEND_SMS, params)

    def query_send_details(
        self,
        phone_number: str,
        send_date: Union[date, str],
        biz_id: Optional[str] = None,
        page_size: int = 10,
        current_page: int = 1,
    ) -> TransportResult:
        """Queries delivery details for one number on one day.

        Args:
            phone_number: The receiving number.
            send_date: Day the message was sent (within the last 30 days).
                Strings are passed through as `yyyyMMdd`.
            biz_id: Receipt id returned by `send`, to narrow the result.
            page_size: Results per page, at most 50.
            current_page: 1-based page number.

        Returns:
            `Ok` with `TotalCount` and `SmsSendDetailDTOs`, or `Err`.
        """
        params = QUERY_SEND_DETAILS.build(
            PhoneNumber=phone_number,
            SendDate=format_send_date(send_date),
            BizId=biz_id,
            PageSize=page_size,
            CurrentPage=current_page,
        )
        return self._call(QUERY_SEND_DETAILS, params)

    def _call(self, action: ActionSpec, params: Dict[str, ParameterValue]) -> TransportResult:
        uri = self.assembler.assemble(params)
        result = self.transport.get(uri)
        if result.is_ok:
            self.diagnostics.record(logging.INFO, f"{action.name} OK.")
        else:
            self.diagnostics.record(logging.ERROR, f"{action.name} failed: {result.error}")
        return result


def serialize_template_param(template_param: Optional[Dict[str, Any]]) -> Optional[str]:
    """Serializes template variables to the compact JSON string the API expects."""
    if template_param is None:
        return None
    return json.dumps(template_param, ensure_ascii=False, separators=(",", ":"))


def format_send_date(send_date: Union[date, str]) -> str:
    if isinstance(send_date, date):
        return send_date.strftime(SEND_DATE_FORMAT)
    return send_date


def create_sms_service(
    credential: Credential,
    transport: Transport,
    template_code: Optional[str] = None,
    sign_name: Optional[str] = None,
    diagnostics: Optional[DiagnosticSink] = None,
    base_url: str = SMS_API_URL,
) -> SmsService:
    """Wires an SmsService with an assembler for the SMS endpoint."""
    assembler = RequestAssembler(
        base_url=base_url,
        version=SMS_API_VERSION,
        credential=credential,
        region_id=SMS_REGION_ID,
        diagnostics=diagnostics,
    )
    return SmsService(
        assembler=assembler,
        transport=transport,
        template_code=template_code,
        sign_name=sign_name,
        diagnostics=diagnostics,
    )
