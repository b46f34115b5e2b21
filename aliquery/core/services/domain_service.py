"""Domain façade: availability checks, orders and task tracking."""

import logging
from typing import Any, Dict, List, Optional, Union

from aliquery.core.services.actions import (
    CHECK_DOMAIN,
    CREATE_ORDER_ACTIVATE,
    QUERY_DOMAIN_LIST,
    QUERY_REGISTRANT_PROFILES,
    QUERY_TASK_DETAIL_LIST,
    QUERY_TASK_LIST,
    ActionSpec,
)
from aliquery.core.signing.assembler import RequestAssembler
from aliquery.domain.errors import ProfileResolutionError
from aliquery.domain.interfaces.diagnostics import DiagnosticSink, NullDiagnosticSink
from aliquery.domain.interfaces.transport import Transport, TransportResult
from aliquery.domain.models.common import Credential, JsonObject, ParameterValue
from aliquery.domain.models.result import Err, Ok, Result

DOMAIN_API_URL = "http://domain.aliyuncs.com"
DOMAIN_API_VERSION = "2018-01-29"

ProfileId = Union[int, str]


class DomainService:
    """One method per domain action, plus registrant profile resolution."""

    def __init__(
        self,
        assembler: RequestAssembler,
        transport: Transport,
        diagnostics: Optional[DiagnosticSink] = None,
    ):
        self.assembler = assembler
        self.transport = transport
        self.diagnostics = diagnostics or NullDiagnosticSink()
        self._profile_id: Optional[ProfileId] = None

    def check_domain(
        self,
        domain_name: str,
        fee_command: str = "create",
        fee_currency: str = "CNY",
        fee_period: int = 1,
    ) -> TransportResult:
        """Checks whether a domain can be registered.

        The response carries `Avail` (1 available, 0 not), `Premium` and,
        when fees were requested, the price for `fee_period` years.
        """
        return self._call(
            CHECK_DOMAIN,
            DomainName=domain_name,
            FeeCommand=fee_command,
            FeeCurrency=fee_currency,
            FeePeriod=fee_period,
        )

    def query_domain_list(self, page_num: int = 1, page_size: int = 100) -> TransportResult:
        return self._call(QUERY_DOMAIN_LIST, PageNum=page_num, PageSize=page_size)

    def query_registrant_profiles(self) -> TransportResult:
        return self._call(QUERY_REGISTRANT_PROFILES)

    def create_order(self, domain_name: str, profile_id: Optional[ProfileId] = None, years: int = 1) -> TransportResult:
        """Places a registration order for `domain_name`.

        Args:
            domain_name: The domain to register.
            profile_id: Registrant profile to register under. When None the
                account's default profile is resolved via `default_profile_id`.
            years: Subscription duration in years.

        Returns:
            `Ok` with the `TaskNo` of the created order task, or `Err` with
            the transport failure or a `ProfileResolutionError`.
        """
        if profile_id is None:
            resolved = self.default_profile_id()
            if not resolved.is_ok:
                return resolved
            profile_id = resolved.value
        return self._call(
            CREATE_ORDER_ACTIVATE,
            DomainName=domain_name,
            RegistrantProfileId=profile_id,
            SubscriptionDuration=years,
        )

    def query_task_list(self, page_num: int = 1, page_size: int = 100) -> TransportResult:
        return self._call(QUERY_TASK_LIST, PageNum=page_num, PageSize=page_size)

    def query_task_detail(self, task_no: str, page_num: int = 1, page_size: int = 100) -> TransportResult:
        """Lists the per-domain details of one task (status, errors, retries)."""
        return self._call(QUERY_TASK_DETAIL_LIST, TaskNo=task_no, PageNum=page_num, PageSize=page_size)

    def default_profile_id(self) -> Result[ProfileId, Any]:
        """Resolves the registrant profile used when an order names none.

        Prefers the profile flagged `DefaultRegistrantProfile`. If none is
        flagged, the first profile returned is used and a warning is
        recorded, since that choice depends on the provider's ordering.
        The resolved id is remembered for the lifetime of this service.
        """
        if self._profile_id is not None:
            return Ok(self._profile_id)

        result = self.query_registrant_profiles()
        if not result.is_ok:
            return result

        try:
            profiles = extract_registrant_profiles(result.value)
        except ProfileResolutionError as e:
            return Err(e)
        if not profiles:
            return Err(ProfileResolutionError("No registrant profiles found for this account."))

        chosen = next((p for p in profiles if p.get("DefaultRegistrantProfile")), None)
        if chosen is None:
            chosen = profiles[0]
            self.diagnostics.record(
                logging.WARNING,
                f"No default registrant profile flagged; using first returned: {chosen.get('RegistrantProfileId')}",
            )
        if chosen.get("RegistrantProfileId") is None:
            return Err(ProfileResolutionError("Registrant profile has no RegistrantProfileId."))

        self._profile_id = chosen["RegistrantProfileId"]
        return Ok(self._profile_id)

    def _call(self, action: ActionSpec, **params: ParameterValue) -> TransportResult:
        uri = self.assembler.assemble(action.build(**params))
        result = self.transport.get(uri)
        if result.is_ok:
            self.diagnostics.record(logging.INFO, f"{action.name} OK.")
        else:
            self.diagnostics.record(logging.ERROR, f"{action.name} failed: {result.error}")
        return result


def extract_registrant_profiles(response: JsonObject) -> List[Dict[str, Any]]:
    """Pulls the profile list out of a QueryRegistrantProfiles response.

    Missing keys mean no profiles. Raises ProfileResolutionError when the
    body is not shaped like a profile listing.
    """
    if not isinstance(response, dict):
        raise ProfileResolutionError("Unexpected QueryRegistrantProfiles response shape")
    container = response.get("RegistrantProfiles") or {}
    if not isinstance(container, dict):
        raise ProfileResolutionError("Unexpected QueryRegistrantProfiles response shape")
    profiles = container.get("RegistrantProfile") or []
    if not isinstance(profiles, list):
        raise ProfileResolutionError("Unexpected QueryRegistrantProfiles response shape")
    return [p for p in profiles if isinstance(p, dict)]


def create_domain_service(
    credential: Credential,
    transport: Transport,
    diagnostics: Optional[DiagnosticSink] = None,
    base_url: str = DOMAIN_API_URL,
) -> DomainService:
    """Wires a DomainService with an assembler for the domain endpoint."""
    assembler = RequestAssembler(
        base_url=base_url,
        version=DOMAIN_API_VERSION,
        credential=credential,
        diagnostics=diagnostics,
    )
    return DomainService(assembler=assembler, transport=transport, diagnostics=diagnostics)
