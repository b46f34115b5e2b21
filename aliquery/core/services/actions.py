"""Action parameter tables for each API family.

Each provider action is data: its name, the parameters a caller must supply
and the optional parameters with their defaults. Façades shape their
arguments into these names and call `ActionSpec.build`.
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Tuple

from aliquery.domain.errors import ParameterError
from aliquery.domain.models.common import ParameterValue


@dataclass(frozen=True)
class ActionSpec:
    """Static description of one provider action."""
    name: str
    required: Tuple[str, ...] = ()
    defaults: Mapping[str, ParameterValue] = field(default_factory=dict)

    @property
    def accepted(self) -> Tuple[str, ...]:
        return self.required + tuple(self.defaults)

    def build(self, **params: ParameterValue) -> Dict[str, ParameterValue]:
        """Returns the action's ParameterSet, including the `Action` key.

        Optional parameters passed as None fall back to their default.

        Raises:
            ParameterError: If a required parameter is missing or None, or a
                parameter the action does not accept is given.
        """
        unknown = sorted(set(params) - set(self.accepted))
        if unknown:
            raise ParameterError(f"{self.name} does not accept: {', '.join(unknown)}")
        missing = [name for name in self.required if params.get(name) is None]
        if missing:
            raise ParameterError(f"{self.name} requires: {', '.join(missing)}")

        built: Dict[str, ParameterValue] = {"Action": self.name}
        for name, default in self.defaults.items():
            value = params.get(name)
            built[name] = default if value is None else value
        for name in self.required:
            built[name] = params[name]
        return built


# --- SMS (dysmsapi, 2017-05-25) ---

SEND_SMS = ActionSpec(
    name="SendSms",
    required=("PhoneNumbers", "SignName", "TemplateCode"),
    defaults={"TemplateParam": None, "SmsUpExtendCode": None, "OutId": None},
)

QUERY_SEND_DETAILS = ActionSpec(
    name="QuerySendDetails",
    required=("PhoneNumber", "SendDate"),
    defaults={"BizId": None, "PageSize": 10, "CurrentPage": 1},
)

SMS_ACTIONS: Dict[str, ActionSpec] = {spec.name: spec for spec in (SEND_SMS, QUERY_SEND_DETAILS)}

# --- Domain (2018-01-29) ---

CHECK_DOMAIN = ActionSpec(
    name="CheckDomain",
    required=("DomainName",),
    # FeeCommand: create | renew | transfer | restore. FeeCurrency: CNY | USD. FeePeriod in years.
    defaults={"FeeCommand": "create", "FeeCurrency": "CNY", "FeePeriod": 1},
)

QUERY_DOMAIN_LIST = ActionSpec(
    name="QueryDomainList",
    defaults={"PageNum": 1, "PageSize": 100},
)

QUERY_REGISTRANT_PROFILES = ActionSpec(
    name="QueryRegistrantProfiles",
    defaults={"PageNum": None, "PageSize": None},
)

CREATE_ORDER_ACTIVATE = ActionSpec(
    name="SaveSingleTaskForCreatingOrderActivate",
    required=("DomainName", "RegistrantProfileId"),
    defaults={"SubscriptionDuration": 1},
)

QUERY_TASK_LIST = ActionSpec(
    name="QueryTaskList",
    defaults={"PageNum": 1, "PageSize": 100},
)

QUERY_TASK_DETAIL_LIST = ActionSpec(
    name="QueryTaskDetailList",
    required=("TaskNo",),
    defaults={"PageNum": 1, "PageSize": 100},
)

DOMAIN_ACTIONS: Dict[str, ActionSpec] = {
    spec.name: spec
    for spec in (
        CHECK_DOMAIN,
        QUERY_DOMAIN_LIST,
        QUERY_REGISTRANT_PROFILES,
        CREATE_ORDER_ACTIVATE,
        QUERY_TASK_LIST,
        QUERY_TASK_DETAIL_LIST,
    )
}
