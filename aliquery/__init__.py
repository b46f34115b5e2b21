"""aliquery: signed-query client for the SMS and Domain APIs."""

from aliquery.core.services import DomainService, SmsService, create_domain_service, create_sms_service
from aliquery.core.signing import RequestAssembler, assemble, sign
from aliquery.domain.models.common import Credential

__version__ = "1.0.0"

__all__ = [
    "Credential",
    "DomainService",
    "RequestAssembler",
    "SmsService",
    "assemble",
    "create_domain_service",
    "create_sms_service",
    "sign",
]
