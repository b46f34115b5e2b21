"""Service façades: one method per provider action, built on the signing core."""

from aliquery.core.services.domain_service import DomainService, create_domain_service
from aliquery.core.services.sms_service import SmsService, create_sms_service

__all__ = ["DomainService", "SmsService", "create_domain_service", "create_sms_service"]
