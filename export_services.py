"""
Export services - which product services to export, chosen by name or by group.
"""

import logging
from typing import Iterable, List, Optional, Union

logger = logging.getLogger(__name__)

EXPORT_SERVICE_PINGFEDERATE = 'pingfederate'
EXPORT_SERVICE_PINGONE_AUTHORIZE = 'pingone-authorize'
EXPORT_SERVICE_PINGONE_MFA = 'pingone-mfa'
EXPORT_SERVICE_PINGONE_PLATFORM = 'pingone-platform'
EXPORT_SERVICE_PINGONE_PROTECT = 'pingone-protect'
EXPORT_SERVICE_PINGONE_SSO = 'pingone-sso'

EXPORT_SERVICE_GROUP_PINGONE = 'pingone'

EXPORT_SERVICES = sorted([
    EXPORT_SERVICE_PINGFEDERATE,
    EXPORT_SERVICE_PINGONE_AUTHORIZE,
    EXPORT_SERVICE_PINGONE_MFA,
    EXPORT_SERVICE_PINGONE_PLATFORM,
    EXPORT_SERVICE_PINGONE_PROTECT,
    EXPORT_SERVICE_PINGONE_SSO,
])

EXPORT_SERVICE_GROUPS = {
    EXPORT_SERVICE_GROUP_PINGONE: [
        EXPORT_SERVICE_PINGONE_AUTHORIZE,
        EXPORT_SERVICE_PINGONE_MFA,
        EXPORT_SERVICE_PINGONE_PLATFORM,
        EXPORT_SERVICE_PINGONE_PROTECT,
        EXPORT_SERVICE_PINGONE_SSO,
    ],
}


class UnrecognizedExportServiceError(ValueError):
    """Raised for a service name that is not one of EXPORT_SERVICES"""
    pass


class UnrecognizedServiceGroupError(ValueError):
    """Raised for a service group that is not one of EXPORT_SERVICE_GROUPS"""
    pass


def _split(services: Union[str, Iterable[str], None]) -> List[str]:
    if not services:
        return []
    if isinstance(services, str):
        if services.strip() == '[]':
            return []
        services = services.split(',')
    return [service.strip().lower() for service in services if service and service.strip()]


def services_in_group(service_group: Optional[str]) -> List[str]:
    """Services belonging to a group. An empty group selects nothing."""
    if not service_group:
        return []

    group = service_group.strip().lower()
    if group not in EXPORT_SERVICE_GROUPS:
        raise UnrecognizedServiceGroupError(
            f"Unrecognized service group '{service_group}': must be one of {', '.join(sorted(EXPORT_SERVICE_GROUPS))}"
        )
    return list(EXPORT_SERVICE_GROUPS[group])


def parse_export_services(services: Union[str, Iterable[str], None] = None,
                          service_group: Optional[str] = None) -> List[str]:
    """
    Merge explicitly named services with the services of a group.

    Names are trimmed and matched case-insensitively. The result is sorted and
    free of duplicates.
    """
    selected = set()

    for service in _split(services):
        if service not in EXPORT_SERVICES:
            raise UnrecognizedExportServiceError(
                f"Unrecognized export service '{service}': must be one of {', '.join(EXPORT_SERVICES)}"
            )
        selected.add(service)

    selected.update(services_in_group(service_group))

    result = sorted(selected)
    logger.debug(f"Selected export services: {', '.join(result) or 'none'}")
    return result


def contains_pingone_service(services: Iterable[str]) -> bool:
    pingone_services = EXPORT_SERVICE_GROUPS[EXPORT_SERVICE_GROUP_PINGONE]
    return any(service in pingone_services for service in services)


def contains_pingfederate_service(services: Iterable[str]) -> bool:
    return EXPORT_SERVICE_PINGFEDERATE in services
