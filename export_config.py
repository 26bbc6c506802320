"""
Export configuration - settings resolved from explicit values or environment variables.
"""

import logging
import os
from typing import Dict, Optional

logger = logging.getLogger(__name__)

# Environment variables
PINGFEDERATE_HTTPS_HOST_ENV = 'PINGCLI_PINGFEDERATE_HTTPS_HOST'
PINGFEDERATE_ADMIN_API_PATH_ENV = 'PINGCLI_PINGFEDERATE_ADMIN_API_PATH'
PINGONE_REGION_CODE_ENV = 'PINGCLI_PINGONE_REGION_CODE'
PINGONE_EXPORT_ENVIRONMENT_ID_ENV = 'PINGCLI_PINGONE_EXPORT_ENVIRONMENT_ID'
EXPORT_SERVICES_ENV = 'PINGCLI_EXPORT_SERVICES'
EXPORT_SERVICE_GROUP_ENV = 'PINGCLI_EXPORT_SERVICE_GROUP'
REQUEST_TIMEOUT_ENV = 'PINGCLI_REQUEST_TIMEOUT'

DEFAULT_PINGFEDERATE_ADMIN_API_PATH = '/pf-admin-api/v1'
DEFAULT_REQUEST_TIMEOUT = 30

# PingOne region code -> top level domain of the API host
PINGONE_REGION_DOMAINS: Dict[str, str] = {
    'AP': 'asia',
    'AU': 'com.au',
    'CA': 'ca',
    'EU': 'eu',
    'NA': 'com',
    'SG': 'sg',
}


class ConfigurationError(Exception):
    """Raised when a required setting is missing or invalid"""
    pass


def get_setting(value: Optional[str], env_var: str, default: Optional[str] = None,
                required: bool = False) -> Optional[str]:
    """
    Resolve a setting from an explicit value, then the environment, then a default.
    """
    if value:
        return value

    env_value = os.environ.get(env_var)
    if env_value:
        logger.debug(f"Using {env_var} from environment")
        return env_value

    if default is None and required:
        raise ConfigurationError(f"Setting required. Set the {env_var} environment variable or pass it explicitly")

    return default


def get_request_timeout(timeout: Optional[int] = None) -> int:
    """Request timeout in seconds"""
    raw_timeout = get_setting(str(timeout) if timeout else None, REQUEST_TIMEOUT_ENV,
                              default=str(DEFAULT_REQUEST_TIMEOUT))
    try:
        parsed = int(raw_timeout)
    except ValueError:
        raise ConfigurationError(f"Invalid request timeout {raw_timeout!r}: must be a whole number of seconds")

    if parsed <= 0:
        raise ConfigurationError(f"Invalid request timeout {parsed}: must be greater than zero")

    return parsed


def get_pingone_api_domain(region_code: Optional[str]) -> str:
    """Map a PingOne region code (e.g. 'NA', 'eu') to its API domain suffix."""
    region = get_setting(region_code, PINGONE_REGION_CODE_ENV, required=True)
    domain = PINGONE_REGION_DOMAINS.get(region.strip().upper())

    if domain is None:
        raise ConfigurationError(
            f"Unrecognized PingOne region code '{region}': must be one of {', '.join(sorted(PINGONE_REGION_DOMAINS))}"
        )

    return domain
