"""
Ping API Client - Thin client for the PingFederate and PingOne administration APIs.
Handles base URLs, default headers, timeouts and response status checks.

Authentication is the caller's job: pass in a requests.Session that already
carries credentials.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from export_config import (
    DEFAULT_PINGFEDERATE_ADMIN_API_PATH,
    PINGFEDERATE_ADMIN_API_PATH_ENV,
    PINGFEDERATE_HTTPS_HOST_ENV,
    PINGONE_EXPORT_ENVIRONMENT_ID_ENV,
    get_pingone_api_domain,
    get_request_timeout,
    get_setting,
)

logger = logging.getLogger(__name__)

_MISSING = object()


class PingAPIError(Exception):
    """Custom exception for Ping administration API errors"""

    def __init__(self, message: str, api_function_name: Optional[str] = None,
                 resource_type: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.api_function_name = api_function_name
        self.resource_type = resource_type
        self.status_code = status_code


def extract_field(data: Any, path: Optional[str], default: Any = None) -> Any:
    """
    Follow a dotted path ('authenticationSource.sourceRef.id') through nested dicts.
    An empty path returns the data itself.
    """
    if not path:
        return data

    current = data
    for part in path.split('.'):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current


def handle_client_response(response: Optional[requests.Response], error: Optional[Exception],
                           api_function_name: str, resource_type: str) -> bool:
    """
    Decide whether a response can be used.

    Returns False (after a warning) when the resource should be skipped:
    transport errors and 403 Forbidden. Raises PingAPIError for any other
    non-2xx response.
    """
    if error is not None:
        logger.warning(f"API client error. API Function Name: {api_function_name}, "
                       f"Resource Type: {resource_type}, Client Error: {error}")
        return False

    if response is None:
        raise PingAPIError(
            f"Resource request failed: '{api_function_name}' - '{resource_type}'. Response is nil",
            api_function_name, resource_type,
        )

    if response.status_code == 403:
        logger.warning(f"API client 403 forbidden response. API Function Name: {api_function_name}, "
                       f"Resource Type: {resource_type}, Response Body: {response.text}")
        return False

    if response.status_code >= 300 or response.status_code < 200:
        raise PingAPIError(
            f"Resource request failed: '{api_function_name}' - '{resource_type}'. "
            f"Response Code: {response.status_code}, Response Body: {response.text}",
            api_function_name, resource_type, response.status_code,
        )

    return True


def check_singleton_response(response: Optional[requests.Response], error: Optional[Exception],
                             api_function_name: str, resource_type: str) -> bool:
    """Same as handle_client_response, but a 204 No Content also skips the resource."""
    if not handle_client_response(response, error, api_function_name, resource_type):
        return False

    if response.status_code == 204:
        logger.warning(f"API client 204 No Content response. API Function Name: {api_function_name}, "
                       f"Resource Type: {resource_type}")
        return False

    return True


def data_nil_error(resource_type: str, response: requests.Response) -> PingAPIError:
    return PingAPIError(
        f"Failed to export resource '{resource_type}'. API client request was not successful: response data is nil. "
        f"Response Code: {response.status_code}, Response Body: {response.text}",
        resource_type=resource_type, status_code=response.status_code,
    )


class PingAPIClient:
    """
    Shared request handling for both products. Every request is a single
    attempt; skipped resources come back as None.
    """

    product = 'ping'

    def __init__(self, base_url: str, session: Optional[requests.Session] = None,
                 timeout: Optional[int] = None, headers: Optional[Dict[str, str]] = None):
        self.base_url = base_url.rstrip('/')
        self.session = session if session is not None else requests.Session()
        self.timeout = get_request_timeout(timeout)
        self.headers = {'Accept': 'application/json'}
        self.headers.update(headers or {})

    def _make_request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}/{endpoint.lstrip('/')}" if endpoint else self.base_url
        kwargs.setdefault('timeout', self.timeout)
        kwargs.setdefault('headers', self.headers)

        logger.debug(f"Making {method} request to {url}")
        return self.session.request(method, url, **kwargs)

    def _get(self, endpoint: str, api_function_name: str, resource_type: str,
             singleton: bool = False) -> Optional[requests.Response]:
        check = check_singleton_response if singleton else handle_client_response

        try:
            response = self._make_request('GET', endpoint)
        except requests.exceptions.RequestException as e:
            check(None, e, api_function_name, resource_type)
            return None

        if not check(response, None, api_function_name, resource_type):
            return None
        return response

    @staticmethod
    def _decode(response: requests.Response, resource_type: str) -> Any:
        try:
            return response.json()
        except ValueError:
            raise data_nil_error(resource_type, response)

    def list_objects(self, endpoint: str, items_path: Optional[str], api_function_name: str,
                     resource_type: str) -> Optional[List[Dict[str, Any]]]:
        """
        GET a listing and return the objects found at items_path.

        items_path is 'items' for PingFederate, '_embedded.<key>' for PingOne
        and None when the body is a bare JSON array. Only one page is read.
        """
        response = self._get(endpoint, api_function_name, resource_type)
        if response is None:
            return None

        data = self._decode(response, resource_type)
        if data is None:
            raise data_nil_error(resource_type, response)

        if items_path is None:
            items = data
        else:
            container_path, _, key = items_path.rpartition('.')
            container = extract_field(data, container_path, _MISSING)
            if not isinstance(container, dict):
                raise data_nil_error(resource_type, response)
            if key not in container and container_path:
                # PingOne leaves the key out of _embedded when there is nothing to list
                items = []
            else:
                items = container.get(key)

        if not isinstance(items, list):
            raise data_nil_error(resource_type, response)

        next_page = extract_field(data, '_links.next.href')
        if next_page:
            logger.warning(f"{resource_type}: only the first page of '{api_function_name}' was read, "
                           f"more results are available at {next_page}")

        logger.debug(f"{api_function_name} returned {len(items)} objects for {resource_type}")
        return items

    def get_object(self, endpoint: str, api_function_name: str,
                   resource_type: str) -> Optional[Dict[str, Any]]:
        """GET a single (singleton) object. Returns None when it should be skipped."""
        response = self._get(endpoint, api_function_name, resource_type, singleton=True)
        if response is None:
            return None

        data = self._decode(response, resource_type)
        if not isinstance(data, dict):
            raise data_nil_error(resource_type, response)
        return data


class PingFederateClient(PingAPIClient):
    """Client for the PingFederate administrative API"""

    product = 'pingfederate'

    def __init__(self, https_host: Optional[str] = None, admin_api_path: Optional[str] = None,
                 session: Optional[requests.Session] = None, timeout: Optional[int] = None):
        host = get_setting(https_host, PINGFEDERATE_HTTPS_HOST_ENV, required=True)
        api_path = get_setting(admin_api_path, PINGFEDERATE_ADMIN_API_PATH_ENV,
                               default=DEFAULT_PINGFEDERATE_ADMIN_API_PATH)

        super().__init__(
            f"{host.rstrip('/')}/{api_path.strip('/')}",
            session=session,
            timeout=timeout,
            headers={'X-Xsrf-Header': 'PingFederate'},
        )
        logger.debug(f"Initialized PingFederate API client for {self.base_url}")


class PingOneClient(PingAPIClient):
    """Client for the PingOne management API, scoped to the export environment"""

    product = 'pingone'

    def __init__(self, region_code: Optional[str] = None, environment_id: Optional[str] = None,
                 session: Optional[requests.Session] = None, timeout: Optional[int] = None):
        domain = get_pingone_api_domain(region_code)
        self.export_environment_id = get_setting(environment_id, PINGONE_EXPORT_ENVIRONMENT_ID_ENV, required=True)

        super().__init__(
            f"https://api.pingone.{domain}/v1/environments/{self.export_environment_id}",
            session=session,
            timeout=timeout,
        )
        logger.debug(f"Initialized PingOne API client for {self.base_url}")

    def validate_export_environment(self) -> Dict[str, Any]:
        """Make sure the export environment exists and is readable"""
        environment = self.get_object('', 'ReadOneEnvironment', 'pingone_environment')
        if environment is None:
            raise PingAPIError(
                f"Failed to validate pingone environment ID '{self.export_environment_id}'",
                'ReadOneEnvironment', 'pingone_environment',
            )
        return environment
