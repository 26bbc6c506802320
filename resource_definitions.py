"""
Resource definitions - endpoints and field mappings for every exportable resource type.

Each entry is interpreted by ping_resources.ExportableResource:

    service        export service the resource belongs to
    endpoint       listing endpoint, relative to the product API base URL
    api_function   operation name used in log and error messages
    items_path     where the list lives in the response ('items', '_embedded.<key>',
                   or None for a bare JSON array)
    fields         alias -> dotted path into each API object; objects missing any
                   of these are skipped
    filters        optional alias -> allowed values
    resource_name  str.format template for the Terraform resource name
    resource_id    str.format template for the import ID
    comments       (label, template) pairs, in output order
    parent         optional listing whose objects each expand into a child listing;
                   the parent's fields are available to the child templates
    singleton      optional fixed name/ID for resources that exist exactly once

Templates may use the field aliases plus {environment_id} for PingOne resources.
"""

from typing import Any, Dict

from export_services import (
    EXPORT_SERVICE_PINGFEDERATE,
    EXPORT_SERVICE_PINGONE_AUTHORIZE,
    EXPORT_SERVICE_PINGONE_MFA,
    EXPORT_SERVICE_PINGONE_PLATFORM,
    EXPORT_SERVICE_PINGONE_PROTECT,
    EXPORT_SERVICE_PINGONE_SSO,
)

PINGFEDERATE_ITEMS_PATH = 'items'

RESOURCE_DEFINITIONS: Dict[str, Dict[str, Any]] = {
    # PingFederate
    'pingfederate_data_store': {
        'service': EXPORT_SERVICE_PINGFEDERATE,
        'endpoint': '/dataStores',
        'api_function': 'GetDataStores',
        'items_path': PINGFEDERATE_ITEMS_PATH,
        'fields': {'id': 'id', 'type': 'type'},
        'resource_name': '{id}_{type}',
        'resource_id': '{id}',
        'comments': [
            ('Data Store ID', '{id}'),
            ('Data Store Type', '{type}'),
        ],
    },
    'pingfederate_idp_adapter': {
        'service': EXPORT_SERVICE_PINGFEDERATE,
        'endpoint': '/idp/adapters',
        'api_function': 'GetIdpAdapters',
        'items_path': PINGFEDERATE_ITEMS_PATH,
        'fields': {'id': 'id', 'name': 'name'},
        'resource_name': '{name}',
        'resource_id': '{id}',
        'comments': [
            ('Idp Adapter ID', '{id}'),
            ('Idp Adapter Name', '{name}'),
        ],
    },
    'pingfederate_idp_sp_connection': {
        'service': EXPORT_SERVICE_PINGFEDERATE,
        'endpoint': '/idp/spConnections',
        'api_function': 'GetSpConnections',
        'items_path': PINGFEDERATE_ITEMS_PATH,
        'fields': {'id': 'id', 'name': 'name'},
        'resource_name': '{name}',
        'resource_id': '{id}',
        'comments': [
            ('Idp Sp Connection ID', '{id}'),
            ('Idp Sp Connection Name', '{name}'),
        ],
    },
    'pingfederate_idp_to_sp_adapter_mapping': {
        'service': EXPORT_SERVICE_PINGFEDERATE,
        'endpoint': '/idpToSpAdapterMapping',
        'api_function': 'GetIdpToSpAdapterMappings',
        'items_path': PINGFEDERATE_ITEMS_PATH,
        'fields': {'id': 'id', 'source_id': 'sourceId', 'target_id': 'targetId'},
        'resource_name': '{source_id}_to_{target_id}',
        'resource_id': '{id}',
        'comments': [
            ('Idp To Sp Adapter Mapping ID', '{id}'),
            ('Idp To Sp Adapter Mapping Source ID', '{source_id}'),
            ('Idp To Sp Adapter Mapping Target ID', '{target_id}'),
        ],
    },
    'pingfederate_oauth_access_token_mapping': {
        'service': EXPORT_SERVICE_PINGFEDERATE,
        'endpoint': '/oauth/accessTokenMappings',
        'api_function': 'GetMappings',
        # This listing is a bare array, not an 'items' envelope
        'items_path': None,
        'fields': {'id': 'id', 'context_type': 'context.type'},
        'resource_name': '{context_type}_{id}',
        'resource_id': '{id}',
        'comments': [
            ('Oauth Access Token Mapping ID', '{id}'),
            ('Oauth Access Token Mapping Context Type', '{context_type}'),
        ],
    },
    'pingfederate_oauth_client': {
        'service': EXPORT_SERVICE_PINGFEDERATE,
        'endpoint': '/oauth/clients',
        'api_function': 'GetOauthClients',
        'items_path': PINGFEDERATE_ITEMS_PATH,
        'fields': {'id': 'clientId', 'name': 'name'},
        'resource_name': '{name}',
        'resource_id': '{id}',
        'comments': [
            ('Oauth Client ID', '{id}'),
            ('Oauth Client Name', '{name}'),
        ],
    },
    'pingfederate_server_settings': {
        'service': EXPORT_SERVICE_PINGFEDERATE,
        'singleton': {
            'resource_name': 'Server Settings',
            'resource_id': 'server_settings__singleton_id',
            'placeholder_id': True,
        },
    },
    'pingfederate_session_authentication_policy': {
        'service': EXPORT_SERVICE_PINGFEDERATE,
        'endpoint': '/session/authenticationSessionPolicies',
        'api_function': 'GetSourcePolicies',
        'items_path': PINGFEDERATE_ITEMS_PATH,
        'fields': {
            'id': 'id',
            'source_type': 'authenticationSource.type',
            'source_ref_id': 'authenticationSource.sourceRef.id',
        },
        'resource_name': '{id}_{source_type}_{source_ref_id}',
        'resource_id': '{id}',
        'comments': [
            ('Session Authentication Policy ID', '{id}'),
            ('Session Authentication Policy Authentication Source Type', '{source_type}'),
            ('Session Authentication Policy Authentication Source Ref ID', '{source_ref_id}'),
        ],
    },

    # PingOne Authorize
    'pingone_authorize_api_service': {
        'service': EXPORT_SERVICE_PINGONE_AUTHORIZE,
        'endpoint': '/apiServers',
        'api_function': 'ReadAllAPIServers',
        'items_path': '_embedded.apiServers',
        'fields': {'id': 'id', 'name': 'name'},
        'resource_name': '{name}',
        'resource_id': '{environment_id}/{id}',
        'comments': [
            ('API Service ID', '{id}'),
            ('API Service Name', '{name}'),
        ],
    },

    # PingOne MFA
    'pingone_mfa_device_policy': {
        'service': EXPORT_SERVICE_PINGONE_MFA,
        'endpoint': '/deviceAuthenticationPolicies',
        'api_function': 'ReadDeviceAuthenticationPolicies',
        'items_path': '_embedded.deviceAuthenticationPolicies',
        'fields': {'id': 'id', 'name': 'name'},
        'resource_name': '{name}',
        'resource_id': '{environment_id}/{id}',
        'comments': [
            ('MFA Device Policy ID', '{id}'),
            ('MFA Device Policy Name', '{name}'),
        ],
    },

    # PingOne Platform
    'pingone_key': {
        'service': EXPORT_SERVICE_PINGONE_PLATFORM,
        'endpoint': '/keys',
        'api_function': 'GetKeys',
        'items_path': '_embedded.keys',
        'fields': {'id': 'id', 'name': 'name', 'usage_type': 'usageType'},
        'resource_name': '{name}_{usage_type}',
        'resource_id': '{environment_id}/{id}',
        'comments': [
            ('Key ID', '{id}'),
            ('Key Name', '{name}'),
            ('Key Usage Type', '{usage_type}'),
        ],
    },
    'pingone_notification_settings': {
        'service': EXPORT_SERVICE_PINGONE_PLATFORM,
        'singleton': {
            'endpoint': '/notificationsSettings',
            'api_function': 'ReadNotificationsSettings',
            'resource_name': 'pingone_notification_settings',
            'resource_id': '{environment_id}',
            'placeholder_id': False,
        },
    },

    # PingOne Protect
    'pingone_risk_policy': {
        'service': EXPORT_SERVICE_PINGONE_PROTECT,
        'endpoint': '/riskPolicySets',
        'api_function': 'ReadRiskPolicySets',
        'items_path': '_embedded.riskPolicySets',
        'fields': {'id': 'id', 'name': 'name'},
        'resource_name': '{name}',
        'resource_id': '{environment_id}/{id}',
        'comments': [
            ('Risk Policy ID', '{id}'),
            ('Risk Policy Name', '{name}'),
        ],
    },

    # PingOne SSO
    'pingone_application': {
        'service': EXPORT_SERVICE_PINGONE_SSO,
        'endpoint': '/applications',
        'api_function': 'ReadAllApplications',
        'items_path': '_embedded.applications',
        'fields': {'id': 'id', 'name': 'name', 'protocol': 'protocol'},
        'filters': {'protocol': ('OPENID_CONNECT', 'SAML', 'EXTERNAL_LINK')},
        'resource_name': '{name}',
        'resource_id': '{environment_id}/{id}',
        'comments': [
            ('Application ID', '{id}'),
            ('Application Name', '{name}'),
        ],
    },
    'pingone_group': {
        'service': EXPORT_SERVICE_PINGONE_SSO,
        'endpoint': '/groups',
        'api_function': 'ReadAllGroups',
        'items_path': '_embedded.groups',
        'fields': {'id': 'id', 'name': 'name'},
        'resource_name': '{name}',
        'resource_id': '{environment_id}/{id}',
        'comments': [
            ('Group ID', '{id}'),
            ('Group Name', '{name}'),
        ],
    },
    'pingone_password_policy': {
        'service': EXPORT_SERVICE_PINGONE_SSO,
        'endpoint': '/passwordPolicies',
        'api_function': 'ReadAllPasswordPolicies',
        'items_path': '_embedded.passwordPolicies',
        'fields': {'id': 'id', 'name': 'name'},
        'resource_name': '{name}',
        'resource_id': '{environment_id}/{id}',
        'comments': [
            ('Password Policy ID', '{id}'),
            ('Password Policy Name', '{name}'),
        ],
    },
    'pingone_population': {
        'service': EXPORT_SERVICE_PINGONE_SSO,
        'endpoint': '/populations',
        'api_function': 'ReadAllPopulations',
        'items_path': '_embedded.populations',
        'fields': {'id': 'id', 'name': 'name'},
        'resource_name': '{name}',
        'resource_id': '{environment_id}/{id}',
        'comments': [
            ('Population ID', '{id}'),
            ('Population Name', '{name}'),
        ],
    },
    'pingone_resource_scope': {
        'service': EXPORT_SERVICE_PINGONE_SSO,
        'parent': {
            'endpoint': '/resources',
            'api_function': 'ReadAllResources',
            'items_path': '_embedded.resources',
            'fields': {'resource_id': 'id', 'resource_name': 'name', 'resource_type': 'type'},
            # OpenID and PingOne API scopes have their own resource types
            'filters': {'resource_type': ('CUSTOM',)},
        },
        'endpoint': '/resources/{resource_id}/scopes',
        'api_function': 'ReadAllResourceScopes',
        'items_path': '_embedded.scopes',
        'fields': {'id': 'id', 'name': 'name'},
        'resource_name': '{resource_name}_{name}',
        'resource_id': '{environment_id}/{resource_id}/{id}',
        'comments': [
            ('Custom Resource ID', '{resource_id}'),
            ('Custom Resource Name', '{resource_name}'),
            ('Custom Resource Scope ID', '{id}'),
            ('Custom Resource Scope Name', '{name}'),
        ],
    },
    'pingone_sign_on_policy': {
        'service': EXPORT_SERVICE_PINGONE_SSO,
        'endpoint': '/signOnPolicies',
        'api_function': 'ReadAllSignOnPolicies',
        'items_path': '_embedded.signOnPolicies',
        'fields': {'id': 'id', 'name': 'name'},
        'resource_name': '{name}',
        'resource_id': '{environment_id}/{id}',
        'comments': [
            ('Sign-On Policy ID', '{id}'),
            ('Sign-On Policy Name', '{name}'),
        ],
    },
}


def resource_types_for_service(service: str):
    """Resource types exported by a service, in alphabetical order."""
    return sorted(
        resource_type
        for resource_type, definition in RESOURCE_DEFINITIONS.items()
        if definition['service'] == service
    )
