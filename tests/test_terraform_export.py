"""
Unit tests for the terraform_export module.
"""

import logging
from unittest.mock import Mock, patch

import pytest

from block_validation import DuplicateImportBlockError
from export_config import EXPORT_SERVICE_GROUP_ENV, EXPORT_SERVICES_ENV, ConfigurationError
from export_services import EXPORT_SERVICE_PINGFEDERATE
from import_block import ImportBlock
from ping_client import PingAPIError, PingFederateClient, PingOneClient
from ping_resources import ExportableResource
from resource_definitions import resource_types_for_service
from terraform_export import (
    ExportError,
    ImportBlockExporter,
    build_resources,
    export_import_blocks,
    setup_logging,
)


def fake_resource(resource_type, blocks=None, error=None):
    resource = Mock(spec=ExportableResource)
    resource.resource_type = resource_type
    if error is not None:
        resource.export_all.side_effect = error
    else:
        resource.export_all.return_value = blocks or []
    return resource


def pingone_client():
    client = Mock(spec=PingOneClient)
    client.export_environment_id = 'env-1'
    return client


class TestBuildResources:
    """Test cases for build_resources."""

    def test_pingfederate_resources(self):
        """Every PingFederate resource type is built with the PingFederate client."""
        client = Mock(spec=PingFederateClient)

        resources = build_resources([EXPORT_SERVICE_PINGFEDERATE], pingfederate_client=client)

        assert [resource.resource_type for resource in resources] == resource_types_for_service('pingfederate')
        assert all(resource.client is client for resource in resources)

    def test_pingone_resources(self):
        """PingOne services use the PingOne client."""
        client = pingone_client()

        resources = build_resources(['pingone-sso', 'pingone-mfa'], pingone_client=client)

        resource_types = [resource.resource_type for resource in resources]
        assert resource_types == resource_types_for_service('pingone-sso') + resource_types_for_service('pingone-mfa')
        assert all(resource.client is client for resource in resources)

    def test_missing_client(self):
        """A selected product without a client is a configuration error."""
        with pytest.raises(ConfigurationError) as exc_info:
            build_resources(['pingone-sso'], pingfederate_client=Mock(spec=PingFederateClient))

        assert 'PingOne' in str(exc_info.value)


class TestImportBlockExporter:
    """Test cases for ImportBlockExporter."""

    def test_export_resource_sanitizes_and_sorts(self):
        """Blocks come back sanitized and ordered by name."""
        resource = fake_resource('pingone_group', [
            ImportBlock('pingone_group', 'Zeta', 'env-1/z'),
            ImportBlock('pingone_group', 'Alpha Team', 'env-1/a'),
        ])
        exporter = ImportBlockExporter([resource], show_progress=False)

        blocks = exporter.export_resource(resource)

        assert [block.resource_name for block in blocks] == ['pingcli__Alpha-0020-Team', 'pingcli__Zeta']
        assert all(block.sanitized for block in blocks)

    def test_duplicates_become_export_error(self):
        """Colliding names fail the resource type."""
        resource = fake_resource('pingone_population', [
            ImportBlock('pingone_population', 'Default', 'env-1/p1'),
            ImportBlock('pingone_population', 'Default', 'env-1/p2'),
        ])
        exporter = ImportBlockExporter([resource], show_progress=False)

        with pytest.raises(ExportError) as exc_info:
            exporter.export_resource(resource)

        assert exc_info.value.resource_type == 'pingone_population'
        assert isinstance(exc_info.value.__cause__, DuplicateImportBlockError)
        assert 'pingcli__Default' in str(exc_info.value)

    def test_api_error_becomes_export_error(self):
        """API failures are wrapped with the resource type."""
        resource = fake_resource('pingone_key', error=PingAPIError('Response Code: 500', status_code=500))
        exporter = ImportBlockExporter([resource], show_progress=False)

        with pytest.raises(ExportError) as exc_info:
            exporter.collect()

        assert "Failed to export resource 'pingone_key'" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, PingAPIError)

    def test_collect_skips_empty_resources(self):
        """Resource types with nothing to import are left out."""
        resources = [
            fake_resource('pingone_group', [ImportBlock('pingone_group', 'Admins', 'env-1/g1')]),
            fake_resource('pingone_key', []),
        ]
        exporter = ImportBlockExporter(resources, show_progress=False)

        collected = exporter.collect()

        assert list(collected) == ['pingone_group']
        assert collected['pingone_group'][0].resource_name == 'pingcli__Admins'

    def test_export_renders_documents(self):
        """Each exported resource type gets its own document."""
        resources = [
            fake_resource('pingone_group', [ImportBlock('pingone_group', 'Admins', 'env-1/g1')]),
            fake_resource('pingone_population', [ImportBlock('pingone_population', 'Staff', 'env-1/p1')]),
        ]
        exporter = ImportBlockExporter(resources, show_progress=False)

        documents = exporter.export()

        assert list(documents) == ['pingone_group', 'pingone_population']
        assert documents['pingone_group'].startswith('# Terraform import blocks for pingone_group.\n')
        assert '  to = pingone_group.pingcli__Admins\n' in documents['pingone_group']
        assert '  id = "env-1/p1"\n' in documents['pingone_population']

    def test_custom_renderer(self):
        """A renderer can be supplied."""
        renderer = Mock()
        renderer.render_import_document.return_value = 'rendered'
        resource = fake_resource('pingone_group', [ImportBlock('pingone_group', 'Admins', 'env-1/g1')])

        documents = ImportBlockExporter([resource], renderer=renderer, show_progress=False).export()

        assert documents == {'pingone_group': 'rendered'}
        renderer.render_import_document.assert_called_once()


class TestExportImportBlocks:
    """Test cases for export_import_blocks."""

    def setup_method(self):
        """Setup test fixtures."""
        self.pingone_client = pingone_client()

        def list_objects(endpoint, items_path, api_function, resource_type):
            if endpoint == '/groups':
                return [{'id': 'g1', 'name': 'Admins'}]
            return []

        self.pingone_client.list_objects.side_effect = list_objects
        self.pingone_client.get_object.return_value = None

    def test_nothing_selected(self):
        """No services and no group is a configuration error."""
        with pytest.raises(ConfigurationError):
            export_import_blocks(pingone_client=self.pingone_client, show_progress=False)

    def test_exports_selected_services(self):
        """Only resource types with blocks produce documents."""
        documents = export_import_blocks('pingone-sso', pingone_client=self.pingone_client, show_progress=False)

        assert list(documents) == ['pingone_group']
        assert '  id = "env-1/g1"\n' in documents['pingone_group']
        self.pingone_client.validate_export_environment.assert_called_once_with()

    def test_services_from_environment(self, monkeypatch):
        """Services can be selected through the environment."""
        monkeypatch.setenv(EXPORT_SERVICES_ENV, 'pingone-sso')

        documents = export_import_blocks(pingone_client=self.pingone_client, show_progress=False)

        assert 'pingone_group' in documents

    def test_group_from_environment(self, monkeypatch):
        """The service group can be selected through the environment."""
        monkeypatch.setenv(EXPORT_SERVICE_GROUP_ENV, 'pingone')

        documents = export_import_blocks(pingone_client=self.pingone_client, show_progress=False)

        assert list(documents) == ['pingone_group']
        requested = {call[0][0] for call in self.pingone_client.list_objects.call_args_list}
        assert {'/apiServers', '/deviceAuthenticationPolicies', '/keys', '/riskPolicySets', '/groups'} <= requested

    def test_invalid_environment_stops_export(self):
        """A failed environment check happens before any listing."""
        self.pingone_client.validate_export_environment.side_effect = PingAPIError('bad environment')

        with pytest.raises(PingAPIError):
            export_import_blocks('pingone-sso', pingone_client=self.pingone_client, show_progress=False)

        self.pingone_client.list_objects.assert_not_called()

    def test_pingfederate_only_skips_environment_check(self):
        """Environment validation only applies to PingOne services."""
        pingfederate_client = Mock(spec=PingFederateClient)
        pingfederate_client.list_objects.return_value = []

        documents = export_import_blocks('pingfederate', pingfederate_client=pingfederate_client,
                                         pingone_client=self.pingone_client, show_progress=False)

        self.pingone_client.validate_export_environment.assert_not_called()
        assert list(documents) == ['pingfederate_server_settings']

    def test_missing_pingfederate_client(self):
        """Selecting PingFederate without a client fails."""
        with pytest.raises(ConfigurationError):
            export_import_blocks('pingfederate', show_progress=False)


class TestSetupLogging:
    """Test cases for setup_logging."""

    @patch('terraform_export.logging.basicConfig')
    def test_verbose(self, mock_basic_config):
        """Verbose mode logs at debug level."""
        setup_logging(True)

        assert mock_basic_config.call_args[1]['level'] == logging.DEBUG

    @patch('terraform_export.logging.basicConfig')
    def test_default(self, mock_basic_config):
        """Default mode logs at info level."""
        setup_logging(False)

        assert mock_basic_config.call_args[1]['level'] == logging.INFO
        assert len(mock_basic_config.call_args[1]['handlers']) == 1
