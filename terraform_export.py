"""
Terraform import export - runs exportable resources and renders their import blocks as HCL.
"""

import logging
import sys
import time
from typing import Dict, Iterable, List, Optional, Union

from tqdm import tqdm

from block_validation import DuplicateImportBlockError, validate_import_blocks
from export_config import EXPORT_SERVICE_GROUP_ENV, EXPORT_SERVICES_ENV, ConfigurationError, get_setting
from export_services import EXPORT_SERVICE_PINGFEDERATE, contains_pingone_service, parse_export_services
from hcl_render import HCLRenderer
from import_block import ImportBlock
from ping_client import PingAPIError, PingFederateClient, PingOneClient
from ping_resources import ExportableResource
from resource_definitions import resource_types_for_service

logger = logging.getLogger(__name__)


class ExportError(Exception):
    """Raised when one resource type cannot be exported"""

    def __init__(self, message: str, resource_type: str):
        super().__init__(message)
        self.resource_type = resource_type


def setup_logging(verbose: bool):
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def build_resources(services: Iterable[str], pingfederate_client: Optional[PingFederateClient] = None,
                    pingone_client: Optional[PingOneClient] = None) -> List[ExportableResource]:
    """Instantiate every resource type of the selected services."""
    resources = []

    for service in services:
        if service == EXPORT_SERVICE_PINGFEDERATE:
            client, product = pingfederate_client, 'PingFederate'
        else:
            client, product = pingone_client, 'PingOne'

        if client is None:
            raise ConfigurationError(f"A {product} API client is required to export the '{service}' service")

        for resource_type in resource_types_for_service(service):
            resources.append(ExportableResource(resource_type, client))

    return resources


class ImportBlockExporter:
    """
    Exports import blocks per resource type: sanitize, sort by name, check
    uniqueness, then render.
    """

    def __init__(self, resources: List[ExportableResource], renderer: Optional[HCLRenderer] = None,
                 show_progress: bool = True):
        self.resources = resources
        self.renderer = renderer or HCLRenderer()
        self.show_progress = show_progress

    def export_resource(self, resource: ExportableResource) -> List[ImportBlock]:
        """Sanitized, sorted and validated import blocks for one resource."""
        try:
            blocks = resource.export_all()
            sanitized = sorted((block.sanitize() for block in blocks), key=lambda block: block.resource_name)
            validate_import_blocks(sanitized)
        except (PingAPIError, DuplicateImportBlockError) as e:
            raise ExportError(f"Failed to export resource '{resource.resource_type}': {e}",
                              resource.resource_type) from e

        return sanitized

    def collect(self) -> Dict[str, List[ImportBlock]]:
        """
        Run every resource and return its blocks keyed by resource type.
        Resource types with nothing to import are left out.
        """
        collected = {}

        with tqdm(total=len(self.resources), desc="Exporting resources", unit="resource",
                  disable=not self.show_progress) as pbar:
            for resource in self.resources:
                try:
                    blocks = self.export_resource(resource)

                    if not blocks:
                        logger.debug(f"Nothing exported for resource {resource.resource_type}. Skipping...")
                        continue

                    collected[resource.resource_type] = blocks
                    pbar.set_postfix({
                        'resource': resource.resource_type,
                        'blocks': len(blocks)
                    })
                finally:
                    pbar.update(1)

        return collected

    def export(self) -> Dict[str, str]:
        """Rendered HCL document per resource type, in resource order."""
        documents = {}
        for resource_type, blocks in self.collect().items():
            logger.debug(f"Generating import document for {resource_type} resource...")
            documents[resource_type] = self.renderer.render_import_document(resource_type, blocks)
        return documents


def export_import_blocks(services: Union[str, Iterable[str], None] = None,
                         service_group: Optional[str] = None,
                         pingfederate_client: Optional[PingFederateClient] = None,
                         pingone_client: Optional[PingOneClient] = None,
                         show_progress: bool = True) -> Dict[str, str]:
    """
    Export the selected services and return the HCL import document of each
    resource type.

    Services and the service group fall back to PINGCLI_EXPORT_SERVICES and
    PINGCLI_EXPORT_SERVICE_GROUP.
    """
    if not services:
        services = get_setting(None, EXPORT_SERVICES_ENV)
    service_group = get_setting(service_group, EXPORT_SERVICE_GROUP_ENV)

    selected = parse_export_services(services, service_group)
    if not selected:
        raise ConfigurationError(
            f"No export services selected. Pass services or set {EXPORT_SERVICES_ENV} / {EXPORT_SERVICE_GROUP_ENV}"
        )

    logger.info(f"Exporting services: {', '.join(selected)}")

    if contains_pingone_service(selected) and pingone_client is not None:
        logger.debug("Validating export environment ID...")
        pingone_client.validate_export_environment()

    start_time = time.time()

    resources = build_resources(selected, pingfederate_client, pingone_client)
    exporter = ImportBlockExporter(resources, show_progress=show_progress)
    documents = exporter.export()

    logger.info(f"Exported {len(documents)} resource types in {time.time() - start_time:.2f} seconds")
    return documents
