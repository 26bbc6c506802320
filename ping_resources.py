"""
Exportable resources - turns API objects into import blocks using resource_definitions.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from import_block import SINGLETON_ID_COMMENT_DATA, ImportBlock, generate_comment_information
from ping_client import PingAPIClient, extract_field
from resource_definitions import RESOURCE_DEFINITIONS

logger = logging.getLogger(__name__)


class ExportableResource:
    """
    One Terraform resource type backed by a product API listing.
    """

    def __init__(self, resource_type: str, client: Optional[PingAPIClient],
                 definition: Optional[Dict[str, Any]] = None):
        if definition is None:
            if resource_type not in RESOURCE_DEFINITIONS:
                raise ValueError(f"Unknown resource type '{resource_type}'")
            definition = RESOURCE_DEFINITIONS[resource_type]

        self.resource_type = resource_type
        self.client = client
        self.definition = definition

    @property
    def service(self) -> str:
        return self.definition['service']

    def _base_context(self) -> Dict[str, str]:
        environment_id = getattr(self.client, 'export_environment_id', None)
        return {'environment_id': environment_id} if environment_id else {}

    def export_all(self) -> List[ImportBlock]:
        """
        Fetch every object of this resource type and map each one to an
        unsanitized import block. Returns an empty list when the API asked us
        to skip the resource (403, transport error, 204 for singletons).
        """
        logger.debug(f"Exporting all '{self.resource_type}' Resources...")

        if 'singleton' in self.definition:
            return self._export_singleton()

        if 'parent' in self.definition:
            records = self._child_records()
        else:
            records = self._records(self.definition, self._base_context())

        if records is None:
            return []

        return [self._build_block(record) for record in records]

    def _records(self, listing: Dict[str, Any], context: Dict[str, str]) -> Optional[List[Dict[str, str]]]:
        """Fetch one listing and reduce each object to its aliased string fields."""
        url_context = {key: quote(value, safe='') for key, value in context.items()}
        endpoint = listing['endpoint'].format(**url_context)

        api_objects = self.client.list_objects(
            endpoint, listing.get('items_path'), listing['api_function'], self.resource_type,
        )
        if api_objects is None:
            return None

        records = []
        for api_object in api_objects:
            record = self._extract_fields(api_object, listing['fields'])
            if record is None:
                logger.debug(f"Skipping {self.resource_type} object missing one of {sorted(listing['fields'])}")
                continue

            if not self._matches_filters(record, listing.get('filters')):
                continue

            merged = dict(context)
            merged.update(record)
            records.append(merged)

        return records

    def _child_records(self) -> Optional[List[Dict[str, str]]]:
        parent_records = self._records(self.definition['parent'], self._base_context())
        if parent_records is None:
            return None

        records = []
        for parent_record in parent_records:
            child_records = self._records(self.definition, parent_record)
            if child_records:
                records.extend(child_records)
        return records

    @staticmethod
    def _extract_fields(api_object: Any, fields: Dict[str, str]) -> Optional[Dict[str, str]]:
        record = {}
        for alias, path in fields.items():
            value = extract_field(api_object, path)
            if value is None or isinstance(value, (dict, list)):
                return None
            record[alias] = str(value)
        return record

    @staticmethod
    def _matches_filters(record: Dict[str, str], filters: Optional[Dict[str, Any]]) -> bool:
        if not filters:
            return True
        return all(record.get(alias) in allowed for alias, allowed in filters.items())

    def _comments(self, labelled: List[tuple]) -> tuple:
        comments = list(labelled)
        environment_id = self._base_context().get('environment_id')
        if environment_id:
            comments.append(('Export Environment ID', environment_id))
        comments.append(('Resource Type', self.resource_type))
        return generate_comment_information(comments)

    def _build_block(self, record: Dict[str, str]) -> ImportBlock:
        labelled = [(label, template.format(**record)) for label, template in self.definition['comments']]

        return ImportBlock(
            resource_type=self.resource_type,
            resource_name=self.definition['resource_name'].format(**record),
            resource_id=self.definition['resource_id'].format(**record),
            comment_information=self._comments(labelled),
        )

    def _export_singleton(self) -> List[ImportBlock]:
        singleton = self.definition['singleton']
        context = self._base_context()

        if 'endpoint' in singleton:
            api_object = self.client.get_object(singleton['endpoint'], singleton['api_function'], self.resource_type)
            if api_object is None:
                return []

        comments = self._comments([])
        if singleton.get('placeholder_id'):
            comments += (('Singleton ID', SINGLETON_ID_COMMENT_DATA),)

        return [ImportBlock(
            resource_type=self.resource_type,
            resource_name=singleton['resource_name'].format(**context),
            resource_id=singleton['resource_id'].format(**context),
            comment_information=comments,
        )]

    def __repr__(self) -> str:
        return f"ExportableResource({self.resource_type!r})"
