"""
Import block batch validation - resource names and IDs must be unique per resource type.
"""

import logging
from collections import Counter
from typing import Iterable, List, Tuple

from import_block import ImportBlock

logger = logging.getLogger(__name__)


class DuplicateImportBlockError(Exception):
    """Raised when a batch of import blocks repeats a resource name or resource ID"""

    def __init__(self, duplicate_names: List[str], duplicate_ids: List[str]):
        self.duplicate_names = duplicate_names
        self.duplicate_ids = duplicate_ids

        problems = []
        if duplicate_names:
            problems.append(f"resource names are not unique: {', '.join(duplicate_names)}")
        if duplicate_ids:
            problems.append(f"resource IDs are not unique: {', '.join(duplicate_ids)}")
        super().__init__("; ".join(problems))


def find_duplicates(blocks: Iterable[ImportBlock]) -> Tuple[List[str], List[str]]:
    """Return the sorted resource names and resource IDs that occur more than once."""
    name_counts = Counter()
    id_counts = Counter()

    for block in blocks:
        name_counts[block.resource_name] += 1
        id_counts[block.resource_id] += 1

    duplicate_names = sorted(name for name, count in name_counts.items() if count > 1)
    duplicate_ids = sorted(resource_id for resource_id, count in id_counts.items() if count > 1)
    return duplicate_names, duplicate_ids


def validate_import_blocks(blocks: Iterable[ImportBlock]) -> None:
    """
    Check one resource type's batch for colliding names or IDs.
    Names are compared as given, so validate after sanitizing.
    """
    duplicate_names, duplicate_ids = find_duplicates(blocks)

    if duplicate_names or duplicate_ids:
        error = DuplicateImportBlockError(duplicate_names, duplicate_ids)
        logger.error(f"Import block validation failed: {error}")
        raise error
