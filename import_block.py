"""
Import Block - Terraform import record with resource name sanitization.
"""

import logging
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)

# Prepended to every sanitized resource name. Changing it renames every
# previously generated Terraform address.
NAMESPACE_PREFIX = "pingcli__"

SINGLETON_ID_COMMENT_DATA = (
    "This resource is a singleton, so the value of 'ID' in the import block does not matter "
    "- it is just a placeholder and required by terraform."
)

_SAFE_CHARACTERS = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
    "0123456789"
    "_"
)

CommentInformation = Tuple[Tuple[str, str], ...]


def escape_character(char: str) -> str:
    """
    Escape a single code point for use in a Terraform identifier.

    ASCII letters, digits and underscore pass through unchanged. Anything else
    becomes '-hhhh-' with the code point in lowercase hex, zero-padded to at
    least four digits (astral code points keep all their digits).
    """
    if len(char) != 1:
        raise ValueError(f"Expected a single character, got {char!r}")

    if char in _SAFE_CHARACTERS:
        return char

    return f"-{ord(char):04x}-"


def sanitize_resource_name(name: str) -> str:
    """
    Turn an arbitrary label into a namespaced Terraform resource name.

    Not idempotent: sanitizing an already sanitized name escapes the hyphens
    of its escape tokens again. Use ImportBlock.sanitize() when the same data
    may pass through more than once.
    """
    return NAMESPACE_PREFIX + "".join(escape_character(char) for char in name)


def generate_comment_information(
        data: Union[Mapping[Any, Any], Iterable[Tuple[Any, Any]], None]) -> CommentInformation:
    """Build ordered (key, value) comment pairs, keeping the order they were given in."""
    if not data:
        return ()

    pairs = data.items() if isinstance(data, Mapping) else data
    return tuple((str(key), str(value)) for key, value in pairs)


class ImportBlock:
    """
    One Terraform import: resource type, resource name, resource ID and comments.

    Equality and hashing only look at the type, name and ID. Comments are
    documentation and do not take part in identity.
    """

    def __init__(self, resource_type: str, resource_name: str, resource_id: str,
                 comment_information: Optional[Iterable[Tuple[str, str]]] = None,
                 sanitized: bool = False):
        self._resource_type = resource_type
        self._resource_name = resource_name
        self._resource_id = resource_id
        self._comment_information = generate_comment_information(comment_information)
        self._sanitized = sanitized

    @property
    def resource_type(self) -> str:
        return self._resource_type

    @property
    def resource_name(self) -> str:
        return self._resource_name

    @property
    def resource_id(self) -> str:
        return self._resource_id

    @property
    def comment_information(self) -> CommentInformation:
        return self._comment_information

    @property
    def sanitized(self) -> bool:
        return self._sanitized

    @property
    def address(self) -> str:
        """Terraform address the import targets, e.g. 'pingone_group.pingcli__Admins'."""
        return f"{self._resource_type}.{self._resource_name}"

    def sanitize(self) -> "ImportBlock":
        """
        Return a copy whose resource name has been sanitized.

        A block that is already sanitized is returned as is, so calling this
        twice never double-escapes the name.
        """
        if self._sanitized:
            return self

        sanitized_name = sanitize_resource_name(self._resource_name)
        logger.debug(f"Sanitized resource name {self._resource_name!r} to {sanitized_name!r}")

        return ImportBlock(
            self._resource_type,
            sanitized_name,
            self._resource_id,
            self._comment_information,
            sanitized=True,
        )

    def _key(self) -> Tuple[str, str, str]:
        return (self._resource_type, self._resource_name, self._resource_id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImportBlock):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return (f"ImportBlock(resource_type={self._resource_type!r}, "
                f"resource_name={self._resource_name!r}, resource_id={self._resource_id!r})")
