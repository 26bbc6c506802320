"""
HCL Renderer - Renders import blocks as Terraform HCL text.
Uses Jinja2 templates so the output layout lives in one place.
"""

import logging
from typing import Any, Iterable, List

from jinja2 import DictLoader, Environment, StrictUndefined, select_autoescape

from import_block import NAMESPACE_PREFIX, ImportBlock

logger = logging.getLogger(__name__)

HEADER_TEMPLATE_NAME = "header.tf.j2"
IMPORT_BLOCK_TEMPLATE_NAME = "import_block.tf.j2"
DOCUMENT_TEMPLATE_NAME = "document.tf.j2"

_TEMPLATES = {
    HEADER_TEMPLATE_NAME: (
        "# Terraform import blocks for {{ resource_type }}.\n"
        "# Generated from live configuration. Resource names carry the '{{ prefix }}' prefix\n"
        "# and escape unsupported characters as -hhhh- (hex code point).\n"
        "# Review, then run 'terraform plan -generate-config-out=generated.tf'.\n"
    ),
    IMPORT_BLOCK_TEMPLATE_NAME: (
        "\n"
        "{% for key, value in block.comment_information %}"
        "# {{ key | comment_text }}: {{ value | comment_text }}\n"
        "{% endfor %}"
        "import {\n"
        "  to = {{ block.address }}\n"
        '  id = "{{ block.resource_id | hcl_string }}"\n'
        "}\n"
    ),
    DOCUMENT_TEMPLATE_NAME: (
        "{% include '" + HEADER_TEMPLATE_NAME + "' %}"
        "{% for block in blocks %}"
        "{% include '" + IMPORT_BLOCK_TEMPLATE_NAME + "' %}"
        "{% endfor %}"
    ),
}


def hcl_string(value: Any) -> str:
    """Escape a value for the inside of an HCL double-quoted string."""
    text = str(value)
    text = text.replace("\\", "\\\\").replace('"', '\\"')
    text = text.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")
    # Template sequences would otherwise be interpolated by Terraform
    text = text.replace("${", "$${").replace("%{", "%%{")
    return text


def comment_text(value: Any) -> str:
    """Keep a comment entry on a single line."""
    return " ".join(str(value).splitlines())


def _create_environment() -> Environment:
    env = Environment(
        loader=DictLoader(_TEMPLATES),
        autoescape=select_autoescape(['html', 'xml']),
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters['hcl_string'] = hcl_string
    env.filters['comment_text'] = comment_text
    return env


class HCLRenderer:
    """
    Renders single import blocks and whole per-resource-type documents.
    Blocks that have not been sanitized yet are sanitized before rendering.
    """

    def __init__(self):
        self.env = _create_environment()

    def render_import_block(self, block: ImportBlock) -> str:
        template = self.env.get_template(IMPORT_BLOCK_TEMPLATE_NAME)
        return template.render(block=block.sanitize())

    def render_header(self, resource_type: str) -> str:
        template = self.env.get_template(HEADER_TEMPLATE_NAME)
        return template.render(resource_type=resource_type, prefix=NAMESPACE_PREFIX)

    def render_import_document(self, resource_type: str, blocks: Iterable[ImportBlock]) -> str:
        """
        Render the header followed by every block, ordered by sanitized resource name.
        """
        sanitized_blocks: List[ImportBlock] = sorted(
            (block.sanitize() for block in blocks),
            key=lambda block: block.resource_name,
        )
        logger.debug(f"Rendering {len(sanitized_blocks)} import blocks for {resource_type}")

        template = self.env.get_template(DOCUMENT_TEMPLATE_NAME)
        return template.render(
            resource_type=resource_type,
            prefix=NAMESPACE_PREFIX,
            blocks=sanitized_blocks,
        )
