"""
Frontmatter parser for game Markdown documents.

A document opens with a YAML block fenced by '---' lines; everything after
the closing fence is the body, preserved as written.
"""

from typing import Any, Dict, Tuple

import yaml

from ..errors import MalformedDocumentError
from ..utils.constants import FRONTMATTER_CLOSE, FRONTMATTER_OPEN


def split_document(raw: str, source: str = '') -> Tuple[str, str]:
    """
    Split a raw document into its metadata text and body.

    Args:
        raw: Full document text
        source: Document name used in error messages

    Returns:
        Tuple of (metadata_text, body)

    Raises:
        MalformedDocumentError: If the opening fence is absent or the
            block is never closed
    """
    if not isinstance(raw, str):
        raise MalformedDocumentError(f"Expected string, got {type(raw).__name__}", source)

    text = raw[1:] if raw.startswith('\ufeff') else raw
    lines = text.splitlines(keepends=True)

    if not lines or lines[0].rstrip('\r\n').rstrip() != FRONTMATTER_OPEN:
        raise MalformedDocumentError("Missing frontmatter block", source)

    for index in range(1, len(lines)):
        if lines[index].rstrip('\r\n').rstrip() in FRONTMATTER_CLOSE:
            metadata_text = ''.join(lines[1:index])
            body = ''.join(lines[index + 1:])
            return metadata_text, body

    raise MalformedDocumentError("Unterminated frontmatter block", source)


def decode_metadata(metadata_text: str, source: str = '') -> Dict[str, Any]:
    """
    Decode the YAML metadata block into a mapping.

    Raises:
        MalformedDocumentError: On YAML errors (impossible dates included) or
            non-mapping content
    """
    try:
        data = yaml.safe_load(metadata_text)
    except (yaml.YAMLError, ValueError) as e:
        # safe_load raises ValueError for impossible dates like 2024-13-45
        raise MalformedDocumentError(f"Invalid YAML in frontmatter: {e}", source) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedDocumentError(
            f"Frontmatter must be a mapping, got {type(data).__name__}", source
        )

    return {str(key): value for key, value in data.items()}


def parse_frontmatter(raw: str, source: str = '') -> Tuple[Dict[str, Any], str]:
    """
    Parse a game document.

    Args:
        raw: Full document text
        source: Document name used in error messages

    Returns:
        Tuple of (raw_metadata, body)
    """
    metadata_text, body = split_document(raw, source)
    return decode_metadata(metadata_text, source), body
