"""Parsing modules for game Markdown documents."""

from .frontmatter_parser import parse_frontmatter, split_document, decode_metadata
from .validator import (
    ValidationResult,
    validate_frontmatter,
    validate_frontmatter_strict,
    coerce_frontmatter,
    format_validation_errors,
)
from .table_parser import (
    TableSequence,
    extract_tables,
    iter_tables,
    find_table,
    get_available_tables,
    parse_team_section_tables,
    table_to_records,
    table_to_dataframe,
)

__all__ = [
    'parse_frontmatter',
    'split_document',
    'decode_metadata',
    'ValidationResult',
    'validate_frontmatter',
    'validate_frontmatter_strict',
    'coerce_frontmatter',
    'format_validation_errors',
    'TableSequence',
    'extract_tables',
    'iter_tables',
    'find_table',
    'get_available_tables',
    'parse_team_section_tables',
    'table_to_records',
    'table_to_dataframe',
]
