"""
CSV encoding for tables, game metadata, and game listings.

Rows are joined with '\\n' and the output never ends with a line
terminator, so callers can concatenate sections predictably.
"""

from datetime import date
from typing import Any, Iterable, Sequence

from ..models import Frontmatter, GameListItem, StatisticalTable
from ..utils.constants import (
    CSV_DELIMITER,
    CSV_LINE_ENDING,
    CSV_QUOTE,
    LIST_CSV_COLUMNS,
    METADATA_CSV_FIELDS,
)
from ..utils.helpers import format_iso_date

_NEEDS_QUOTING = (CSV_DELIMITER, CSV_QUOTE, '\n', '\r')


def escape_csv_value(value: Any) -> str:
    """
    Render one CSV field.

    None becomes an empty field. Values containing a comma, quote, or
    line break are quoted, with embedded quotes doubled.
    """
    if value is None:
        return ''
    if isinstance(value, date):
        text = format_iso_date(value)
    else:
        text = str(value)

    if any(ch in text for ch in _NEEDS_QUOTING):
        return CSV_QUOTE + text.replace(CSV_QUOTE, CSV_QUOTE * 2) + CSV_QUOTE
    return text


def encode_row(values: Sequence[Any]) -> str:
    return CSV_DELIMITER.join(escape_csv_value(v) for v in values)


def encode_rows(rows: Iterable[Sequence[Any]]) -> str:
    return CSV_LINE_ENDING.join(encode_row(row) for row in rows)


def table_to_csv(table: StatisticalTable) -> str:
    """One CSV row per table row, header included."""
    return encode_rows(table.rows)


def metadata_to_csv(frontmatter: Frontmatter) -> str:
    """
    Two-column field,value rendering of a game's metadata.

    Fields appear in a fixed order whether or not they are set.
    """
    rows = [('field', 'value')]
    rows.extend((name, frontmatter.get(name)) for name in METADATA_CSV_FIELDS)
    return encode_rows(rows)


def list_to_csv(items: Iterable[GameListItem]) -> str:
    """
    Tabular listing: slug,date,season,opponent,game_type.

    An empty listing yields just the header row.
    """
    rows = [tuple(LIST_CSV_COLUMNS)]
    for item in items:
        rows.append((item.slug, item.date_string, item.season, item.opponent, item.game_type))
    return encode_rows(rows)
