"""
Helper utility functions for the football processor.
"""

import re
from datetime import date, datetime, timezone
from typing import Any, Optional

from .constants import DATE_FORMATS, ISO_DATE_FORMAT


def safe_int(value: Any, default: Optional[int] = 0) -> Optional[int]:
    """Safely convert value to int."""
    if value is None or value == '' or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (ValueError, TypeError, OverflowError):
        return default


def parse_date(value: Any) -> Optional[date]:
    """
    Parse a date value using multiple formats.

    YAML already decodes unquoted ISO dates, so date and datetime
    objects pass through.

    Args:
        value: Date string, date, or datetime

    Returns:
        date object or None if parsing fails
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value.strip(), fmt).date()
        except ValueError:
            continue

    return None


def format_iso_date(value: Optional[date]) -> str:
    """Format a date as YYYY-MM-DD, or empty string when absent."""
    if value is None:
        return ''
    return value.strftime(ISO_DATE_FORMAT)


def to_utc_timestamp(value: Optional[date]) -> Optional[datetime]:
    """Midnight UTC timestamp for a calendar date."""
    if value is None:
        return None
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def generate_slug(text: str) -> str:
    """
    Generate a URL-friendly slug from a string.

    Example: "Appalachian State" -> "appalachian-state"
    """
    if not text:
        return ""
    slug = re.sub(r'[^a-z0-9]+', '-', str(text).lower())
    return slug.strip('-')


def generate_game_slug(game_date: Any, opponent: str) -> str:
    """
    Generate a game slug.

    Format: YYYY-MM-DD-opponent-name

    Args:
        game_date: Game date (string or date)
        opponent: Opponent name

    Returns:
        Slug string, or empty string if the date cannot be parsed
    """
    parsed = parse_date(game_date)
    if not parsed:
        return ""
    return f"{format_iso_date(parsed)}-{generate_slug(opponent)}"


def camel_case_key(header: str) -> str:
    """
    Normalize a table header into a camelCase key.

    Examples:
        "First Downs" -> "firstDowns"
        "Comp-Att" -> "compAtt"
        "**Player**" -> "player"
    """
    normalized = strip_markdown_emphasis(header).replace('_', '').lower()
    normalized = re.sub(r'[^a-z0-9]+(.)', lambda m: m.group(1).upper(), normalized)
    normalized = re.sub(r'[^a-zA-Z0-9]', '', normalized)
    if normalized:
        normalized = normalized[0].lower() + normalized[1:]
    return normalized or 'value'


def strip_markdown_emphasis(value: str) -> str:
    """Remove bold/italic markers from a cell value."""
    return value.replace('**', '').replace('*', '').strip()


def convert_cell_value(value: str) -> Any:
    """
    Convert a table cell to int/float when it is a plain number.

    Compound values like "5-40", "34:42" or "3/10" stay strings.
    """
    cleaned = strip_markdown_emphasis(value)

    if '-' in cleaned or ':' in cleaned or '/' in cleaned:
        return cleaned

    if re.fullmatch(r'\d+', cleaned):
        return int(cleaned)
    if re.fullmatch(r'\d*\.\d+', cleaned):
        return float(cleaned)

    return cleaned
