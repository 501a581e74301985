"""
Schema validation for game frontmatter.

validate_frontmatter() returns a tagged result instead of raising so bulk
callers can filter documents without exception-driven control flow.
coerce_frontmatter() is the non-validating path: it never fails and
leaves anything it cannot read as None.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..errors import ValidationError
from ..models import Frontmatter
from ..utils.constants import (
    FIELD_ALIASES,
    GAME_TYPES,
    HOME_AWAY_VALUES,
    MAX_SEASON_LOOKAHEAD,
    MIN_SEASON,
    REQUIRED_FIELDS,
)
from ..utils.helpers import parse_date, safe_int

ISO_DATE_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validate_frontmatter: data on success, error otherwise."""

    success: bool
    data: Optional[Frontmatter] = None
    error: Optional[ValidationError] = None


def normalize_keys(raw_metadata: Mapping[str, Any]) -> Dict[str, Any]:
    """Apply field aliases (e.g. game_date -> date) without overwriting."""
    normalized = dict(raw_metadata)
    for alias, canonical in FIELD_ALIASES.items():
        if alias in normalized and canonical not in normalized:
            normalized[canonical] = normalized[alias]
    return normalized


def _is_present(value: Any) -> bool:
    return value is not None and not (isinstance(value, str) and value.strip() == '')


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _split_score(score: Any) -> Tuple[Any, Any]:
    """
    Return (team_score, opponent_score) from a score mapping.

    The team side is keyed 'team'; older documents key it by the school
    name, so any single non-'opponent' key is accepted.
    """
    if not isinstance(score, Mapping):
        return None, None
    opponent_score = score.get('opponent')
    if 'team' in score:
        return score.get('team'), opponent_score
    other_keys = [k for k in score if k != 'opponent']
    if len(other_keys) == 1:
        return score.get(other_keys[0]), opponent_score
    return None, opponent_score


def _check_season(value: Any) -> Optional[str]:
    if not _is_int(value):
        return 'season must be an integer year'
    max_season = datetime.now().year + MAX_SEASON_LOOKAHEAD
    if value < MIN_SEASON:
        return f'season must be {MIN_SEASON} or later'
    if value > max_season:
        return 'season cannot be more than one year in the future'
    return None


def _check_date(value: Any) -> Optional[str]:
    if isinstance(value, (date, datetime)):
        return None
    if not isinstance(value, str) or not ISO_DATE_RE.match(value.strip()):
        return 'date must be in YYYY-MM-DD format'
    if parse_date(value) is None:
        return 'date must be a valid date'
    return None


def _check_enum(value: Any, allowed: Tuple[str, ...], name: str) -> Optional[str]:
    if value not in allowed:
        return f"{name} must be one of: {', '.join(allowed)}"
    return None


def _check_optional_string(value: Any, name: str) -> Optional[str]:
    if value is not None and not isinstance(value, str):
        return f'{name} must be a string'
    return None


def _check_score(value: Any) -> Optional[str]:
    if value is None:
        return None
    team, opponent = _split_score(value)
    for side in (team, opponent):
        if not _is_int(side) or side < 0:
            return 'score must contain non-negative integer team and opponent scores'
    return None


def collect_errors(raw_metadata: Mapping[str, Any]) -> Tuple[List[str], List[Tuple[str, str]]]:
    """
    Check raw metadata against the schema.

    Returns:
        Tuple of (missing_fields, invalid_fields)
    """
    data = normalize_keys(raw_metadata)
    missing = [f for f in REQUIRED_FIELDS if not _is_present(data.get(f))]
    invalid: List[Tuple[str, str]] = []

    checks = {
        'season': _check_season,
        'game_type': lambda v: _check_enum(v, GAME_TYPES, 'game_type'),
        'home_away': lambda v: _check_enum(v, HOME_AWAY_VALUES, 'home_away'),
        'opponent': lambda v: None if isinstance(v, str) else 'opponent must be a string',
        'date': _check_date,
    }
    for field_name, check in checks.items():
        if field_name in missing:
            continue
        message = check(data.get(field_name))
        if message:
            invalid.append((field_name, message))

    attendance = data.get('attendance')
    if attendance is not None and (not _is_int(attendance) or attendance < 0):
        invalid.append(('attendance', 'attendance must be a non-negative integer'))

    for field_name in ('weather', 'location', 'opponent_short'):
        message = _check_optional_string(data.get(field_name), field_name)
        if message:
            invalid.append((field_name, message))

    message = _check_score(data.get('score'))
    if message:
        invalid.append(('score', message))

    return missing, invalid


def coerce_frontmatter(raw_metadata: Mapping[str, Any]) -> Frontmatter:
    """
    Best-effort conversion of raw metadata into a Frontmatter.

    Used when validation is skipped. Never raises; unreadable or missing
    values become None.
    """
    data = normalize_keys(raw_metadata)

    def _text(key: str) -> Optional[str]:
        value = data.get(key)
        if value is None:
            return None
        return value if isinstance(value, str) else str(value)

    attendance = safe_int(data.get('attendance'), None)
    if attendance is not None and attendance < 0:
        attendance = None

    team_score, opponent_score = _split_score(data.get('score'))

    return Frontmatter(
        season=safe_int(data.get('season'), None),
        game_type=_text('game_type'),
        home_away=_text('home_away'),
        opponent=_text('opponent'),
        date=parse_date(data.get('date')),
        attendance=attendance,
        weather=_text('weather'),
        location=_text('location'),
        opponent_short=_text('opponent_short'),
        team_score=safe_int(team_score, None),
        opponent_score=safe_int(opponent_score, None),
    )


def validate_frontmatter(raw_metadata: Mapping[str, Any], source: str = '') -> ValidationResult:
    """
    Validate raw metadata against the game schema.

    Args:
        raw_metadata: Decoded YAML mapping
        source: Document name used in error messages

    Returns:
        ValidationResult with typed data on success, or the error
    """
    missing, invalid = collect_errors(raw_metadata)
    if missing or invalid:
        return ValidationResult(
            success=False,
            error=ValidationError(missing, invalid, source=source),
        )
    return ValidationResult(success=True, data=coerce_frontmatter(raw_metadata))


def validate_frontmatter_strict(raw_metadata: Mapping[str, Any], source: str = '') -> Frontmatter:
    """Validate and return the typed frontmatter, raising ValidationError on failure."""
    result = validate_frontmatter(raw_metadata, source)
    if not result.success:
        raise result.error
    return result.data


def format_validation_errors(error: ValidationError) -> str:
    """Format a validation error as a numbered list for display."""
    entries = [(field, 'required field is missing') for field in error.missing_fields]
    entries.extend(error.invalid_fields)
    if not entries:
        return 'No errors'
    return '\n'.join(
        f"{idx}. [{field}] {message}" for idx, (field, message) in enumerate(entries, start=1)
    )
