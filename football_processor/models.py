"""
Value types shared by the parsers, loader, and exporters.

Every type here is a frozen dataclass: records are built once per
request and never mutated afterwards.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from .utils.constants import (
    CSV_CONTENT_TYPE,
    DEFAULT_EXPORT_FORMAT,
    DEFAULT_EXPORT_TYPE,
)
from .utils.helpers import format_iso_date, to_utc_timestamp


@dataclass(frozen=True)
class Frontmatter:
    """Typed game metadata. Any field may be None."""

    season: Optional[int] = None
    game_type: Optional[str] = None
    home_away: Optional[str] = None
    opponent: Optional[str] = None
    date: Optional[date] = None
    attendance: Optional[int] = None
    weather: Optional[str] = None
    location: Optional[str] = None
    opponent_short: Optional[str] = None
    team_score: Optional[int] = None
    opponent_score: Optional[int] = None

    @property
    def result(self) -> Optional[str]:
        """'win', 'loss', or 'tie' when both scores are known."""
        if self.team_score is None or self.opponent_score is None:
            return None
        if self.team_score > self.opponent_score:
            return 'win'
        if self.team_score < self.opponent_score:
            return 'loss'
        return 'tie'

    def get(self, name: str) -> Any:
        return getattr(self, name)


@dataclass(frozen=True)
class StatisticalTable:
    """
    Rectangular grid of string cells extracted from a game body.

    rows[0] is the header; every row has the header's cell count.
    """

    rows: Tuple[Tuple[str, ...], ...]
    title: Optional[str] = None

    @property
    def header(self) -> Tuple[str, ...]:
        return self.rows[0] if self.rows else ()

    @property
    def data_rows(self) -> Tuple[Tuple[str, ...], ...]:
        return self.rows[1:]

    @property
    def column_count(self) -> int:
        return len(self.header)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Tuple[str, ...]]:
        return iter(self.rows)


@dataclass(frozen=True)
class GameRecord:
    """One parsed game document."""

    slug: str
    frontmatter: Frontmatter
    body: str
    validated: bool = False

    def tables(self):
        """Lazy, restartable sequence of tables embedded in the body."""
        from .parsers.table_parser import extract_tables
        return extract_tables(self.body)

    def to_list_item(self) -> 'GameListItem':
        return GameListItem.from_frontmatter(self.slug, self.frontmatter)


@dataclass(frozen=True)
class GameListItem:
    """Lightweight projection of a game for corpus listings."""

    slug: str
    game_date: Optional[datetime]
    season: Optional[int]
    opponent: Optional[str]
    game_type: Optional[str]
    home_away: Optional[str] = None
    result: Optional[str] = None

    @classmethod
    def from_frontmatter(cls, slug: str, frontmatter: Frontmatter) -> 'GameListItem':
        return cls(
            slug=slug,
            game_date=to_utc_timestamp(frontmatter.date),
            season=frontmatter.season,
            opponent=frontmatter.opponent,
            game_type=frontmatter.game_type,
            home_away=frontmatter.home_away,
            result=frontmatter.result,
        )

    @property
    def date_string(self) -> str:
        """Calendar date as YYYY-MM-DD (empty when unknown)."""
        if self.game_date is None:
            return ''
        return format_iso_date(self.game_date.date())

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dictionary with gameDate as an ISO-8601 string."""
        return {
            'slug': self.slug,
            'gameDate': self.game_date.isoformat() if self.game_date else None,
            'season': self.season,
            'opponent': self.opponent,
            'gameType': self.game_type,
            'homeAway': self.home_away,
            'result': self.result,
        }


@dataclass(frozen=True)
class ExportRequest:
    """Decoded export parameters. Values are checked by the orchestrator."""

    kind: str = DEFAULT_EXPORT_TYPE
    format: str = DEFAULT_EXPORT_FORMAT
    slug: Optional[str] = None
    season: Optional[str] = None

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> 'ExportRequest':
        """
        Build a request from query parameters.

        Recognized keys: slug, format, type, season. Missing or empty
        format/type fall back to 'csv' and 'single'.
        """
        def _get(key: str) -> Optional[str]:
            value = params.get(key)
            if value is None:
                return None
            value = str(value)
            return value if value != '' else None

        return cls(
            kind=_get('type') or DEFAULT_EXPORT_TYPE,
            format=_get('format') or DEFAULT_EXPORT_FORMAT,
            slug=_get('slug'),
            season=_get('season'),
        )


@dataclass(frozen=True)
class CSVDownload:
    """CSV body plus the filename and headers a client needs to save it."""

    content: str
    filename: str
    headers: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def build(cls, content: str, filename: str) -> 'CSVDownload':
        # quoted-string: backslash and double quote must be escaped
        quoted = filename.replace('\\', '\\\\').replace('"', '\\"')
        headers = MappingProxyType({
            'Content-Type': CSV_CONTENT_TYPE,
            'Content-Disposition': f'attachment; filename="{quoted}"',
        })
        return cls(content=content, filename=filename, headers=headers)
