"""
Football constants, content locations, and configuration.
"""

import os
from pathlib import Path
from typing import Optional


# === Directory and File Path Configuration ===
def _find_project_root() -> Path:
    """Find the project root directory.

    Searches for GAME_STATS_DIR env var, then .project_root marker,
    then falls back to parent.parent.parent.
    """
    # Method 1: Check environment variable first
    env_base = os.environ.get("GAME_STATS_DIR")
    if env_base:
        path = Path(env_base).expanduser()
        if path.exists():
            return path

    # Method 2: Look for .project_root marker file
    current = Path(__file__).resolve()
    for parent in [current] + list(current.parents):
        marker = parent / ".project_root"
        if marker.exists():
            return parent

    # Method 3: Fall back to parent.parent.parent
    return Path(__file__).resolve().parent.parent.parent


def _env_int(name: str, default: Optional[int] = None) -> Optional[int]:
    """Read an integer setting from the environment."""
    raw = os.environ.get(name, '').strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


BASE_DIR = _find_project_root()
CONTENT_DIR = BASE_DIR / "content" / "games"
DOCUMENT_EXTENSION = ".md"

# Loader parallelism (None or 1 = sequential)
DEFAULT_MAX_WORKERS = _env_int("GAME_STATS_WORKERS")

# === FRONTMATTER SCHEMA ===
GAME_TYPES = ('regular_season', 'bowl', 'playoff', 'championship')
HOME_AWAY_VALUES = ('home', 'away', 'neutral')

REQUIRED_FIELDS = ['season', 'game_type', 'home_away', 'opponent', 'date']

# Older documents use game_date instead of date
FIELD_ALIASES = {
    'game_date': 'date',
}

# First season on record; seasons may run at most one year ahead
MIN_SEASON = 1896
MAX_SEASON_LOOKAHEAD = 1

# Frontmatter block delimiters
FRONTMATTER_OPEN = '---'
FRONTMATTER_CLOSE = ('---', '...')

# === CSV EXPORT ===
CSV_DELIMITER = ','
CSV_QUOTE = '"'
CSV_LINE_ENDING = '\n'
CSV_BOM = '\ufeff'
CSV_CONTENT_TYPE = 'text/csv; charset=utf-8'

LIST_CSV_COLUMNS = ['slug', 'date', 'season', 'opponent', 'game_type']

# Order of rows in the field,value metadata export
METADATA_CSV_FIELDS = [
    'season',
    'game_type',
    'home_away',
    'opponent',
    'date',
    'attendance',
    'weather',
    'location',
    'opponent_short',
    'team_score',
    'opponent_score',
    'result',
]

METADATA_SECTION_LABEL = '# Game Metadata'
TABLES_SECTION_LABEL = '# Game Statistics Tables'

EXPORT_FORMATS = ('csv', 'metadata-csv', 'tables-csv')
EXPORT_TYPES = ('single', 'all', 'season')
DEFAULT_EXPORT_FORMAT = 'csv'
DEFAULT_EXPORT_TYPE = 'single'

ALL_GAMES_FILENAME = 'all-games.csv'

# Date formats for parsing
DATE_FORMATS = ["%Y-%m-%d", "%m/%d/%Y", "%m/%d/%y", "%B %d, %Y", "%b %d, %Y"]
ISO_DATE_FORMAT = "%Y-%m-%d"

# === EXCEL ===
EXCEL_COLORS = {
    'primary_orange': '#F56600',
    'white': '#FFFFFF',
    'header_blue': '#522D80',
    'alt_row': '#F9F4EE',
}

# Excel limits sheet names to 31 characters
EXCEL_SHEET_NAME_LIMIT = 31
