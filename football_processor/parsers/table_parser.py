"""
Table extractor for game Markdown bodies.

Finds pipe tables and inline HTML tables, in document order, and turns
each into a rectangular StatisticalTable. Rows that are shorter than the
header are padded with empty cells; longer rows are truncated to the
header's width.
"""

import re
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

import pandas as pd
from bs4 import BeautifulSoup

from ..models import StatisticalTable
from ..utils.helpers import camel_case_key, convert_cell_value

HEADING_RE = re.compile(r'^\s{0,3}(#{1,6})\s+(.+?)\s*#*\s*$')
ALIGNMENT_ROW_RE = re.compile(r'^\|?\s*:?-+:?\s*(\|\s*:?-+:?\s*)*\|?$')
FENCE_RE = re.compile(r'^\s{0,3}(```|~~~)')
BOLD_LABEL_RE = re.compile(r'^\*\*(.+?)\*\*:?$')
HTML_TABLE_OPEN_RE = re.compile(r'<table\b', re.IGNORECASE)
HTML_TABLE_CLOSE_RE = re.compile(r'</table\s*>', re.IGNORECASE)
UNESCAPED_PIPE_RE = re.compile(r'(?<!\\)\|')
WHITESPACE_RE = re.compile(r'\s+')


class TableSequence:
    """
    Lazy, restartable sequence of the tables in a body.

    Every iteration rescans the body, so the sequence can be consumed any
    number of times and always yields the same tables in the same order.
    """

    def __init__(self, body: str):
        self._body = body or ''

    def __iter__(self) -> Iterator[StatisticalTable]:
        return iter_tables(self._body)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return next(iter(self), None) is not None

    def __getitem__(self, index: int) -> StatisticalTable:
        return self.to_list()[index]

    def to_list(self) -> List[StatisticalTable]:
        return list(self)


def extract_tables(body: str) -> TableSequence:
    """Return the lazy table sequence for a game body."""
    return TableSequence(body)


def split_pipe_row(line: str) -> List[str]:
    """
    Split one pipe-table line into trimmed cells.

    Border pipes are dropped and '\\|' is kept as a literal pipe inside
    the cell.
    """
    text = line.strip()
    if not text:
        return []

    cells = UNESCAPED_PIPE_RE.split(text)
    if text.startswith('|'):
        cells = cells[1:]
    if len(text) > 1 and text.endswith('|') and not text.endswith('\\|') and cells:
        cells = cells[:-1]

    return [cell.replace('\\|', '|').strip() for cell in cells]


def normalize_rows(rows: Sequence[Sequence[str]]) -> Optional[Tuple[Tuple[str, ...], ...]]:
    """Pad or truncate every row to the header width."""
    if not rows or not rows[0]:
        return None
    width = len(rows[0])
    normalized = []
    for row in rows:
        cells = list(row[:width])
        if len(cells) < width:
            cells.extend([''] * (width - len(cells)))
        normalized.append(tuple(cells))
    return tuple(normalized)


def _build_pipe_table(lines: List[str], title: Optional[str]) -> Optional[StatisticalTable]:
    rows = [split_pipe_row(line) for line in lines if not ALIGNMENT_ROW_RE.match(line.strip())]
    rows = [row for row in rows if row]
    normalized = normalize_rows(rows)
    if normalized is None:
        return None
    return StatisticalTable(rows=normalized, title=title)


def _cell_text(cell) -> str:
    return WHITESPACE_RE.sub(' ', cell.get_text(' ', strip=True)).strip()


def _build_html_tables(markup: str, title: Optional[str]) -> List[StatisticalTable]:
    """Parse every top-level <table> in a chunk of HTML."""
    soup = BeautifulSoup(markup, 'html.parser')
    tables = []

    for table in soup.find_all('table'):
        if table.find_parent('table') is not None:
            continue

        rows = []
        for tr in table.find_all('tr'):
            if tr.find_parent('table') is not table:
                continue
            cells = [_cell_text(cell) for cell in tr.find_all(['th', 'td'], recursive=False)]
            if cells:
                rows.append(cells)

        normalized = normalize_rows(rows)
        if normalized is None:
            continue

        caption = table.find('caption')
        table_title = _cell_text(caption) if caption else title
        tables.append(StatisticalTable(rows=normalized, title=table_title or title))

    return tables


def iter_tables(body: str) -> Iterator[StatisticalTable]:
    """
    Yield every table in a body in document order.

    Each table is titled with the closest heading above it. Content inside
    fenced code blocks is ignored.
    """
    if not body:
        return

    lines = body.splitlines()
    title = None
    in_fence = False
    i = 0

    while i < len(lines):
        line = lines[i]
        stripped = line.strip()

        if FENCE_RE.match(line):
            in_fence = not in_fence
            i += 1
            continue
        if in_fence:
            i += 1
            continue

        heading = HEADING_RE.match(line)
        if heading:
            title = heading.group(2).strip()
            i += 1
            continue

        if stripped.startswith('|'):
            block = []
            while i < len(lines) and lines[i].strip().startswith('|'):
                block.append(lines[i])
                i += 1
            table = _build_pipe_table(block, title)
            if table is not None:
                yield table
            continue

        if HTML_TABLE_OPEN_RE.search(line):
            block = []
            depth = 0
            while i < len(lines):
                block.append(lines[i])
                depth += len(HTML_TABLE_OPEN_RE.findall(lines[i]))
                depth -= len(HTML_TABLE_CLOSE_RE.findall(lines[i]))
                i += 1
                if depth <= 0:
                    break
            yield from _build_html_tables('\n'.join(block), title)
            continue

        i += 1


def find_table(body: str, title: str) -> Optional[StatisticalTable]:
    """
    Find the first table under a heading (case-insensitive).

    Example: find_table(body, "Scoring Summary")
    """
    wanted = title.strip().lower()
    for table in iter_tables(body):
        if table.title and table.title.lower() == wanted:
            return table
    return None


def get_available_tables(body: str) -> List[str]:
    """Titles of the headings that have at least one table beneath them."""
    titles = []
    for table in iter_tables(body):
        if table.title and table.title not in titles:
            titles.append(table.title)
    return titles


def _section_lines(body: str, section_title: str) -> List[str]:
    """Lines from a heading up to the next heading of the same or higher level."""
    lines = (body or '').splitlines()
    wanted = section_title.strip().lower()
    start = None
    level = 0

    for idx, line in enumerate(lines):
        heading = HEADING_RE.match(line)
        if not heading:
            continue
        if start is None:
            if heading.group(2).strip().lower() == wanted:
                start = idx
                level = len(heading.group(1))
        elif len(heading.group(1)) <= level:
            return lines[start:idx]

    return lines[start:] if start is not None else []


def parse_team_section_tables(body: str, section_title: str) -> Dict[str, StatisticalTable]:
    """
    Parse a section whose tables are introduced by bold labels.

    Individual stat sections list one table per team:

        ### Passing

        **Clemson**

        | Player | Comp-Att | Yards |
        ...

        **Opponent**

        | Player | Comp-Att | Yards |

    Returns:
        Mapping of label (e.g. 'Clemson', 'Opponent') to its first table
    """
    lines = _section_lines(body, section_title)
    result: Dict[str, StatisticalTable] = {}

    for idx, line in enumerate(lines):
        label = BOLD_LABEL_RE.match(line.strip())
        if not label:
            continue
        name = label.group(1).strip()
        if name in result:
            continue
        following = []
        for rest in lines[idx + 1:]:
            if BOLD_LABEL_RE.match(rest.strip()) or HEADING_RE.match(rest):
                break
            following.append(rest)
        table = next(iter_tables('\n'.join(following)), None)
        if table is not None:
            result[name] = StatisticalTable(rows=table.rows, title=section_title)

    return result


def table_to_records(table: StatisticalTable) -> List[Dict[str, Any]]:
    """
    Convert a table into row dictionaries keyed by camelCase headers.

    Plain numbers become int/float; compound values like "5-40" or
    "34:42" stay strings.
    """
    keys = [camel_case_key(header) for header in table.header]
    return [
        {key: convert_cell_value(value) for key, value in zip(keys, row)}
        for row in table.data_rows
    ]


def table_to_dataframe(table: StatisticalTable) -> pd.DataFrame:
    """Data rows as a DataFrame with the header row as columns."""
    if not table.rows:
        return pd.DataFrame()
    return pd.DataFrame([list(row) for row in table.data_rows], columns=list(table.header))
