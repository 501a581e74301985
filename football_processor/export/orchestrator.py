"""
Export orchestrator: resolves an ExportRequest into a CSVDownload.

Each request is handled in one pass with no state kept between calls.
Every failure leaves as BadRequestError, NotFoundError, or InternalError.
"""

import re
from typing import List, Optional

from ..errors import BadRequestError, InternalError, NotFoundError
from ..loaders.corpus_loader import CorpusLoader
from ..models import CSVDownload, ExportRequest, GameListItem, StatisticalTable
from ..parsers.table_parser import extract_tables
from ..utils.constants import (
    ALL_GAMES_FILENAME,
    CSV_BOM,
    CSV_LINE_ENDING,
    EXPORT_FORMATS,
    EXPORT_TYPES,
    METADATA_SECTION_LABEL,
    TABLES_SECTION_LABEL,
)
from ..utils.log import debug, exception
from .csv_codec import list_to_csv, metadata_to_csv, table_to_csv

TABLE_SEPARATOR = CSV_LINE_ENDING * 2
SEASON_PATTERN = re.compile(r'[0-9]+')


def parse_season(value: Optional[str]) -> int:
    """
    Parse the season parameter.

    Raises:
        BadRequestError: If the value is missing or not an integer
    """
    if value is None or str(value).strip() == '':
        raise BadRequestError("Season is required for season export")
    text = str(value).strip()
    # int() alone would also take "+2024", "20_24" and non-ASCII digits
    if not SEASON_PATTERN.fullmatch(text):
        raise BadRequestError(f"Invalid season: {value!r}")
    return int(text)


def tables_section(tables: List[StatisticalTable]) -> str:
    """Tables as CSV, separated by one blank line."""
    return TABLE_SEPARATOR.join(table_to_csv(table) for table in tables)


class ExportOrchestrator:
    """Turns export requests into downloadable CSV files."""

    def __init__(self, loader: Optional[CorpusLoader] = None, validate: bool = False,
                 include_bom: bool = False):
        """
        Args:
            loader: Corpus loader to read games from
            validate: Run schema validation while loading
            include_bom: Prefix content with a UTF-8 BOM so Excel picks
                the right encoding
        """
        self.loader = loader if loader is not None else CorpusLoader()
        self.validate = validate
        self.include_bom = include_bom

    def export(self, request: ExportRequest) -> CSVDownload:
        """
        Resolve and encode one export request.

        Raises:
            BadRequestError: Unknown type/format, missing slug, bad season
            NotFoundError: Unknown slug, empty corpus/season, no tables
            InternalError: Anything else, with a generic message
        """
        try:
            content, filename = self._dispatch(request)
        except (BadRequestError, NotFoundError):
            raise
        except Exception as e:
            exception(f"Export failed for {request}", e)
            raise InternalError() from e

        if self.include_bom:
            content = CSV_BOM + content

        debug(f"Exported {filename} ({len(content)} chars)")
        return CSVDownload.build(content, filename)

    def _dispatch(self, request: ExportRequest):
        if request.kind not in EXPORT_TYPES:
            raise BadRequestError(
                f"Invalid type: {request.kind!r}. Expected one of: {', '.join(EXPORT_TYPES)}"
            )
        if request.format not in EXPORT_FORMATS:
            raise BadRequestError(
                f"Invalid format: {request.format!r}. Expected one of: {', '.join(EXPORT_FORMATS)}"
            )

        if request.kind == 'single':
            return self._export_single(request)

        if request.format != 'csv':
            raise BadRequestError(f"Format {request.format!r} is only available for single games")

        if request.kind == 'all':
            items = self.loader.load_all_as_list_items(validate=self.validate)
            if not items:
                raise NotFoundError("No games found")
            return list_to_csv(items), ALL_GAMES_FILENAME

        season = parse_season(request.season)
        items = self._season_items(season)
        if not items:
            raise NotFoundError(f"No games found for season {season}")
        return list_to_csv(items), f'{season}-season.csv'

    def _season_items(self, season: int) -> List[GameListItem]:
        items = self.loader.load_all_as_list_items(validate=self.validate)
        return [item for item in items if item.season == season]

    def _export_single(self, request: ExportRequest):
        if not request.slug:
            raise BadRequestError("Slug is required for single game export")

        record = self.loader.load_by_slug(request.slug, validate=self.validate)
        slug = record.slug

        if request.format == 'metadata-csv':
            return metadata_to_csv(record.frontmatter), f'{slug}-metadata.csv'

        tables = list(extract_tables(record.body))

        if request.format == 'tables-csv':
            if not tables:
                raise NotFoundError(f"No tables found for {slug}")
            return tables_section(tables), f'{slug}-tables.csv'

        content = (
            f"{METADATA_SECTION_LABEL}{CSV_LINE_ENDING}"
            f"{metadata_to_csv(record.frontmatter)}{TABLE_SEPARATOR}"
            f"{TABLES_SECTION_LABEL}{CSV_LINE_ENDING}{tables_section(tables)}"
        )
        return content, f'{slug}.csv'
