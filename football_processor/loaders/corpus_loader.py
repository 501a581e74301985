"""
Corpus loader: turns store documents into GameRecords and list items.

Bulk loads are lenient: a document that fails to parse or validate is
skipped with a warning. Single-document loads raise the specific error.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Callable, List, Optional, Tuple, TypeVar

from ..errors import (
    DocumentNotFound,
    MalformedDocumentError,
    NotFoundError,
    ValidationError,
)
from ..models import Frontmatter, GameListItem, GameRecord
from ..parsers.frontmatter_parser import parse_frontmatter
from ..parsers.validator import coerce_frontmatter, validate_frontmatter_strict
from ..utils.constants import DEFAULT_MAX_WORKERS
from ..utils.log import debug, info, warn
from .document_store import DocumentStore, FileSystemDocumentStore

T = TypeVar('T')

# Failures that drop a single document from a bulk load
SKIPPABLE_ERRORS = (MalformedDocumentError, ValidationError, DocumentNotFound)


def build_frontmatter(raw_metadata: dict, slug: str, validate: bool) -> Frontmatter:
    if validate:
        return validate_frontmatter_strict(raw_metadata, source=slug)
    return coerce_frontmatter(raw_metadata)


def parse_game_document(slug: str, raw: str, validate: bool = False) -> GameRecord:
    """
    Parse one raw document into a GameRecord.

    Raises:
        MalformedDocumentError: Frontmatter missing or undecodable
        ValidationError: validate=True and the metadata breaks the schema
    """
    raw_metadata, body = parse_frontmatter(raw, source=slug)
    frontmatter = build_frontmatter(raw_metadata, slug, validate)
    return GameRecord(slug=slug, frontmatter=frontmatter, body=body, validated=validate)


def _date_sort_key(slug: str, value: Optional[date]) -> Tuple[bool, date, str]:
    # Undated records go last; slug breaks ties
    return (value is None, value or date.min, slug)


def record_sort_key(record: GameRecord) -> Tuple[bool, date, str]:
    return _date_sort_key(record.slug, record.frontmatter.date)


def list_item_sort_key(item: GameListItem) -> Tuple[bool, date, str]:
    return _date_sort_key(item.slug, item.game_date.date() if item.game_date else None)


class CorpusLoader:
    """Loads game documents from a document store."""

    def __init__(self, store: Optional[DocumentStore] = None, max_workers: Optional[int] = None):
        """
        Args:
            store: Document source. Defaults to the content directory.
            max_workers: Parse documents in a thread pool when greater
                than 1. Defaults to GAME_STATS_WORKERS.
        """
        self.store = store if store is not None else FileSystemDocumentStore()
        self.max_workers = max_workers if max_workers is not None else DEFAULT_MAX_WORKERS

    def _read(self, slug: str) -> str:
        try:
            return self.store.read(slug)
        except UnicodeDecodeError as e:
            raise MalformedDocumentError("Document is not valid UTF-8", slug) from e

    def _map(self, func: Callable[[str], T], slugs: List[str]) -> List[T]:
        """Apply func to each slug, in a thread pool when configured."""
        if self.max_workers and self.max_workers > 1 and len(slugs) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                return list(executor.map(func, slugs))
        return [func(slug) for slug in slugs]

    def _load_lenient(self, parse: Callable[[str], T]) -> List[T]:
        slugs = self.store.list_slugs()

        def _attempt(slug: str):
            try:
                return parse(slug)
            except SKIPPABLE_ERRORS as e:
                warn(f"Skipping {slug}: {e}")
                return None

        results = self._map(_attempt, slugs)
        loaded = [r for r in results if r is not None]

        skipped = len(slugs) - len(loaded)
        if skipped:
            warn(f"Skipped {skipped} of {len(slugs)} documents")
        debug(f"Loaded {len(loaded)} documents from {self.store!r}")
        return loaded

    def load_all(self, validate: bool = False) -> List[GameRecord]:
        """
        Load every game in the store.

        Returns:
            Records sorted by (date ascending, slug), undated last
        """
        records = self._load_lenient(
            lambda slug: parse_game_document(slug, self._read(slug), validate)
        )
        return sorted(records, key=record_sort_key)

    def load_all_as_list_items(self, validate: bool = False) -> List[GameListItem]:
        """List projections of every game. Only the frontmatter is parsed."""
        def _parse_item(slug: str) -> GameListItem:
            raw_metadata, _ = parse_frontmatter(self._read(slug), source=slug)
            frontmatter = build_frontmatter(raw_metadata, slug, validate)
            return GameListItem.from_frontmatter(slug, frontmatter)

        items = self._load_lenient(_parse_item)
        return sorted(items, key=list_item_sort_key)

    def load_by_slug(self, slug: str, validate: bool = False) -> GameRecord:
        """
        Load one game.

        Raises:
            NotFoundError: If the store has no document for the slug
            MalformedDocumentError: If the frontmatter cannot be read
            ValidationError: If validate=True and the metadata is invalid
        """
        try:
            raw = self._read(slug)
        except DocumentNotFound as e:
            raise NotFoundError(f"Game not found: {slug}") from e
        return parse_game_document(slug, raw, validate)

    def load_season(self, season: int, validate: bool = False) -> List[GameRecord]:
        """All games of one season, in corpus order."""
        return [r for r in self.load_all(validate) if r.frontmatter.season == season]

    def get_all_seasons(self) -> List[int]:
        """Distinct seasons, newest first."""
        seasons = {item.season for item in self.load_all_as_list_items() if item.season is not None}
        return sorted(seasons, reverse=True)

    def get_all_opponents(self) -> List[str]:
        """Distinct opponent names, alphabetical."""
        return sorted({
            item.opponent for item in self.load_all_as_list_items() if item.opponent
        })

    def get_all_slugs(self) -> List[str]:
        return self.store.list_slugs()


def load_corpus(content_dir=None, validate: bool = False, max_workers: Optional[int] = None) -> List[GameRecord]:
    """Convenience wrapper: load every game under a content directory."""
    loader = CorpusLoader(FileSystemDocumentStore(content_dir), max_workers=max_workers)
    records = loader.load_all(validate=validate)
    info(f"Loaded {len(records)} games")
    return records
