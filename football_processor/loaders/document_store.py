"""
Document stores: where game Markdown documents come from.

A store only knows slugs and raw text. Parsing happens in the loader.
"""

from pathlib import Path
from typing import List, Mapping, Optional, Union

from ..errors import DocumentNotFound
from ..utils.constants import CONTENT_DIR, DOCUMENT_EXTENSION


class DocumentStore:
    """Interface implemented by every document source."""

    def list_slugs(self) -> List[str]:
        raise NotImplementedError

    def read(self, slug: str) -> str:
        raise NotImplementedError


class FileSystemDocumentStore(DocumentStore):
    """Reads '<slug>.md' files from a content directory."""

    def __init__(self, directory: Optional[Union[str, Path]] = None):
        """
        Args:
            directory: Folder holding the game documents. Defaults to
                CONTENT_DIR.
        """
        self.directory = Path(directory) if directory is not None else CONTENT_DIR

    def list_slugs(self) -> List[str]:
        """Slugs of every document in the directory, sorted by name."""
        if not self.directory.is_dir():
            return []
        return sorted(
            path.stem for path in self.directory.glob(f'*{DOCUMENT_EXTENSION}')
            if path.is_file()
        )

    def path_for(self, slug: str) -> Path:
        return self.directory / f'{slug}{DOCUMENT_EXTENSION}'

    def read(self, slug: str) -> str:
        """
        Read a document as UTF-8 text.

        Raises:
            DocumentNotFound: If no file exists for the slug
        """
        if not slug or '/' in slug or '\\' in slug or slug.startswith('.'):
            raise DocumentNotFound(f"No document for slug: {slug!r}")

        path = self.path_for(slug)
        if not path.is_file():
            raise DocumentNotFound(f"No document for slug: {slug!r}")

        with open(path, 'r', encoding='utf-8') as f:
            return f.read()

    def __repr__(self) -> str:
        return f"FileSystemDocumentStore({str(self.directory)!r})"


class InMemoryDocumentStore(DocumentStore):
    """Holds documents in a dict keyed by slug. Handy for tests and fixtures."""

    def __init__(self, documents: Optional[Mapping[str, str]] = None):
        self.documents = dict(documents or {})

    def list_slugs(self) -> List[str]:
        return sorted(self.documents)

    def read(self, slug: str) -> str:
        try:
            return self.documents[slug]
        except KeyError:
            raise DocumentNotFound(f"No document for slug: {slug!r}") from None

    def __repr__(self) -> str:
        return f"InMemoryDocumentStore({len(self.documents)} documents)"
