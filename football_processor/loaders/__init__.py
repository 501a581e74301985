"""Document stores and the corpus loader."""

from .document_store import DocumentStore, FileSystemDocumentStore, InMemoryDocumentStore
from .corpus_loader import CorpusLoader, parse_game_document, load_corpus

__all__ = [
    'DocumentStore',
    'FileSystemDocumentStore',
    'InMemoryDocumentStore',
    'CorpusLoader',
    'parse_game_document',
    'load_corpus',
]
