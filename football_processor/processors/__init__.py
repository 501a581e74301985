"""Data processors for aggregating game records."""

from .base_processor import BaseProcessor
from .season_summary_processor import SeasonSummaryProcessor, summarize

__all__ = [
    'BaseProcessor',
    'SeasonSummaryProcessor',
    'summarize',
]
