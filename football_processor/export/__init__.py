"""CSV encoding and the export orchestrator."""

from .csv_codec import escape_csv_value, table_to_csv, metadata_to_csv, list_to_csv
from .orchestrator import ExportOrchestrator, parse_season

__all__ = [
    'escape_csv_value',
    'table_to_csv',
    'metadata_to_csv',
    'list_to_csv',
    'ExportOrchestrator',
    'parse_season',
]
