"""
Base processor class for game record processing.
"""

from typing import Dict, List, Optional

import pandas as pd

from ..models import GameRecord
from ..loaders.corpus_loader import record_sort_key


class BaseProcessor:
    """Base class for all corpus processors."""

    def __init__(self, records: List[GameRecord]):
        """
        Initialize processor with game records.

        Args:
            records: Loaded GameRecords
        """
        self.records = records
        self.game_count = len(records)

    def create_dataframe(self, rows: List[Dict], columns: Optional[List[str]] = None) -> pd.DataFrame:
        """
        Create a DataFrame from rows with optional column ordering.

        Args:
            rows: List of row dictionaries
            columns: Optional list of column names for ordering

        Returns:
            pandas DataFrame
        """
        if not rows:
            return pd.DataFrame(columns=columns) if columns else pd.DataFrame()

        df = pd.DataFrame(rows)

        if columns:
            # Reorder columns, keeping any extra columns at the end
            existing_cols = [c for c in columns if c in df.columns]
            extra_cols = [c for c in df.columns if c not in columns]
            df = df[existing_cols + extra_cols]

        return df

    def get_score(self, record: GameRecord) -> str:
        """
        Get formatted score string.

        Returns:
            Score string like "34-3", or empty string if unscored
        """
        fm = record.frontmatter
        if fm.team_score is None or fm.opponent_score is None:
            return ''
        return f"{fm.team_score}-{fm.opponent_score}"

    def filter_by_season(self, season: Optional[int] = None) -> List[GameRecord]:
        """
        Filter records by season.

        Args:
            season: Season year, or None for all
        """
        if season is None:
            return self.records
        return [r for r in self.records if r.frontmatter.season == season]

    def filter_by_game_type(self, game_type: Optional[str] = None) -> List[GameRecord]:
        if not game_type:
            return self.records
        return [r for r in self.records if r.frontmatter.game_type == game_type]

    def sort_by_date(self, ascending: bool = True) -> List[GameRecord]:
        """
        Sort records by date.

        Args:
            ascending: True for oldest first, False for newest first
        """
        return sorted(self.records, key=record_sort_key, reverse=not ascending)

