"""
Season and opponent records processor.
"""

from collections import defaultdict
from typing import Any, Dict, List, Optional

import pandas as pd

from .base_processor import BaseProcessor
from ..models import GameRecord
from ..utils.helpers import format_iso_date

GAME_LOG_COLUMNS = [
    'Date', 'Season', 'Opponent', 'Type', 'Site', 'Score', 'Result', 'Attendance', 'Slug',
]
RECORD_COLUMNS = ['Games', 'W', 'L', 'T', 'Win %', 'PF', 'PA', 'PPG', 'Opp PPG']


def _empty_record() -> Dict[str, Any]:
    return {
        'games': 0,
        'wins': 0,
        'losses': 0,
        'ties': 0,
        'points_for': 0,
        'points_against': 0,
        'scored_games': 0,
    }


def summarize(records: List[GameRecord]) -> Dict[str, Any]:
    """
    Overall win/loss record and scoring for a set of games.

    Only games with both scores count toward the record and averages;
    total_games counts every game.

    Returns:
        Dictionary with total_games, wins, losses, ties, win_percentage,
        points_scored, points_allowed, avg_points_scored, avg_points_allowed
    """
    stats = _empty_record()
    for record in records:
        _add_game(stats, record)

    scored = stats['scored_games']
    return {
        'total_games': stats['games'],
        'wins': stats['wins'],
        'losses': stats['losses'],
        'ties': stats['ties'],
        'win_percentage': _pct(stats['wins'], scored),
        'points_scored': stats['points_for'],
        'points_allowed': stats['points_against'],
        'avg_points_scored': _avg(stats['points_for'], scored),
        'avg_points_allowed': _avg(stats['points_against'], scored),
    }


def _add_game(stats: Dict[str, Any], record: GameRecord) -> None:
    fm = record.frontmatter
    stats['games'] += 1
    result = fm.result
    if result is None:
        return
    stats['scored_games'] += 1
    stats['points_for'] += fm.team_score
    stats['points_against'] += fm.opponent_score
    if result == 'win':
        stats['wins'] += 1
    elif result == 'loss':
        stats['losses'] += 1
    else:
        stats['ties'] += 1


def _pct(wins: int, games: int) -> float:
    return round(wins / games * 100, 1) if games else 0.0


def _avg(points: int, games: int) -> float:
    return round(points / games, 1) if games else 0.0


class SeasonSummaryProcessor(BaseProcessor):
    """Game log plus records by season and by opponent."""

    def __init__(self, records: List[GameRecord]):
        super().__init__(records)
        self.season_stats = defaultdict(_empty_record)
        self.opponent_stats = defaultdict(_empty_record)
        self._aggregated = False

    def process_all(self) -> Dict[str, pd.DataFrame]:
        """
        Process all summaries.

        Returns:
            Dictionary containing:
            - 'game_log': One row per game, oldest first
            - 'season_records': Record and scoring per season, newest first
            - 'opponent_records': Record and scoring per opponent
        """
        return {
            'game_log': self.create_game_log(),
            'season_records': self.create_season_records(),
            'opponent_records': self.create_opponent_records(),
        }

    def overall(self, season: Optional[int] = None) -> Dict[str, Any]:
        """Overall record, optionally limited to one season."""
        return summarize(self.filter_by_season(season))

    def _aggregate(self):
        if self._aggregated:
            return
        for record in self.records:
            fm = record.frontmatter
            if fm.season is not None:
                _add_game(self.season_stats[fm.season], record)
            if fm.opponent:
                _add_game(self.opponent_stats[fm.opponent], record)
        self._aggregated = True

    def create_game_log(self) -> pd.DataFrame:
        rows = []
        for record in self.sort_by_date(ascending=True):
            fm = record.frontmatter
            rows.append({
                'Date': format_iso_date(fm.date),
                'Season': fm.season,
                'Opponent': fm.opponent or '',
                'Type': fm.game_type or '',
                'Site': fm.home_away or '',
                'Score': self.get_score(record),
                'Result': (fm.result or '')[:1].upper(),
                'Attendance': fm.attendance,
                'Slug': record.slug,
            })
        return self.create_dataframe(rows, GAME_LOG_COLUMNS)

    def _record_row(self, stats: Dict[str, Any]) -> Dict[str, Any]:
        scored = stats['scored_games']
        return {
            'Games': stats['games'],
            'W': stats['wins'],
            'L': stats['losses'],
            'T': stats['ties'],
            'Win %': _pct(stats['wins'], scored),
            'PF': stats['points_for'],
            'PA': stats['points_against'],
            'PPG': _avg(stats['points_for'], scored),
            'Opp PPG': _avg(stats['points_against'], scored),
        }

    def create_season_records(self) -> pd.DataFrame:
        self._aggregate()
        rows = []
        for season in sorted(self.season_stats, reverse=True):
            row = {'Season': season}
            row.update(self._record_row(self.season_stats[season]))
            rows.append(row)
        return self.create_dataframe(rows, ['Season'] + RECORD_COLUMNS)

    def create_opponent_records(self) -> pd.DataFrame:
        self._aggregate()
        rows = []
        for opponent in sorted(self.opponent_stats):
            row = {'Opponent': opponent}
            row.update(self._record_row(self.opponent_stats[opponent]))
            rows.append(row)

        df = self.create_dataframe(rows, ['Opponent'] + RECORD_COLUMNS)
        if not df.empty:
            df = df.sort_values(['Games', 'Opponent'], ascending=[False, True]).reset_index(drop=True)
        return df
