"""
Excel workbook generator for football game records.
"""

import os
from typing import Any, Dict, List

import pandas as pd
import xlsxwriter

from .formatters import sanitize_sheet_name, write_dataframe_to_sheet, write_tables_to_sheet
from ..models import GameRecord
from ..processors.season_summary_processor import SeasonSummaryProcessor
from ..utils.log import info

SUMMARY_SHEETS = [
    ('Games', 'game_log'),
    ('Seasons', 'season_records'),
    ('Opponents', 'opponent_records'),
]


def generate_excel_workbook(
    records: List[GameRecord],
    output_path: str,
    write_file: bool = True,
    include_game_sheets: bool = True,
) -> Dict[str, pd.DataFrame]:
    """
    Generate Excel workbook from loaded game records.

    Args:
        records: Loaded GameRecords
        output_path: Path to save the Excel file
        write_file: Whether to actually write the file
        include_game_sheets: Add one sheet per game with its stat tables

    Returns:
        Dictionary containing the summary DataFrames
    """
    info(f"Processing {len(records)} games...")

    info("  Building game log and records...")
    processed_data = SeasonSummaryProcessor(records).process_all()

    if not write_file:
        return processed_data

    info(f"  Writing Excel file: {output_path}")

    output_dir = os.path.dirname(output_path)
    if output_dir and not os.path.exists(output_dir):
        os.makedirs(output_dir)

    workbook = xlsxwriter.Workbook(output_path)
    try:
        _write_sheets(workbook, processed_data, records if include_game_sheets else [])
    finally:
        workbook.close()

    info(f"  Excel file saved: {output_path}")
    return processed_data


def _write_sheets(workbook: xlsxwriter.Workbook, processed_data: Dict[str, Any],
                  records: List[GameRecord]) -> None:
    """Write all sheets to the workbook."""
    used_names = set()

    for sheet_name, key in SUMMARY_SHEETS:
        name = sanitize_sheet_name(sheet_name, used_names)
        write_dataframe_to_sheet(workbook, name, processed_data.get(key, pd.DataFrame()))

    for record in records:
        name = sanitize_sheet_name(record.slug, used_names)
        write_tables_to_sheet(workbook, name, record.tables())
