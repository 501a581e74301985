"""
Excel formatting utilities for the football processor.
"""

import re
from typing import Any, Iterable, Set

import pandas as pd

from ..models import StatisticalTable
from ..utils.constants import EXCEL_COLORS, EXCEL_SHEET_NAME_LIMIT

INVALID_SHEET_CHARS_RE = re.compile(r'[\[\]:*?/\\]')


def get_header_format(workbook) -> Any:
    """Get header cell format."""
    return workbook.add_format({
        'bold': True,
        'bg_color': EXCEL_COLORS['header_blue'],
        'font_color': EXCEL_COLORS['white'],
        'border': 1,
        'align': 'center',
        'valign': 'vcenter',
        'text_wrap': True,
    })


def get_title_format(workbook) -> Any:
    """Bold orange title above a stacked table."""
    return workbook.add_format({
        'bold': True,
        'font_size': 12,
        'font_color': EXCEL_COLORS['primary_orange'],
    })


def get_default_format(workbook) -> Any:
    """Get default cell format."""
    return workbook.add_format({
        'border': 1,
        'align': 'center',
        'valign': 'vcenter',
    })


def get_alt_row_format(workbook) -> Any:
    """Get alternating row format."""
    return workbook.add_format({
        'bg_color': EXCEL_COLORS['alt_row'],
        'border': 1,
        'align': 'center',
        'valign': 'vcenter',
    })


def get_column_width(column_name: str) -> int:
    """
    Get recommended column width based on column name.

    Args:
        column_name: Name of the column

    Returns:
        Recommended width in characters
    """
    width_map = {
        'Date': 12,
        'Season': 8,
        'Opponent': 24,
        'Type': 15,
        'Site': 9,
        'Score': 9,
        'Result': 8,
        'Attendance': 12,
        'Slug': 34,

        # Records
        'Games': 8,
        'W': 5,
        'L': 5,
        'T': 5,
        'Win %': 8,
        'PF': 7,
        'PA': 7,
        'PPG': 7,
        'Opp PPG': 9,
    }

    return width_map.get(column_name, 12)


def sanitize_sheet_name(name: str, used: Set[str]) -> str:
    """
    Make a valid, unique worksheet name.

    Strips characters Excel rejects, truncates to 31 characters, and
    appends a counter when the name is already taken.
    """
    base = INVALID_SHEET_CHARS_RE.sub('', name).strip() or 'Sheet'
    base = base[:EXCEL_SHEET_NAME_LIMIT]
    candidate = base
    counter = 2
    while candidate.lower() in used:
        suffix = f' ({counter})'
        candidate = base[:EXCEL_SHEET_NAME_LIMIT - len(suffix)] + suffix
        counter += 1
    used.add(candidate.lower())
    return candidate


def write_dataframe_to_sheet(workbook, sheet_name: str, df: pd.DataFrame,
                             format_sheet: bool = True) -> Any:
    """
    Write a DataFrame to a new worksheet with formatting.

    Args:
        workbook: xlsxwriter workbook
        sheet_name: Name for the worksheet
        df: DataFrame to write
        format_sheet: Whether to freeze the header and size columns

    Returns:
        The worksheet object
    """
    worksheet = workbook.add_worksheet(sheet_name)
    if df.empty:
        worksheet.write(0, 0, 'No data available')
        return worksheet

    header_format = get_header_format(workbook)
    for col_idx, col_name in enumerate(df.columns):
        worksheet.write(0, col_idx, col_name, header_format)

    default_format = get_default_format(workbook)
    alt_format = get_alt_row_format(workbook)

    for row_idx, (_, row) in enumerate(df.iterrows(), start=1):
        row_format = alt_format if row_idx % 2 == 0 else default_format
        for col_idx, value in enumerate(row):
            # Handle NaN/None values
            if pd.isna(value):
                worksheet.write(row_idx, col_idx, '', row_format)
            else:
                worksheet.write(row_idx, col_idx, value, row_format)

    if format_sheet:
        worksheet.freeze_panes(1, 0)
        for col_idx, col_name in enumerate(df.columns):
            worksheet.set_column(col_idx, col_idx, get_column_width(col_name))

    return worksheet


def write_tables_to_sheet(workbook, sheet_name: str, tables: Iterable[StatisticalTable]) -> Any:
    """
    Stack tables vertically on one worksheet.

    Each table gets its title (when known) on the row above its header,
    and one blank row separates consecutive tables.

    Returns:
        The worksheet object
    """
    worksheet = workbook.add_worksheet(sheet_name)
    title_format = get_title_format(workbook)
    header_format = get_header_format(workbook)
    default_format = get_default_format(workbook)

    row_idx = 0
    widest = 0
    for table in tables:
        if row_idx:
            row_idx += 1
        if table.title:
            worksheet.write(row_idx, 0, table.title, title_format)
            row_idx += 1
        for line_idx, cells in enumerate(table.rows):
            cell_format = header_format if line_idx == 0 else default_format
            for col_idx, value in enumerate(cells):
                worksheet.write_string(row_idx, col_idx, value, cell_format)
            row_idx += 1
        widest = max(widest, table.column_count)

    if row_idx == 0:
        worksheet.write(0, 0, 'No tables available')
    elif widest:
        worksheet.set_column(0, 0, 22)
        if widest > 1:
            worksheet.set_column(1, widest - 1, 12)

    return worksheet
