"""Excel workbook generation."""

from .workbook_generator import generate_excel_workbook

__all__ = ['generate_excel_workbook']
