"""Tests for football_processor.excel module."""

import zipfile

from football_processor.excel import generate_excel_workbook
from football_processor.excel.formatters import get_column_width, sanitize_sheet_name


def sheet_names(path):
    with zipfile.ZipFile(path) as archive:
        return archive.read('xl/workbook.xml').decode('utf-8')


class TestSanitizeSheetName:
    """Tests for sanitize_sheet_name function."""

    def test_truncated(self):
        """Test names are cut to Excel's 31 character limit."""
        name = sanitize_sheet_name('2024-12-31-some-very-long-bowl-opponent-name', set())
        assert len(name) == 31

    def test_invalid_characters(self):
        """Test characters Excel rejects are removed."""
        assert sanitize_sheet_name('a/b:c[d]*?', set()) == 'abcd'

    def test_duplicates(self):
        """Test repeated names get a counter."""
        used = set()
        assert sanitize_sheet_name('Games', used) == 'Games'
        assert sanitize_sheet_name('games', used) == 'games (2)'

    def test_empty(self):
        """Test a name with nothing usable falls back to Sheet."""
        assert sanitize_sheet_name('///', set()) == 'Sheet'


class TestColumnWidth:
    """Tests for get_column_width function."""

    def test_known_and_default(self):
        """Test known columns and the default width."""
        assert get_column_width('Opponent') == 24
        assert get_column_width('Unknown') == 12


class TestGenerateExcelWorkbook:
    """Tests for generate_excel_workbook function."""

    def test_writes_workbook(self, loader, tmp_path):
        """Test summary and per-game sheets are written."""
        output = tmp_path / 'reports' / 'games.xlsx'
        data = generate_excel_workbook(loader.load_all(), str(output))
        assert output.exists()

        workbook_xml = sheet_names(output)
        for name in ('Games', 'Seasons', 'Opponents', '2024-09-07-appalachian-state', '2023-09-04-duke'):
            assert f'name="{name}"' in workbook_xml

        assert len(data['game_log']) == 3

    def test_summary_only(self, loader, tmp_path):
        """Test per-game sheets can be skipped."""
        output = tmp_path / 'summary.xlsx'
        generate_excel_workbook(loader.load_all(), str(output), include_game_sheets=False)
        assert '2023-09-04-duke' not in sheet_names(output)

    def test_no_write(self, loader, tmp_path):
        """Test write_file=False only returns the frames."""
        output = tmp_path / 'skipped.xlsx'
        data = generate_excel_workbook(loader.load_all(), str(output), write_file=False)
        assert not output.exists()
        assert list(data['season_records']['Season']) == [2024, 2023]

    def test_empty_records(self, tmp_path):
        """Test an empty corpus still produces a valid file."""
        output = tmp_path / 'empty.xlsx'
        generate_excel_workbook([], str(output))
        assert 'name="Games"' in sheet_names(output)
