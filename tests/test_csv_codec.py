"""Tests for football_processor.export.csv_codec module."""

from datetime import date

import pytest

from football_processor.export import escape_csv_value, list_to_csv, metadata_to_csv, table_to_csv
from football_processor.models import Frontmatter, GameListItem, StatisticalTable
from football_processor.utils.constants import METADATA_CSV_FIELDS


def unquote(field: str) -> str:
    assert field.startswith('"') and field.endswith('"')
    return field[1:-1].replace('""', '"')


class TestEscapeCsvValue:
    """Tests for escape_csv_value function."""

    def test_plain_values(self):
        """Test values without special characters are left bare."""
        assert escape_csv_value('Clemson') == 'Clemson'
        assert escape_csv_value(2024) == '2024'
        assert escape_csv_value('') == ''

    def test_none(self):
        """Test None renders as an empty field."""
        assert escape_csv_value(None) == ''

    def test_date(self):
        """Test dates render as YYYY-MM-DD."""
        assert escape_csv_value(date(2024, 9, 7)) == '2024-09-07'

    def test_comma(self):
        """Test commas force quoting."""
        assert escape_csv_value('TD pass, 12 yards') == '"TD pass, 12 yards"'

    def test_quotes_doubled(self):
        """Test embedded quotes are doubled."""
        assert escape_csv_value('the "Bowl"') == '"the ""Bowl"""'

    def test_line_breaks(self):
        """Test newlines and carriage returns force quoting."""
        assert escape_csv_value('a\nb') == '"a\nb"'
        assert escape_csv_value('a\rb') == '"a\rb"'

    @pytest.mark.parametrize('value', [
        'a,b',
        '"',
        'say "hi", then\nleave',
        ',,,',
        '""',
    ])
    def test_single_cell_table_unquotes_to_original(self, value):
        """Test quoted cells reconstruct the original text."""
        table = StatisticalTable(rows=((value,),))
        assert unquote(table_to_csv(table)) == value


class TestTableToCsv:
    """Tests for table_to_csv function."""

    def test_rows_joined(self):
        """Test one line per row and no trailing newline."""
        table = StatisticalTable(rows=(('A', 'B'), ('1', '2')))
        assert table_to_csv(table) == 'A,B\n1,2'

    def test_deterministic(self):
        """Test encoding twice gives identical text."""
        table = StatisticalTable(rows=(('Play',), ('TD, "trick" play',)))
        assert table_to_csv(table) == table_to_csv(table)


class TestMetadataToCsv:
    """Tests for metadata_to_csv function."""

    def test_field_order(self):
        """Test the header and fixed field order."""
        lines = metadata_to_csv(Frontmatter()).split('\n')
        assert lines[0] == 'field,value'
        assert [line.split(',')[0] for line in lines[1:]] == METADATA_CSV_FIELDS

    def test_values(self):
        """Test values render with quoting and ISO dates."""
        fm = Frontmatter(
            season=2024,
            opponent='Appalachian State',
            date=date(2024, 9, 7),
            location='Memorial Stadium, Clemson, SC',
            team_score=66,
            opponent_score=20,
        )
        lines = metadata_to_csv(fm).split('\n')
        assert 'season,2024' in lines
        assert 'date,2024-09-07' in lines
        assert 'location,"Memorial Stadium, Clemson, SC"' in lines
        assert 'attendance,' in lines
        assert lines[-1] == 'result,win'


class TestListToCsv:
    """Tests for list_to_csv function."""

    def test_empty(self):
        """Test empty input gives only the header."""
        assert list_to_csv([]) == 'slug,date,season,opponent,game_type'

    def test_rows(self):
        """Test one row per item with ISO dates."""
        items = [
            GameListItem.from_frontmatter('2024-09-07-app-state', Frontmatter(
                season=2024, opponent='Appalachian State', game_type='regular_season',
                date=date(2024, 9, 7),
            )),
            GameListItem.from_frontmatter('undated', Frontmatter(opponent='Texas A&M, Bowl')),
        ]
        assert list_to_csv(items) == (
            'slug,date,season,opponent,game_type\n'
            '2024-09-07-app-state,2024-09-07,2024,Appalachian State,regular_season\n'
            'undated,,,"Texas A&M, Bowl",'
        )
