"""Tests for football_processor.export.orchestrator module."""

import pytest

from football_processor.errors import BadRequestError, InternalError, MalformedDocumentError, NotFoundError
from football_processor.export import ExportOrchestrator, parse_season
from football_processor.loaders import CorpusLoader, InMemoryDocumentStore
from football_processor.models import ExportRequest

SLUG = '2024-09-07-appalachian-state'


@pytest.fixture
def orchestrator(loader):
    return ExportOrchestrator(loader)


def export(orchestrator, **params):
    return orchestrator.export(ExportRequest.from_params(params))


class TestParseSeason:
    """Tests for parse_season function."""

    def test_integer_string(self):
        """Test plain and padded integers parse."""
        assert parse_season('2024') == 2024
        assert parse_season(' 2024 ') == 2024

    def test_not_integer(self):
        """Test non-numeric seasons are rejected."""
        for value in ('abc', '2024.5', '20x4', '20_24', '+2024', '-2024', '\u0662\u0660\u0662\u0664'):
            with pytest.raises(BadRequestError):
                parse_season(value)

    def test_missing(self):
        """Test a missing season is rejected."""
        with pytest.raises(BadRequestError, match='required'):
            parse_season(None)


class TestSingleExport:
    """Tests for single-game exports."""

    def test_default_csv(self, orchestrator):
        """Test metadata section followed by a tables section."""
        download = export(orchestrator, type='single', slug=SLUG, format='csv')
        assert download.filename == f'{SLUG}.csv'
        assert download.content.startswith('# Game Metadata\nfield,value\nseason,2024\n')
        assert 'opponent,Appalachian State\n' in download.content
        assert 'game_type,regular_season\n' in download.content
        assert download.content.endswith(
            'result,win\n\n'
            '# Game Statistics Tables\n'
            'Quarter,Team,Play\n'
            '1st,CLEM,"TD pass, 12 yards"\n'
            '2nd,APP,FG 35 yards'
        )

    def test_defaults_applied(self, orchestrator):
        """Test type and format default to single and csv."""
        download = export(orchestrator, slug=SLUG)
        assert download.filename == f'{SLUG}.csv'

    def test_headers(self, orchestrator):
        """Test download headers name the file."""
        download = export(orchestrator, slug=SLUG)
        assert download.headers['Content-Type'].startswith('text/csv')
        assert download.headers['Content-Disposition'] == f'attachment; filename="{SLUG}.csv"'

    def test_metadata_csv(self, orchestrator):
        """Test the metadata-only export."""
        download = export(orchestrator, slug=SLUG, format='metadata-csv')
        assert download.filename == f'{SLUG}-metadata.csv'
        assert download.content.split('\n')[:2] == ['field,value', 'season,2024']

    def test_tables_csv(self, orchestrator):
        """Test the tables-only export."""
        download = export(orchestrator, slug='2024-11-30-south-carolina', format='tables-csv')
        assert download.filename == '2024-11-30-south-carolina-tables.csv'
        assert download.content == 'A,B\n1,2'

    def test_tables_joined_by_blank_line(self, make_document):
        """Test multiple tables are separated by one blank line."""
        body = '| A |\n|---|\n| 1 |\n\n<table><tr><td>C</td></tr><tr><td>3</td></tr></table>\n'
        loader = CorpusLoader(InMemoryDocumentStore({'g': make_document(body)}))
        download = ExportOrchestrator(loader).export(ExportRequest(slug='g', format='tables-csv'))
        assert download.content == 'A\n1\n\nC\n3'

    def test_tables_csv_zero_tables(self, orchestrator):
        """Test a game with no tables is not found."""
        with pytest.raises(NotFoundError):
            export(orchestrator, slug='2023-09-04-duke', format='tables-csv')

    def test_tables_csv_blank_table(self, make_document):
        """Test a table with only empty cells still counts as a table."""
        loader = CorpusLoader(InMemoryDocumentStore({'g': make_document('| |\n')}))
        download = ExportOrchestrator(loader).export(ExportRequest(slug='g', format='tables-csv'))
        assert download.filename == 'g-tables.csv'
        assert download.content == ''

    def test_csv_zero_tables(self, orchestrator):
        """Test the combined export still works without tables."""
        download = export(orchestrator, slug='2023-09-04-duke')
        assert download.content.endswith('# Game Statistics Tables\n')

    def test_missing_slug(self, orchestrator):
        """Test single export requires a slug."""
        with pytest.raises(BadRequestError, match='Slug'):
            export(orchestrator, type='single')

    def test_unknown_slug(self, orchestrator):
        """Test an unknown slug is not found."""
        with pytest.raises(NotFoundError):
            export(orchestrator, slug='1999-01-01-nobody')

    def test_malformed_document(self, orchestrator, capsys):
        """Test parser failures become a redacted InternalError."""
        with pytest.raises(InternalError) as exc_info:
            export(orchestrator, slug='broken')
        assert str(exc_info.value) == 'Failed to export data'
        assert isinstance(exc_info.value.__cause__, MalformedDocumentError)
        assert 'Traceback' in capsys.readouterr().err

    def test_validation_failure(self, make_document):
        """Test validation failures on the single path become InternalError."""
        loader = CorpusLoader(InMemoryDocumentStore({'g': make_document(game_type='scrimmage')}))
        with pytest.raises(InternalError):
            ExportOrchestrator(loader, validate=True).export(ExportRequest(slug='g'))

    def test_idempotent(self, orchestrator):
        """Test exporting twice yields identical content."""
        first = export(orchestrator, slug=SLUG)
        second = export(orchestrator, slug=SLUG)
        assert first.content == second.content
        assert first.filename == second.filename

    def test_bom(self, loader):
        """Test the optional BOM prefix."""
        download = ExportOrchestrator(loader, include_bom=True).export(ExportRequest(slug=SLUG))
        assert download.content.startswith('\ufeff# Game Metadata')


class TestCorpusExports:
    """Tests for all and season exports."""

    def test_all(self, orchestrator):
        """Test the full listing in date order."""
        download = export(orchestrator, type='all')
        assert download.filename == 'all-games.csv'
        assert download.content == (
            'slug,date,season,opponent,game_type\n'
            '2023-09-04-duke,2023-09-04,2023,Duke,regular_season\n'
            '2024-09-07-appalachian-state,2024-09-07,2024,Appalachian State,regular_season\n'
            '2024-11-30-south-carolina,2024-11-30,2024,South Carolina,regular_season'
        )

    def test_all_empty_corpus(self):
        """Test an empty corpus is not found."""
        orchestrator = ExportOrchestrator(CorpusLoader(InMemoryDocumentStore()))
        with pytest.raises(NotFoundError):
            orchestrator.export(ExportRequest(kind='all'))

    def test_season(self, orchestrator):
        """Test season filtering and filename."""
        download = export(orchestrator, type='season', season='2024')
        assert download.filename == '2024-season.csv'
        lines = download.content.split('\n')
        assert len(lines) == 3
        assert all(',2024,' in line for line in lines[1:])

    def test_season_no_matches(self, orchestrator):
        """Test a season without games is not found."""
        with pytest.raises(NotFoundError):
            export(orchestrator, type='season', season='1900')

    def test_bad_season(self, orchestrator):
        """Test an unparseable season is a bad request."""
        with pytest.raises(BadRequestError):
            export(orchestrator, type='season', season='abc')

    def test_missing_season(self, orchestrator):
        """Test season export requires a season."""
        with pytest.raises(BadRequestError):
            export(orchestrator, type='season')

    @pytest.mark.parametrize('kind', ['all', 'season'])
    @pytest.mark.parametrize('fmt', ['metadata-csv', 'tables-csv'])
    def test_single_only_formats(self, orchestrator, kind, fmt):
        """Test single-game formats are rejected for corpus exports."""
        with pytest.raises(BadRequestError):
            export(orchestrator, type=kind, format=fmt, season='2024')


class TestRequestValidation:
    """Tests for type and format checks."""

    def test_unknown_type(self, orchestrator):
        """Test an unknown type is a bad request."""
        with pytest.raises(BadRequestError, match='type'):
            export(orchestrator, type='weekly', slug=SLUG)

    def test_unknown_format(self, orchestrator):
        """Test an unknown format is a bad request."""
        with pytest.raises(BadRequestError, match='format'):
            export(orchestrator, slug=SLUG, format='xlsx')

    def test_unexpected_failure(self, capsys):
        """Test unexpected loader failures become InternalError."""
        class ExplodingLoader(CorpusLoader):
            def load_all_as_list_items(self, validate=False):
                raise RuntimeError('disk on fire')

        orchestrator = ExportOrchestrator(ExplodingLoader(InMemoryDocumentStore()))
        with pytest.raises(InternalError) as exc_info:
            orchestrator.export(ExportRequest(kind='all'))
        assert 'disk on fire' not in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, RuntimeError)
