"""Tests for football_processor.api module."""

from football_processor.api import handle_export, handle_games_list
from football_processor.loaders import CorpusLoader, DocumentStore


class BrokenStore(DocumentStore):
    def list_slugs(self):
        raise OSError('content volume unavailable')

    def read(self, slug):
        raise OSError('content volume unavailable')


class TestHandleExport:
    """Tests for handle_export function."""

    def test_success(self, loader):
        """Test a CSV body with download headers."""
        response = handle_export({'slug': '2024-09-07-appalachian-state'}, loader)
        assert response.status == 200
        assert response.body.startswith('# Game Metadata')
        assert response.headers['Content-Type'] == 'text/csv; charset=utf-8'
        assert 'filename="2024-09-07-appalachian-state.csv"' in response.headers['Content-Disposition']

    def test_bad_request(self, loader):
        """Test unparseable season maps to 400."""
        response = handle_export({'type': 'season', 'season': 'abc'}, loader)
        assert response.status == 400
        assert 'error' in response.json()

    def test_not_found(self, loader):
        """Test an empty season maps to 404."""
        response = handle_export({'type': 'season', 'season': '1900'}, loader)
        assert response.status == 404

    def test_server_error_redacted(self, loader):
        """Test parse failures map to 500 with a generic message."""
        response = handle_export({'slug': 'broken'}, loader)
        assert response.status == 500
        assert response.json() == {'error': 'Failed to export data'}

    def test_store_failure(self, capsys):
        """Test store errors never leak to the client."""
        response = handle_export({'type': 'all'}, CorpusLoader(BrokenStore()))
        assert response.status == 500
        assert 'content volume' not in response.body
        assert 'content volume' in capsys.readouterr().err

    def test_bom_option(self, loader):
        """Test the BOM can be requested."""
        response = handle_export({'type': 'all'}, loader, include_bom=True)
        assert response.body.startswith('\ufeffslug,date')


class TestHandleGamesList:
    """Tests for handle_games_list function."""

    def test_listing(self, loader):
        """Test the JSON listing with ISO timestamps."""
        response = handle_games_list(loader)
        assert response.status == 200
        assert response.headers['Content-Type'] == 'application/json'
        games = response.json()
        assert [g['slug'] for g in games] == [
            '2023-09-04-duke',
            '2024-09-07-appalachian-state',
            '2024-11-30-south-carolina',
        ]
        assert games[1]['gameDate'] == '2024-09-07T00:00:00+00:00'
        assert games[1]['gameType'] == 'regular_season'
        assert games[1]['result'] == 'win'

    def test_failure(self):
        """Test failures map to 500 with a generic message."""
        response = handle_games_list(CorpusLoader(BrokenStore()))
        assert response.status == 500
        assert response.json() == {'error': 'Failed to fetch games'}
