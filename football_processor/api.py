"""
Framework-free request handlers for the export and games-list endpoints.

Each handler returns an ApiResponse that any HTTP layer can send as is.
Unexpected failures are logged here and answered with a generic message.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .errors import BadRequestError, InternalError, NotFoundError
from .export.orchestrator import ExportOrchestrator
from .loaders.corpus_loader import CorpusLoader
from .models import ExportRequest
from .utils.log import exception

JSON_CONTENT_TYPE = 'application/json'
GAMES_LIST_ERROR = 'Failed to fetch games'


@dataclass(frozen=True)
class ApiResponse:
    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: str = ''

    def json(self) -> Any:
        return json.loads(self.body)


def _json_response(status: int, payload: Any) -> ApiResponse:
    return ApiResponse(
        status=status,
        headers={'Content-Type': JSON_CONTENT_TYPE},
        body=json.dumps(payload),
    )


def handle_export(params: Mapping[str, Any], loader: Optional[CorpusLoader] = None,
                  include_bom: bool = False) -> ApiResponse:
    """
    GET /api/export equivalent.

    Args:
        params: Query parameters (slug, format, type, season)
        loader: Corpus loader; defaults to the content directory

    Returns:
        200 with the CSV body, 400 bad request, 404 not found, 500 otherwise
    """
    try:
        request = ExportRequest.from_params(params)
        download = ExportOrchestrator(loader, include_bom=include_bom).export(request)
    except BadRequestError as e:
        return _json_response(400, {'error': str(e)})
    except NotFoundError as e:
        return _json_response(404, {'error': str(e)})
    except InternalError:
        return _json_response(500, {'error': InternalError.GENERIC_MESSAGE})
    except Exception as e:
        exception("Export request failed", e)
        return _json_response(500, {'error': InternalError.GENERIC_MESSAGE})

    return ApiResponse(status=200, headers=dict(download.headers), body=download.content)


def handle_games_list(loader: Optional[CorpusLoader] = None) -> ApiResponse:
    """GET /api/games equivalent: JSON array of game list items."""
    try:
        loader = loader if loader is not None else CorpusLoader()
        items = loader.load_all_as_list_items()
        return _json_response(200, [item.to_dict() for item in items])
    except Exception as e:
        exception("Error fetching games", e)
        return _json_response(500, {'error': GAMES_LIST_ERROR})
