"""Shared fixtures for football_processor tests."""

from datetime import date

import pytest
import yaml

from football_processor.loaders import CorpusLoader, InMemoryDocumentStore

SCORING_BODY = """
# Clemson vs Appalachian State

Clemson opened the season at home.

## Scoring Summary

| Quarter | Team | Play |
|---------|------|------|
| 1st | CLEM | TD pass, 12 yards |
| 2nd | APP | FG 35 yards |
"""

DEFAULT_METADATA = {
    'season': 2024,
    'game_type': 'regular_season',
    'home_away': 'home',
    'opponent': 'Appalachian State',
    'date': date(2024, 9, 7),
    'attendance': 81500,
    'location': 'Memorial Stadium',
    'score': {'team': 66, 'opponent': 20},
}


def build_document(body: str = '', **fields) -> str:
    """Render a game document; fields set to None are left out."""
    metadata = dict(DEFAULT_METADATA)
    metadata.update(fields)
    metadata = {k: v for k, v in metadata.items() if v is not None}
    return f"---\n{yaml.safe_dump(metadata, sort_keys=False)}---\n{body}"


@pytest.fixture
def make_document():
    """Factory for game documents with overridable frontmatter."""
    return build_document


@pytest.fixture
def corpus():
    """Small corpus: three games across two seasons plus one broken file."""
    return {
        '2024-09-07-appalachian-state': build_document(SCORING_BODY),
        '2024-11-30-south-carolina': build_document(
            '## Box\n\n| A | B |\n|---|---|\n| 1 | 2 |\n',
            opponent='South Carolina',
            date=date(2024, 11, 30),
            home_away='away',
            score={'team': 14, 'opponent': 17},
        ),
        '2023-09-04-duke': build_document(
            'No tables in this recap.\n',
            season=2023,
            opponent='Duke',
            date=date(2023, 9, 4),
            home_away='away',
            score={'team': 7, 'opponent': 28},
        ),
        'broken': 'season: 2024\nno frontmatter fences here\n',
    }


@pytest.fixture
def store(corpus):
    return InMemoryDocumentStore(corpus)


@pytest.fixture
def loader(store):
    return CorpusLoader(store)
