"""
Pytest configuration and fixtures.
"""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from artfeed.api.dependencies import (
    get_artwork_repository,
    get_viewer_repository,
)
from artfeed.main import app
from artfeed.models.schemas import Artwork, FeedConfig, Viewer
from artfeed.repositories.memory import (
    InMemoryArtworkRepository,
    InMemoryViewerRepository,
    demo_artworks,
)

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    """Fixed reference time for deterministic scores."""
    return NOW


@pytest.fixture
def make_artwork(now):
    """Factory for artworks uploaded `hours` before `now`."""

    def _make(
        id="a1",
        artist_id="artist1",
        category="illustration",
        tags=(),
        hours=0,
        likes=0,
        views=0,
        comments=0,
        quality_score=50.0,
        title=None,
    ):
        return Artwork(
            id=id,
            title=title or f"Artwork {id}",
            artist_id=artist_id,
            tags=frozenset(tags),
            uploaded_at=now - timedelta(hours=hours),
            likes=likes,
            views=views,
            comments=comments,
            quality_score=quality_score,
            category=category,
        )

    return _make


@pytest.fixture
def cold_viewer():
    """Viewer with no preferences or history."""
    return Viewer(id="viewer_cold")


@pytest.fixture
def demo_viewer():
    """Viewer from the demo profile store."""
    return Viewer(
        id="user1",
        followed_artists=frozenset({"artist1"}),
        preferred_tags=frozenset({"fantasy", "concept-art", "character-design"}),
        preferred_categories=frozenset({"illustration"}),
        tag_interactions={"fantasy": 15, "concept-art": 10},
    )


@pytest.fixture
def config():
    """Default ranking configuration."""
    return FeedConfig()


@pytest.fixture
def artwork_repo():
    """Fixture for in-memory artwork repository with demo data."""
    return InMemoryArtworkRepository(demo_artworks())


@pytest.fixture
def viewer_repo():
    """Fixture for in-memory viewer repository with demo data."""
    return InMemoryViewerRepository()


@pytest.fixture
def test_client(artwork_repo, viewer_repo):
    """
    TestClient fixture with dependency overrides.
    Uses fresh in-memory repositories for isolation.
    """
    app.dependency_overrides[get_artwork_repository] = lambda: artwork_repo
    app.dependency_overrides[get_viewer_repository] = lambda: viewer_repo

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
