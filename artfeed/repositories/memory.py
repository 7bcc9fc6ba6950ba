"""
In-memory repository implementations.
Used for prototyping and testing.
Production would replace these with a database-backed catalogue.
"""
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional

from artfeed.models.schemas import Artwork, Viewer


class InMemoryViewerRepository:
    """In-memory implementation of ViewerRepository."""

    def __init__(self, viewers: Optional[Iterable[Viewer]] = None) -> None:
        self._store: Dict[str, Viewer] = {}
        if viewers is None:
            viewers = demo_viewers()
        for viewer in viewers:
            self._store[viewer.id] = viewer

    async def get_viewer(self, viewer_id: str) -> Optional[Viewer]:
        """Fetch a viewer profile by id."""
        return self._store.get(viewer_id)


class InMemoryArtworkRepository:
    """
    In-memory implementation of ArtworkRepository.
    Keeps insertion order, which is the catalogue order ties fall back to.
    """

    def __init__(self, artworks: Optional[Iterable[Artwork]] = None) -> None:
        self._store: Dict[str, Artwork] = {}
        if artworks is None:
            artworks = demo_artworks()
        for artwork in artworks:
            self._store[artwork.id] = artwork

    async def list_artworks(self) -> List[Artwork]:
        """Fetch the current catalogue snapshot."""
        return list(self._store.values())

    async def get_artwork(self, artwork_id: str) -> Optional[Artwork]:
        """Fetch one artwork by id."""
        return self._store.get(artwork_id)

    async def count(self) -> int:
        return len(self._store)


# =============================================================================
# Demo data
# =============================================================================


def demo_viewers() -> List[Viewer]:
    """Sample viewer: follows artist1, likes fantasy and concept art."""
    return [
        Viewer(
            id="user1",
            followed_artists=frozenset({"artist1"}),
            preferred_tags=frozenset({"fantasy", "concept-art", "character-design"}),
            preferred_categories=frozenset({"illustration"}),
            tag_interactions={"fantasy": 15, "concept-art": 10},
        ),
    ]


def demo_artworks(now: Optional[datetime] = None) -> List[Artwork]:
    """Sample catalogue with upload times relative to `now`."""
    now = now or datetime.now(timezone.utc)
    hour = timedelta(hours=1)

    return [
        Artwork(
            id="art1",
            title="Dragon Knight",
            artist_id="artist1",
            tags=frozenset({"fantasy", "character-design"}),
            uploaded_at=now - 5 * hour,
            likes=250,
            views=1500,
            comments=30,
            quality_score=85.0,
            category="illustration",
        ),
        Artwork(
            id="art2",
            title="Sci-Fi City",
            artist_id="artist2",
            tags=frozenset({"sci-fi", "concept-art", "environment"}),
            uploaded_at=now - 2 * hour,
            likes=500,
            views=3000,
            comments=60,
            quality_score=92.0,
            category="concept-art",
        ),
        Artwork(
            id="art3",
            title="Character Study",
            artist_id="artist1",
            tags=frozenset({"character-design", "portrait"}),
            uploaded_at=now - 12 * hour,
            likes=180,
            views=1200,
            comments=25,
            quality_score=78.0,
            category="illustration",
        ),
    ]
