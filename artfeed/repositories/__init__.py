"""Repository implementations package."""
from .memory import (
    InMemoryArtworkRepository,
    InMemoryViewerRepository,
    demo_artworks,
    demo_viewers,
)

__all__ = [
    "InMemoryArtworkRepository",
    "InMemoryViewerRepository",
    "demo_artworks",
    "demo_viewers",
]
