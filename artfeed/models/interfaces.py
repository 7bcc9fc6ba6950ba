"""
Repository interfaces (abstractions).
Using Protocol for structural subtyping (duck typing with type hints).
The ranking core never reads storage itself; these are the contracts
the service layer uses to fetch already-validated snapshots.
"""
from typing import List, Optional, Protocol, runtime_checkable

from artfeed.models.schemas import Artwork, Viewer


@runtime_checkable
class ViewerRepository(Protocol):
    """
    Interface for viewer profile access.
    Testing: In-memory implementation seeded with demo viewers.
    """

    async def get_viewer(self, viewer_id: str) -> Optional[Viewer]:
        """
        Fetch a viewer profile by id.

        Args:
            viewer_id: Viewer identifier

        Returns:
            Viewer if known, None otherwise
        """
        ...


@runtime_checkable
class ArtworkRepository(Protocol):
    """
    Interface for the artwork catalogue.
    Testing: In-memory implementation seeded with demo artworks.
    """

    async def list_artworks(self) -> List[Artwork]:
        """
        Fetch the current catalogue snapshot.

        Returns:
            All artworks, in catalogue order (may be empty)
        """
        ...

    async def get_artwork(self, artwork_id: str) -> Optional[Artwork]:
        """Fetch one artwork by id, None if missing."""
        ...

    async def count(self) -> int:
        """Number of artworks in the catalogue."""
        ...
