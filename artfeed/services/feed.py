"""
Feed service - main business logic orchestrator.
Coordinates input validation, ranking, diversity selection and similarity.
Repository-backed helpers load snapshots for the HTTP layer.
"""
import logging
import time
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from opentelemetry import trace

from artfeed.core.exceptions import InvalidInputError, NotFoundError, RankingServiceError
from artfeed.models.interfaces import ArtworkRepository, ViewerRepository
from artfeed.models.schemas import (
    Artwork,
    FeedConfig,
    ScoredArtwork,
    Viewer,
)
from artfeed.services.diversity import DiversitySelector
from artfeed.services.ranking import RankingEngine
from artfeed.services.similarity import SimilarityFinder

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


def validate_catalogue(artworks: Sequence[Artwork]) -> None:
    """
    Reject snapshots that would produce silently wrong scores.

    Raises:
        InvalidInputError: duplicate ids, negative counts or quality out of range
    """
    seen = set()
    for artwork in artworks:
        if artwork.id in seen:
            raise InvalidInputError(
                f"Duplicate artwork id: {artwork.id}",
                details={"artwork_id": artwork.id},
            )
        seen.add(artwork.id)

        negative = {
            name: value
            for name, value in (
                ("likes", artwork.likes),
                ("views", artwork.views),
                ("comments", artwork.comments),
            )
            if value < 0
        }
        if negative:
            raise InvalidInputError(
                f"Negative counts on artwork {artwork.id}",
                details={"artwork_id": artwork.id, **negative},
            )

        if not 0 <= artwork.quality_score <= 100:
            raise InvalidInputError(
                f"Quality score out of range on artwork {artwork.id}",
                details={"artwork_id": artwork.id, "quality_score": artwork.quality_score},
            )


class FeedService:
    """
    Main feed service.

    Responsibilities:
    - Validate snapshots handed in by callers
    - Rank artworks and apply diversity caps
    - Find similar artworks
    - Load viewers and catalogue from repositories for the API
    """

    def __init__(
            self,
            artwork_repo: Optional[ArtworkRepository] = None,
            viewer_repo: Optional[ViewerRepository] = None,
            config: Optional[FeedConfig] = None,
            ranking_engine: Optional[RankingEngine] = None,
    ) -> None:
        """
        Initialize feed service with dependencies.

        Args:
            artwork_repo: Catalogue source (only needed by the async helpers)
            viewer_repo: Viewer profile source (only needed by the async helpers)
            config: Ranking constants shared by all stages
            ranking_engine: Engine for scoring and sorting
        """
        self._config = config or FeedConfig()
        self._artwork_repo = artwork_repo
        self._viewer_repo = viewer_repo
        self._ranking_engine = ranking_engine or RankingEngine(self._config)
        self._selector = DiversitySelector(self._config)
        self._similarity = SimilarityFinder(self._config)

    @property
    def config(self) -> FeedConfig:
        return self._config

    # -------------------------------------------------------------------------
    # Core entry points
    # -------------------------------------------------------------------------

    def generate_feed(
            self,
            viewer: Viewer,
            artworks: Sequence[Artwork],
            now: datetime,
    ) -> List[str]:
        """Ordered artwork ids of the diversified feed for a viewer."""
        return [scored.artwork.id for scored in self.generate_scored_feed(viewer, artworks, now)]

    def generate_scored_feed(
            self,
            viewer: Viewer,
            artworks: Sequence[Artwork],
            now: datetime,
            limit: Optional[int] = None,
    ) -> List[ScoredArtwork]:
        """
        Rank and diversify a catalogue for one viewer.

        Args:
            viewer: Viewer to personalize for
            artworks: Catalogue snapshot (may be empty)
            now: Reference time, supplied by the caller
            limit: Feed length (default: config.feed_size)

        Returns:
            Selected artworks with their scores, best first
        """
        if limit is not None and limit < 1:
            raise InvalidInputError("Feed limit must be at least 1", details={"limit": limit})

        validate_catalogue(artworks)

        start_time = time.time()
        with tracer.start_as_current_span("generate_feed") as span:
            span.set_attribute("feed.candidates", len(artworks))
            ranked = self._ranking_engine.rank(artworks, viewer, now)
            feed = self._selector.select(ranked, target_size=limit)
            span.set_attribute("feed.selected", len(feed))

        elapsed_ms = (time.time() - start_time) * 1000
        logger.info(
            f"Feed generated: viewer={viewer.id}, candidates={len(artworks)}, "
            f"selected={len(feed)}, elapsed_ms={elapsed_ms:.2f}",
            extra={
                "viewer_id": viewer.id,
                "candidates": len(artworks),
                "selected": len(feed),
                "elapsed_ms": round(elapsed_ms, 2),
            },
        )
        return feed

    def find_similar(
            self,
            reference: Artwork,
            artworks: Sequence[Artwork],
            limit: int,
    ) -> List[str]:
        """Ordered ids of the artworks most similar to the reference."""
        return [artwork.id for artwork, _ in self.rank_similar(reference, artworks, limit)]

    def rank_similar(
            self,
            reference: Artwork,
            artworks: Sequence[Artwork],
            limit: int,
    ) -> List[Tuple[Artwork, float]]:
        """Similar artworks with their similarity, most similar first."""
        if limit < 0:
            raise InvalidInputError("Similar limit must not be negative", details={"limit": limit})

        with tracer.start_as_current_span("find_similar") as span:
            span.set_attribute("similar.candidates", len(artworks))
            results = self._similarity.rank_similar(reference, artworks, limit)

        logger.debug(
            f"Similar to {reference.id}: {len(results)} of {len(artworks)}",
            extra={"artwork_id": reference.id},
        )
        return results

    # -------------------------------------------------------------------------
    # Repository-backed helpers
    # -------------------------------------------------------------------------

    async def get_feed(
            self,
            viewer_id: str,
            now: datetime,
            limit: Optional[int] = None,
    ) -> Tuple[List[ScoredArtwork], int]:
        """
        Feed for a stored viewer over the stored catalogue.

        Unknown viewers get a cold-start feed (no personalization boosts).

        Returns:
            Tuple of (selected artworks, catalogue size)
        """
        viewer = await self._load_viewer(viewer_id)
        artworks = await self._require_artwork_repo().list_artworks()

        if not artworks:
            logger.warning("Empty catalogue, serving empty feed")

        return self.generate_scored_feed(viewer, artworks, now, limit), len(artworks)

    async def get_similar(
            self,
            artwork_id: str,
            limit: int,
    ) -> Tuple[Artwork, List[Tuple[Artwork, float]]]:
        """
        Similar artworks for a stored artwork.

        Raises:
            NotFoundError: if the reference artwork is not in the catalogue
        """
        repo = self._require_artwork_repo()
        reference = await repo.get_artwork(artwork_id)
        if reference is None:
            raise NotFoundError("Artwork", artwork_id)

        artworks = await repo.list_artworks()
        return reference, self.rank_similar(reference, artworks, limit)

    async def _load_viewer(self, viewer_id: str) -> Viewer:
        viewer = None
        if self._viewer_repo is not None:
            viewer = await self._viewer_repo.get_viewer(viewer_id)

        if viewer is None:
            viewer = Viewer(id=viewer_id)

        if viewer.is_cold_start:
            logger.info(f"Cold-start viewer={viewer_id}", extra={"viewer_id": viewer_id})
        return viewer

    def _require_artwork_repo(self) -> ArtworkRepository:
        if self._artwork_repo is None:
            raise RankingServiceError("No artwork repository configured")
        return self._artwork_repo
