"""
Ranking engine service.
Blends the five signals into a composite score and sorts the catalogue.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from artfeed.models.schemas import Artwork, FeedConfig, ScoredArtwork, Viewer
from artfeed.services.signals import SignalStrategy, default_signals

logger = logging.getLogger(__name__)


class RankingEngine:
    """
    Composite scorer and ranker.

    Scores every artwork against one viewer, then orders them by score,
    highest first. Equal scores keep their catalogue order.
    """

    def __init__(
        self,
        config: Optional[FeedConfig] = None,
        signals: Optional[List[SignalStrategy]] = None,
    ) -> None:
        """
        Initialize ranking engine.

        Args:
            config: Ranking constants (default: FeedConfig())
            signals: Signal strategies to blend (default: all five)
        """
        self._config = config or FeedConfig()
        self._signals = signals or default_signals(self._config)
        self._weights = self._config.weights.as_dict()

    @property
    def config(self) -> FeedConfig:
        return self._config

    def score(self, artwork: Artwork, viewer: Viewer, now: datetime) -> ScoredArtwork:
        """Composite score for one artwork."""
        breakdown: Dict[str, float] = {}
        total = 0.0

        for signal in self._signals:
            value = signal.score(artwork, viewer, now)
            breakdown[signal.name] = value
            total += self._weights.get(signal.name, 0.0) * value

        return ScoredArtwork(artwork=artwork, score=total, breakdown=breakdown)

    def score_all(
        self,
        artworks: Sequence[Artwork],
        viewer: Viewer,
        now: datetime,
    ) -> List[ScoredArtwork]:
        """Score every artwork, preserving input order."""
        if len(artworks) < self._config.parallel_threshold:
            return [self.score(artwork, viewer, now) for artwork in artworks]

        logger.debug(
            f"Scoring {len(artworks)} artworks on "
            f"{self._config.scoring_workers} workers"
        )
        with ThreadPoolExecutor(max_workers=self._config.scoring_workers) as pool:
            return list(pool.map(lambda artwork: self.score(artwork, viewer, now), artworks))

    def rank(
        self,
        artworks: Sequence[Artwork],
        viewer: Viewer,
        now: datetime,
    ) -> List[ScoredArtwork]:
        """
        Rank artworks for a viewer.

        Args:
            artworks: Catalogue snapshot
            viewer: Viewer to personalize for
            now: Reference time for recency and trending

        Returns:
            Scored artworks, best first
        """
        scored = self.score_all(artworks, viewer, now)
        # sorted() is stable, so ties keep catalogue order
        ranked = sorted(scored, key=lambda s: s.score, reverse=True)

        logger.debug(f"Ranked {len(ranked)} artworks for viewer={viewer.id}")
        return ranked
