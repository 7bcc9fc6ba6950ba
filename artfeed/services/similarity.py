"""
Content similarity for "more like this".
Category match plus tag Jaccard overlap; independent of the feed pipeline.
"""
from typing import List, Optional, Sequence, Tuple

from artfeed.models.schemas import Artwork, FeedConfig


class SimilarityFinder:
    """Rank a catalogue by content similarity to a reference artwork."""

    def __init__(self, config: Optional[FeedConfig] = None) -> None:
        self._config = config or FeedConfig()

    def similarity(self, first: Artwork, second: Artwork) -> float:
        score = 0.0

        if first.category == second.category:
            score += self._config.similarity_category_weight

        union = first.tags | second.tags
        if union:
            overlap = len(first.tags & second.tags) / len(union)
            score += self._config.similarity_tag_weight * overlap

        return score

    def rank_similar(
        self,
        reference: Artwork,
        artworks: Sequence[Artwork],
        limit: int,
    ) -> List[Tuple[Artwork, float]]:
        """Top `limit` (artwork, similarity) pairs, most similar first."""
        if limit <= 0:
            return []

        scored = [
            (artwork, self.similarity(reference, artwork))
            for artwork in artworks
            if artwork.id != reference.id
        ]
        scored.sort(key=lambda pair: pair[1], reverse=True)
        return scored[:limit]
