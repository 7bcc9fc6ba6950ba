"""
Diversity selection.
Turns a ranked list into a bounded feed without runs of one artist or category.
"""
import logging
from collections import Counter
from typing import List, Optional, Sequence

from artfeed.models.schemas import FeedConfig, ScoredArtwork

logger = logging.getLogger(__name__)


class DiversitySelector:
    """
    Greedy capped selection over a ranked list.

    Walks candidates in rank order and admits one only while its artist
    and its category are both under their caps. A rejected candidate is
    dropped, not deferred, so the feed can come out shorter than the
    target when the caps bind.
    """

    def __init__(self, config: Optional[FeedConfig] = None) -> None:
        self._config = config or FeedConfig()

    def select(
        self,
        ranked: Sequence[ScoredArtwork],
        target_size: Optional[int] = None,
    ) -> List[ScoredArtwork]:
        """
        Select up to target_size candidates under the diversity caps.

        Args:
            ranked: Candidates sorted best first
            target_size: Feed length (default: config.feed_size)

        Returns:
            Admitted candidates, in rank order
        """
        target = self._config.feed_size if target_size is None else target_size
        max_per_artist = self._config.max_per_artist
        max_per_category = self._config.max_per_category

        selected: List[ScoredArtwork] = []
        artist_counts: Counter = Counter()
        category_counts: Counter = Counter()
        skipped = 0

        for candidate in ranked:
            if len(selected) >= target:
                break

            artwork = candidate.artwork
            if (
                artist_counts[artwork.artist_id] < max_per_artist
                and category_counts[artwork.category] < max_per_category
            ):
                selected.append(candidate)
                artist_counts[artwork.artist_id] += 1
                category_counts[artwork.category] += 1
            else:
                skipped += 1

        logger.debug(
            f"Diversity selection kept {len(selected)} of {len(ranked)} "
            f"(skipped {skipped}, target {target})"
        )
        return selected
