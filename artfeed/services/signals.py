"""
Ranking signals.
Each strategy maps (artwork, viewer, now) to a normalized value in [0, 1].
"""
import math
import sys
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import List

from artfeed.models.schemas import Artwork, FeedConfig, Viewer

_HOUR = timedelta(hours=1)

# Largest exponent math.exp accepts without overflowing
_MAX_EXPONENT = math.floor(math.log(sys.float_info.max))


def _as_utc(moment: datetime) -> datetime:
    # Naive timestamps are treated as UTC
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def hours_old(artwork: Artwork, now: datetime) -> int:
    """Whole hours since upload, truncated toward zero (negative for future uploads)."""
    return int((_as_utc(now) - _as_utc(artwork.uploaded_at)) / _HOUR)


# =============================================================================
# Signal Strategy (Strategy Pattern)
# =============================================================================


class SignalStrategy(ABC):
    """Abstract base class for ranking signals."""

    name: str = ""

    def __init__(self, config: FeedConfig) -> None:
        self._config = config

    @abstractmethod
    def score(self, artwork: Artwork, viewer: Viewer, now: datetime) -> float:
        """Return the signal value for one artwork."""


class RecencySignal(SignalStrategy):
    """Exponential decay over artwork age."""

    name = "recency"

    def score(self, artwork: Artwork, viewer: Viewer, now: datetime) -> float:
        age = hours_old(artwork, now)
        # Future uploads exceed 1.0 unless clamping is enabled
        if age <= 0 and self._config.clamp_future_recency:
            return 1.0
        exponent = -self._config.decay_rate * age / 24.0
        return math.exp(min(exponent, _MAX_EXPONENT))


class EngagementSignal(SignalStrategy):
    """Sigmoid over the engagement rate, centred on the midpoint rate."""

    name = "engagement"

    def score(self, artwork: Artwork, viewer: Viewer, now: datetime) -> float:
        rate = artwork.engagement_rate
        exponent = -self._config.engagement_steepness * (
            rate - self._config.engagement_midpoint
        )
        return 1.0 / (1.0 + math.exp(exponent))


class QualitySignal(SignalStrategy):
    """Linear rescale of the curated quality score."""

    name = "quality"

    def score(self, artwork: Artwork, viewer: Viewer, now: datetime) -> float:
        return artwork.quality_score / 100.0


class PersonalizationSignal(SignalStrategy):
    """
    Affinity between the viewer's preferences and the artwork.

    Followed artist, interaction-weighted tag matches, preferred-tag
    coverage and preferred category all add up. Artworks the viewer has
    already liked are scaled down afterwards so they do not resurface.
    """

    name = "personalization"

    def score(self, artwork: Artwork, viewer: Viewer, now: datetime) -> float:
        config = self._config
        total = 0.0

        if artwork.artist_id in viewer.followed_artists:
            total += config.follow_boost

        matching = artwork.tags & viewer.preferred_tags
        for tag in matching:
            total += config.tag_interaction_weight * viewer.tag_interactions.get(tag, 1)

        if viewer.preferred_tags:
            total += config.tag_coverage_weight * (
                len(matching) / len(viewer.preferred_tags)
            )

        if artwork.category in viewer.preferred_categories:
            total += config.category_boost

        if artwork.id in viewer.liked_artworks:
            total *= config.liked_penalty

        return min(total, 1.0)


class TrendingSignal(SignalStrategy):
    """Engagement velocity for artworks inside the trending window."""

    name = "trending"

    def score(self, artwork: Artwork, viewer: Viewer, now: datetime) -> float:
        age = hours_old(artwork, now)
        if age > self._config.trending_window_hours:
            return 0.0

        velocity = float(artwork.likes + artwork.comments * 2)
        if age > 0:
            velocity /= age

        return min(velocity / self._config.trending_velocity_scale, 1.0)


def default_signals(config: FeedConfig) -> List[SignalStrategy]:
    """All five signals, in weight order."""
    return [
        RecencySignal(config),
        EngagementSignal(config),
        QualitySignal(config),
        PersonalizationSignal(config),
        TrendingSignal(config),
    ]
