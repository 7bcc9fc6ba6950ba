"""
Domain models using Pydantic.
All data structures for the artwork feed ranking system.
"""
import math
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, List, Mapping, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)


# =============================================================================
# Domain Models (Internal)
# =============================================================================


class Artwork(BaseModel):
    """
    A single piece of creative work being ranked.
    Read-only snapshot supplied by the catalogue.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique artwork identifier")
    title: str = Field(..., description="Artwork title")
    artist_id: str = Field(..., description="Creator identifier")
    tags: FrozenSet[str] = Field(default_factory=frozenset, description="Content tags")
    uploaded_at: datetime = Field(..., description="Upload timestamp")
    likes: int = Field(default=0, ge=0)
    views: int = Field(default=0, ge=0)
    comments: int = Field(default=0, ge=0)
    quality_score: float = Field(..., ge=0, le=100, description="Curated quality (0-100)")
    category: str = Field(..., description="e.g. illustration, 3d, concept-art")

    @property
    def engagement_rate(self) -> float:
        """(likes + 2 * comments) / views, or 0 for unseen artworks."""
        if self.views > 0:
            return (self.likes + self.comments * 2) / self.views
        return 0.0


class Viewer(BaseModel):
    """
    The user a feed is personalized for.
    Fetched from the viewer store; unknown viewers are cold-start.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Viewer identifier")
    followed_artists: FrozenSet[str] = Field(default_factory=frozenset)
    liked_artworks: FrozenSet[str] = Field(default_factory=frozenset)
    preferred_tags: FrozenSet[str] = Field(default_factory=frozenset)
    preferred_categories: FrozenSet[str] = Field(default_factory=frozenset)
    tag_interactions: Mapping[str, int] = Field(
        default_factory=dict,
        validate_default=True,
        description="Tag -> interaction count (missing tags count as 1)",
    )

    @field_validator("tag_interactions")
    @classmethod
    def _freeze_interactions(cls, value: Mapping[str, int]) -> Mapping[str, int]:
        negative = [tag for tag, count in value.items() if count < 0]
        if negative:
            raise ValueError(f"tag_interactions must be non-negative: {sorted(negative)}")
        # Read-only view
        return MappingProxyType(dict(value))

    @field_serializer("tag_interactions")
    def _dump_interactions(self, value: Mapping[str, int]) -> Dict[str, int]:
        return dict(value)

    @property
    def is_cold_start(self) -> bool:
        """Check if viewer has no preferences or history."""
        return not (
            self.followed_artists
            or self.liked_artworks
            or self.preferred_tags
            or self.preferred_categories
        )


class ScoredArtwork(BaseModel):
    """Internal model for a ranked artwork with its composite score."""

    model_config = ConfigDict(frozen=True)

    artwork: Artwork
    score: float
    breakdown: Dict[str, float] = Field(default_factory=dict)


# =============================================================================
# Ranking Configuration
# =============================================================================


class SignalWeights(BaseModel):
    """Blend weights for the composite score. Must sum to 1.0."""

    model_config = ConfigDict(frozen=True)

    recency: float = Field(default=0.25, ge=0)
    engagement: float = Field(default=0.20, ge=0)
    quality: float = Field(default=0.15, ge=0)
    personalization: float = Field(default=0.25, ge=0)
    trending: float = Field(default=0.15, ge=0)

    @model_validator(mode="after")
    def _check_sum(self) -> "SignalWeights":
        total = sum(self.as_dict().values())
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"signal weights must sum to 1.0, got {total}")
        return self

    def as_dict(self) -> Dict[str, float]:
        return {
            "recency": self.recency,
            "engagement": self.engagement,
            "quality": self.quality,
            "personalization": self.personalization,
            "trending": self.trending,
        }


class FeedConfig(BaseModel):
    """
    Tunable constants for scoring, selection and similarity.
    Built once from settings and shared read-only by the engine.
    """

    model_config = ConfigDict(frozen=True)

    weights: SignalWeights = Field(default_factory=SignalWeights)

    # Recency
    decay_rate: float = Field(default=0.05, ge=0)
    clamp_future_recency: bool = False

    # Engagement sigmoid
    engagement_steepness: float = 5.0
    engagement_midpoint: float = 0.1

    # Personalization
    follow_boost: float = 0.4
    tag_interaction_weight: float = 0.05
    tag_coverage_weight: float = 0.3
    category_boost: float = 0.2
    liked_penalty: float = Field(default=0.1, ge=0)

    # Trending
    trending_window_hours: int = Field(default=48, ge=0)
    trending_velocity_scale: float = Field(default=100.0, gt=0)

    # Diversity
    feed_size: int = Field(default=50, ge=1)
    max_per_artist: int = Field(default=2, ge=1)
    max_per_category: int = Field(default=5, ge=1)

    # Similarity
    similarity_category_weight: float = 0.3
    similarity_tag_weight: float = 0.7

    # Scoring fan-out
    parallel_threshold: int = Field(default=2000, ge=1)
    scoring_workers: int = Field(default=4, ge=1)


# =============================================================================
# API Models (External)
# =============================================================================


class FeedRequest(BaseModel):
    """Stateless feed request: the caller supplies viewer and catalogue."""

    viewer: Viewer
    artworks: List[Artwork] = Field(default_factory=list)
    now: Optional[datetime] = Field(
        default=None,
        description="Reference time; defaults to the server clock",
    )
    limit: Optional[int] = Field(default=None, ge=1, le=50)


class SimilarRequest(BaseModel):
    """Stateless "more like this" request."""

    reference: Artwork
    artworks: List[Artwork] = Field(default_factory=list)
    limit: int = Field(default=10, ge=0)


class FeedItem(BaseModel):
    """Single item in feed response."""

    id: str = Field(..., description="Artwork ID")
    title: str = Field(..., description="Artwork title")
    artist_id: str = Field(..., description="Creator ID")
    category: str = Field(..., description="Artwork category")
    debug_score: Optional[float] = Field(
        default=None,
        description="Computed score (debug only)",
    )


class FeedResponse(BaseModel):
    """Feed endpoint response."""

    viewer_id: str
    items: List[FeedItem] = Field(..., description="Ranked, diversified artworks")
    total_candidates: int = Field(..., description="Catalogue size before selection")
    generated_at: datetime


class SimilarItem(BaseModel):
    """Single item in a similar-artworks response."""

    id: str
    title: str
    category: str
    similarity: float


class SimilarResponse(BaseModel):
    """Similar-artworks endpoint response."""

    reference_id: str
    items: List[SimilarItem]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: Dict[str, Any] = Field(..., description="Error details")
