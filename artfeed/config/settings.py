"""
Centralized configuration using Pydantic BaseSettings.
All environment variables are loaded here - no hardcoded values.
"""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from artfeed.models.schemas import FeedConfig, SignalWeights


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)

    # Application
    APP_NAME: str = "Artwork Feed API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Telemetry
    ENABLE_OTEL: bool = False  # Default to False to prevent gRPC errors in dev
    ENABLE_PROMETHEUS: bool = True

    # Signal weights (must sum to 1.0)
    RECENCY_WEIGHT: float = 0.25
    ENGAGEMENT_WEIGHT: float = 0.20
    QUALITY_WEIGHT: float = 0.15
    PERSONALIZATION_WEIGHT: float = 0.25
    TRENDING_WEIGHT: float = 0.15

    # Signals
    RECENCY_DECAY_RATE: float = 0.05
    CLAMP_FUTURE_RECENCY: bool = False
    ENGAGEMENT_STEEPNESS: float = 5.0
    ENGAGEMENT_MIDPOINT: float = 0.1
    TRENDING_WINDOW_HOURS: int = 48
    TRENDING_VELOCITY_SCALE: float = 100.0

    # Personalization
    FOLLOW_BOOST: float = 0.4
    TAG_INTERACTION_WEIGHT: float = 0.05
    TAG_COVERAGE_WEIGHT: float = 0.3
    CATEGORY_BOOST: float = 0.2
    LIKED_PENALTY: float = 0.1

    # Diversity
    FEED_SIZE: int = 50
    MAX_PER_ARTIST: int = 2
    MAX_PER_CATEGORY: int = 5

    # Similar artworks
    SIMILARITY_CATEGORY_WEIGHT: float = 0.3
    SIMILARITY_TAG_WEIGHT: float = 0.7
    DEFAULT_SIMILAR_LIMIT: int = 10
    MAX_SIMILAR_LIMIT: int = 50

    # Scoring fan-out for large catalogues
    PARALLEL_SCORING_THRESHOLD: int = 2000
    SCORING_WORKERS: int = 4

    def feed_config(self) -> FeedConfig:
        """Build the immutable ranking configuration."""
        return FeedConfig(
            weights=SignalWeights(
                recency=self.RECENCY_WEIGHT,
                engagement=self.ENGAGEMENT_WEIGHT,
                quality=self.QUALITY_WEIGHT,
                personalization=self.PERSONALIZATION_WEIGHT,
                trending=self.TRENDING_WEIGHT,
            ),
            decay_rate=self.RECENCY_DECAY_RATE,
            clamp_future_recency=self.CLAMP_FUTURE_RECENCY,
            engagement_steepness=self.ENGAGEMENT_STEEPNESS,
            engagement_midpoint=self.ENGAGEMENT_MIDPOINT,
            follow_boost=self.FOLLOW_BOOST,
            tag_interaction_weight=self.TAG_INTERACTION_WEIGHT,
            tag_coverage_weight=self.TAG_COVERAGE_WEIGHT,
            category_boost=self.CATEGORY_BOOST,
            liked_penalty=self.LIKED_PENALTY,
            trending_window_hours=self.TRENDING_WINDOW_HOURS,
            trending_velocity_scale=self.TRENDING_VELOCITY_SCALE,
            feed_size=self.FEED_SIZE,
            max_per_artist=self.MAX_PER_ARTIST,
            max_per_category=self.MAX_PER_CATEGORY,
            similarity_category_weight=self.SIMILARITY_CATEGORY_WEIGHT,
            similarity_tag_weight=self.SIMILARITY_TAG_WEIGHT,
            parallel_threshold=self.PARALLEL_SCORING_THRESHOLD,
            scoring_workers=self.SCORING_WORKERS,
        )


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance - singleton pattern."""
    return Settings()
