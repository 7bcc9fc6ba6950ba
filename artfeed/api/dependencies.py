"""
Dependency injection container.
Creates and wires all application components.
Uses FastAPI's dependency injection system.
"""
from functools import lru_cache

from fastapi import Depends

from artfeed.config import get_settings
from artfeed.models.schemas import FeedConfig
from artfeed.repositories.memory import (
    InMemoryArtworkRepository,
    InMemoryViewerRepository,
)
from artfeed.services.feed import FeedService
from artfeed.services.ranking import RankingEngine


# =============================================================================
# Singleton Instances (Application Lifetime)
# =============================================================================


@lru_cache()
def get_feed_config() -> FeedConfig:
    """Get ranking configuration built from settings."""
    return get_settings().feed_config()


@lru_cache()
def get_artwork_repository() -> InMemoryArtworkRepository:
    """Get singleton artwork repository."""
    return InMemoryArtworkRepository()


@lru_cache()
def get_viewer_repository() -> InMemoryViewerRepository:
    """Get singleton viewer repository."""
    return InMemoryViewerRepository()


@lru_cache()
def get_ranking_engine() -> RankingEngine:
    """Get singleton ranking engine."""
    return RankingEngine(get_feed_config())


# =============================================================================
# Request-Scoped Dependencies (Per-Request Lifetime)
# =============================================================================


def get_feed_service(
    artwork_repo: InMemoryArtworkRepository = Depends(get_artwork_repository),
    viewer_repo: InMemoryViewerRepository = Depends(get_viewer_repository),
) -> FeedService:
    """
    Get feed service with all dependencies wired.
    Repositories are resolved through FastAPI so tests can override them.
    """
    return FeedService(
        artwork_repo=artwork_repo,
        viewer_repo=viewer_repo,
        config=get_feed_config(),
        ranking_engine=get_ranking_engine(),
    )


# =============================================================================
# Cleanup Functions
# =============================================================================


def clear_caches() -> None:
    """Clear all cached singleton instances (for testing)."""
    get_feed_config.cache_clear()
    get_artwork_repository.cache_clear()
    get_viewer_repository.cache_clear()
    get_ranking_engine.cache_clear()
