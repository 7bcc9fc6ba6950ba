"""
Health check router for observability.
"""
from fastapi import APIRouter, Depends

from artfeed.api.dependencies import get_artwork_repository, get_feed_config
from artfeed.repositories.memory import InMemoryArtworkRepository

router = APIRouter(tags=["health"])


@router.get("/health", summary="Health Check")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "healthy"}


@router.get("/health/ready", summary="Readiness Check")
async def readiness_check(
    artwork_repo: InMemoryArtworkRepository = Depends(get_artwork_repository),
) -> dict:
    """
    Readiness check for Kubernetes.
    Reports catalogue size and the active ranking configuration.
    """
    config = get_feed_config()

    return {
        "status": "ready",
        "catalogue": {"artworks": await artwork_repo.count()},
        "ranking": {
            "weights": config.weights.as_dict(),
            "feed_size": config.feed_size,
            "max_per_artist": config.max_per_artist,
            "max_per_category": config.max_per_category,
        },
    }
