"""Models package - domain entities and interfaces."""
from .interfaces import ArtworkRepository, ViewerRepository
from .schemas import (
    Artwork,
    ErrorResponse,
    FeedConfig,
    FeedItem,
    FeedRequest,
    FeedResponse,
    ScoredArtwork,
    SignalWeights,
    SimilarItem,
    SimilarRequest,
    SimilarResponse,
    Viewer,
)

__all__ = [
    # Interfaces
    "ArtworkRepository",
    "ViewerRepository",
    # Schemas
    "Artwork",
    "ErrorResponse",
    "FeedConfig",
    "FeedItem",
    "FeedRequest",
    "FeedResponse",
    "ScoredArtwork",
    "SignalWeights",
    "SimilarItem",
    "SimilarRequest",
    "SimilarResponse",
    "Viewer",
]
