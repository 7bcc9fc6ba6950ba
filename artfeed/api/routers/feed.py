"""
Feed API router.
Implements the feed and similar-artwork endpoints with caching headers.
"""
import hashlib
import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, Header, Query, Response, status

from artfeed.api.dependencies import get_feed_service
from artfeed.config import get_settings
from artfeed.models.schemas import (
    Artwork,
    ErrorResponse,
    FeedItem,
    FeedRequest,
    FeedResponse,
    ScoredArtwork,
    SimilarItem,
    SimilarRequest,
    SimilarResponse,
)
from artfeed.services.feed import FeedService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["feed"])


def _to_feed_items(scored: List[ScoredArtwork]) -> List[FeedItem]:
    return [
        FeedItem(
            id=sa.artwork.id,
            title=sa.artwork.title,
            artist_id=sa.artwork.artist_id,
            category=sa.artwork.category,
            debug_score=round(sa.score, 4),
        )
        for sa in scored
    ]


def _to_similar_items(pairs: List[Tuple[Artwork, float]]) -> List[SimilarItem]:
    return [
        SimilarItem(
            id=artwork.id,
            title=artwork.title,
            category=artwork.category,
            similarity=round(similarity, 4),
        )
        for artwork, similarity in pairs
    ]


def _feed_etag(items: List[FeedItem]) -> Optional[str]:
    """Weak ETag over the ordered item ids."""
    if not items:
        return None
    content_str = ",".join(item.id for item in items)
    return f'W/"{hashlib.md5(content_str.encode()).hexdigest()[:16]}"'


@router.get(
    "/feed",
    response_model=FeedResponse,
    summary="Get Personalized Feed",
    description="""
    Retrieve the ranked, diversified artwork feed for a stored viewer.

    Artworks are scored on recency, engagement, quality, personalization
    and trending, then selected with per-artist and per-category caps.
    Unknown viewers receive a cold-start feed.
    """,
    responses={
        200: {"description": "Ranked feed returned successfully"},
        304: {"description": "Feed not modified"},
        400: {"model": ErrorResponse, "description": "Catalogue failed validation"},
    },
)
async def get_feed(
    response: Response,
    viewer_id: str = Query(
        ...,
        min_length=1,
        description="Viewer identifier",
    ),
    limit: Optional[int] = Query(
        default=None,
        ge=1,
        le=50,
        description="Number of items to return (default: configured feed size)",
    ),
    if_none_match: Optional[str] = Header(
        default=None,
        description="ETag from previous response",
    ),
    feed_service: FeedService = Depends(get_feed_service),
) -> FeedResponse:
    """Feed for a stored viewer; `now` is taken from the server clock."""
    feed_size = feed_service.config.feed_size
    effective_limit = min(limit or feed_size, feed_size)
    now = datetime.now(timezone.utc)

    scored, total = await feed_service.get_feed(
        viewer_id=viewer_id,
        now=now,
        limit=effective_limit,
    )
    items = _to_feed_items(scored)

    # -------------------------------------------------------------------------
    # ETag / 304 Logic
    # -------------------------------------------------------------------------
    etag = _feed_etag(items)
    if etag:
        response.headers["ETag"] = etag

    if if_none_match and etag and if_none_match == etag:
        return Response(status_code=status.HTTP_304_NOT_MODIFIED)

    # Personalized: private, short TTL
    response.headers["Cache-Control"] = "private, max-age=30"
    response.headers["Vary"] = "X-Viewer-ID"

    return FeedResponse(
        viewer_id=viewer_id,
        items=items,
        total_candidates=total,
        generated_at=now,
    )


@router.post(
    "/feed",
    response_model=FeedResponse,
    summary="Rank a Supplied Catalogue",
    description="Stateless feed: the request carries the viewer and the artworks.",
    responses={400: {"model": ErrorResponse, "description": "Invalid catalogue or limit"}},
)
async def post_feed(
    request: FeedRequest,
    feed_service: FeedService = Depends(get_feed_service),
) -> FeedResponse:
    now = request.now or datetime.now(timezone.utc)
    feed_size = feed_service.config.feed_size
    scored = feed_service.generate_scored_feed(
        request.viewer,
        request.artworks,
        now,
        limit=min(request.limit or feed_size, feed_size),
    )
    return FeedResponse(
        viewer_id=request.viewer.id,
        items=_to_feed_items(scored),
        total_candidates=len(request.artworks),
        generated_at=now,
    )


@router.get(
    "/artworks/{artwork_id}/similar",
    response_model=SimilarResponse,
    summary="More Like This",
    responses={404: {"model": ErrorResponse, "description": "Artwork not found"}},
)
async def get_similar(
    artwork_id: str,
    limit: Optional[int] = Query(default=None, ge=0, description="Maximum results"),
    feed_service: FeedService = Depends(get_feed_service),
) -> SimilarResponse:
    """Artworks from the catalogue most similar to the given one."""
    settings = get_settings()
    effective_limit = settings.DEFAULT_SIMILAR_LIMIT if limit is None else limit
    effective_limit = min(effective_limit, settings.MAX_SIMILAR_LIMIT)

    reference, pairs = await feed_service.get_similar(artwork_id, effective_limit)
    return SimilarResponse(reference_id=reference.id, items=_to_similar_items(pairs))


@router.post(
    "/similar",
    response_model=SimilarResponse,
    summary="More Like This (Stateless)",
    responses={400: {"model": ErrorResponse, "description": "Invalid limit"}},
)
async def post_similar(
    request: SimilarRequest,
    feed_service: FeedService = Depends(get_feed_service),
) -> SimilarResponse:
    pairs = feed_service.rank_similar(request.reference, request.artworks, request.limit)
    return SimilarResponse(reference_id=request.reference.id, items=_to_similar_items(pairs))
