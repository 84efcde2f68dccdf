"""
FastAPI routes for Tweet Radar backend.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from adapter.models import Post
from adapter.twitter.mocks import sample_posts
from services import TweetFeed

logger = logging.getLogger(__name__)

# Router for API endpoints
router = APIRouter(prefix="/api/v1", tags=["Tweet Radar"])


# ============================================================================
# Response Models
# ============================================================================

class TweetsResponse(BaseModel):
    """Posts found around a location."""
    latitude: float
    longitude: float
    count: int
    posts: List[Post]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    timestamp: datetime
    configured: bool


# ============================================================================
# Dependencies
# ============================================================================

_feed: Optional[TweetFeed] = None


def set_dependencies(feed: Optional[TweetFeed]):
    """Set the service dependencies (called from main app)."""
    global _feed
    _feed = feed


def get_feed() -> TweetFeed:
    if _feed is None:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return _feed


# ============================================================================
# Routes
# ============================================================================

@router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        configured=_feed is not None and _feed.is_configured,
    )


@router.get("/tweets", response_model=TweetsResponse)
async def get_tweets(
    lat: float = Query(..., ge=-90, le=90, description="Centre latitude"),
    lon: float = Query(..., ge=-180, le=180, description="Centre longitude"),
    feed: TweetFeed = Depends(get_feed),
):
    """Posts mentioning the search term within the search radius of (lat, lon)."""
    result = await feed.load(lat, lon)
    if not result.ok:
        raise HTTPException(status_code=502, detail=result.error)

    return TweetsResponse(latitude=lat, longitude=lon, count=len(result.posts), posts=result.posts)


@router.get("/tweets/sample", response_model=List[Post])
async def get_sample_tweets():
    return sample_posts()


__all__ = ["router", "set_dependencies", "TweetsResponse", "HealthResponse"]
