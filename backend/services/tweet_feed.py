"""
Tweet feed service: fetches posts around a location for display.

Runs the blocking token + search calls sequentially in a worker thread and
hands the outcome back as a FeedResult, translating client errors into a
user-facing message.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional

from pydantic import BaseModel, Field

from adapter.models import Post
from adapter.twitter import TwitterClient, TwitterClientError

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Failed to retrieve Tweets"


class FeedResult(BaseModel):
    """Outcome of a feed load: the posts to render, or an error message."""
    posts: List[Post] = Field(default_factory=list, description="Posts in API order")
    error: Optional[str] = Field(default=None, description="User-facing failure message")

    @property
    def ok(self) -> bool:
        return self.error is None


class TweetFeed:
    """
    Loads posts near a coordinate pair using application-only auth.

    A fresh token is acquired for every load; tokens are not cached.
    """

    def __init__(self, client: TwitterClient, api_key: str, api_secret: str):
        self.client = client
        self.api_key = api_key
        self.api_secret = api_secret

    @property
    def is_configured(self) -> bool:
        """Check if feed has credentials to authenticate with."""
        return bool(self.api_key and self.api_secret)

    def fetch(self, latitude: float, longitude: float) -> List[Post]:
        """Blocking: acquire a token, then search. Client errors propagate."""
        token = self.client.acquire_token(self.api_key, self.api_secret)
        return self.client.search_by_location(token, latitude, longitude)

    async def load(
        self,
        latitude: float,
        longitude: float,
        on_result: Optional[Callable[[FeedResult], None]] = None,
    ) -> FeedResult:
        """
        Fetch posts without blocking the event loop.

        Args:
            latitude: Centre latitude
            longitude: Centre longitude
            on_result: Optional callback invoked with the result on the loop thread

        Returns:
            FeedResult with posts, or with `error` set if the client failed
        """
        try:
            posts = await asyncio.to_thread(self.fetch, latitude, longitude)
            result = FeedResult(posts=posts)
        except TwitterClientError as e:
            logger.error(f"Feed load near {latitude},{longitude} failed: {e}")
            result = FeedResult(error=FAILURE_MESSAGE)

        if on_result is not None:
            on_result(result)
        return result
