"""
Services module for Tweet Radar backend.
"""

from .tweet_feed import FAILURE_MESSAGE, FeedResult, TweetFeed

__all__ = [
    "TweetFeed",
    "FeedResult",
    "FAILURE_MESSAGE",
]
