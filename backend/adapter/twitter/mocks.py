"""
Sample posts and wire payloads for TwitterClient.
These are separated from the main client to avoid using fake data in production.
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..models import Post

PLACEHOLDER_AVATAR = "https://abs.twimg.com/sticky/default_profile_images/default_profile_normal.png"

_SAMPLE_POSTS = [
    ("Android Central", "@androidcentral", "NVIDIA Shield TV vs. Shield TV Pro: Which should I buy?"),
    ("DC Android", "@DCAndroid", "FYI - another great integration for the @Firebase platform"),
    (
        "KotlinConf",
        "@kotlinconf",
        "Can't make it to KotlinConf this year? We'll be live streaming the keynotes, "
        "closing panel and an entire track over the 2 main conference days.",
    ),
    (
        "Fragmented Podcast",
        "@FragmentedCast",
        ".... annnnnnnnnd we're back!\n\nListen in here: \nhttp://fragmentedpodcast.com/episodes/135/ ",
    ),
    ("Droidcon Boston", "@droidconbos", "#DroidconBos will be back in Boston next year on April 8-9!"),
    (
        "AndroidWeekly",
        "@androidweekly",
        "Latest Android Weekly Issue 327 is out!\nhttp://androidweekly.net/ #latest-issue  #AndroidDev",
    ),
]


def sample_posts() -> List[Post]:
    """Fixed list of posts for offline display and tests."""
    return [
        Post(author=author, handle=handle, body=body, avatar_url=PLACEHOLDER_AVATAR)
        for author, handle, body in _SAMPLE_POSTS
    ]


def mock_search_payload(posts: List[Post]) -> Dict[str, Any]:
    """Build a search/tweets.json response body carrying the given posts."""
    return {
        "statuses": [
            {
                "text": post.body,
                "user": {
                    "name": post.author,
                    "screen_name": post.handle,
                    "profile_image_url_https": post.avatar_url,
                },
            }
            for post in posts
        ],
        "search_metadata": {"count": len(posts)},
    }


__all__ = ["sample_posts", "mock_search_payload", "PLACEHOLDER_AVATAR"]
