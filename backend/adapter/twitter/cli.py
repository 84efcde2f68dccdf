#!/usr/bin/env python3
"""
CLI for testing TwitterClient functionality.

Usage:
    python -m adapter.twitter.cli

Commands:
    token   - Acquire an application-only bearer token
    search  - Search posts around a latitude/longitude
    json    - Same as search, output as JSON
    sample  - Show the built-in sample posts
"""

import cmd
import json
import logging
import os
from typing import Optional

from dotenv import load_dotenv

from adapter.models import Post
from adapter.twitter import (
    DEFAULT_BASE_URL,
    SEARCH_RADIUS_MILES,
    SEARCH_TERM,
    MalformedResponseError,
    TransportError,
    TwitterClient,
    TwitterClientError,
)
from adapter.twitter.mocks import sample_posts


load_dotenv()

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


def _print_verbose_error(e: TwitterClientError):
    """Print verbose error information."""
    print("\n" + "=" * 60)
    print("✗ ERROR DETAILS")
    print("=" * 60)
    print(f"  Type: {type(e).__name__}")
    print(f"  Message: {e}")

    if isinstance(e, TransportError):
        print("\n  💡 Troubleshooting:")
        print("     - Check your network connection")
        print("     - Verify TWITTER_BASE_URL if you overrode it")

    elif isinstance(e, MalformedResponseError):
        if e.status_code:
            print(f"  Status Code: {e.status_code}")
        if e.response_text:
            print(f"  Response: {e.response_text[:500]}")
        print("\n  💡 Troubleshooting:")
        print("     - The API answered but not with the expected JSON shape")

    print("=" * 60 + "\n")


class TwitterClientCLI(cmd.Cmd):
    """Interactive CLI for testing TwitterClient."""

    intro = """
╔═══════════════════════════════════════════════════════════════╗
║                     Tweet Radar CLI                            ║
║  Commands: token, search, json, sample, status, help, quit     ║
╚═══════════════════════════════════════════════════════════════╝
"""
    prompt = "radar> "

    def __init__(self):
        super().__init__()
        self.api_key = os.environ.get("TWITTER_API_KEY", "")
        self.api_secret = os.environ.get("TWITTER_API_SECRET", "")
        self.client = TwitterClient(base_url=os.environ.get("TWITTER_BASE_URL", DEFAULT_BASE_URL))
        self.token: Optional[str] = None

        if self.api_key and self.api_secret:
            print("✓ Credentials loaded from environment")
        else:
            print("⚠ TWITTER_API_KEY / TWITTER_API_SECRET not set - token requests will fail")

    def _print_post(self, post: Post, index: int = None):
        """Pretty print a post."""
        prefix = f"[{index}] " if index is not None else ""

        text = post.body.replace("\n", " ")[:100]
        if len(post.body) > 100:
            text += "..."

        print(f"{prefix}{post.author} ({post.handle})")
        print(f"   {text}")
        print()

    def _ensure_token(self) -> Optional[str]:
        if not self.token:
            self.do_token("")
        return self.token

    def _parse_coordinates(self, arg: str):
        parts = arg.split()
        if len(parts) != 2:
            print("Usage: search <latitude> <longitude>")
            print("Example: search 38.9072 -77.0369")
            return None
        try:
            return float(parts[0]), float(parts[1])
        except ValueError:
            print("✗ Latitude and longitude must be numbers")
            return None

    def do_status(self, arg):
        """Show client status and configuration."""
        print("\n=== Tweet Radar Status ===")
        print(f"Base URL: {self.client.base_url}")
        print(f"Credentials: {'Yes' if self.api_key and self.api_secret else 'No'}")
        print(f"Token: {'acquired' if self.token else 'none'}")
        print(f"Search: '{SEARCH_TERM}' within {SEARCH_RADIUS_MILES}mi")
        print()

    def do_token(self, arg):
        """
        Acquire an application-only bearer token.

        Usage: token
        """
        try:
            self.token = self.client.acquire_token(self.api_key, self.api_secret)
        except TwitterClientError as e:
            _print_verbose_error(e)
            return

        if self.token:
            print(f"✓ Token acquired ({len(self.token)} chars)")
        else:
            print("✗ No token returned - check your API key and secret")

    def do_search(self, arg):
        """
        Search posts around a point.

        Usage: search <latitude> <longitude>

        Example:
            search 38.9072 -77.0369
        """
        coords = self._parse_coordinates(arg)
        if coords is None:
            return
        if not self._ensure_token():
            return

        latitude, longitude = coords
        print(f"\nSearching '{SEARCH_TERM}' within {SEARCH_RADIUS_MILES}mi of {latitude},{longitude}")
        print("-" * 60)

        try:
            posts = self.client.search_by_location(self.token, latitude, longitude)
        except TwitterClientError as e:
            _print_verbose_error(e)
            return

        if not posts:
            print("No posts found.")
            return

        print(f"Found {len(posts)} posts:\n")
        for i, post in enumerate(posts, 1):
            self._print_post(post, i)

    def do_json(self, arg):
        """
        Search and output results as JSON.

        Usage: json <latitude> <longitude>
        """
        coords = self._parse_coordinates(arg)
        if coords is None or not self._ensure_token():
            return

        try:
            posts = self.client.search_by_location(self.token, *coords)
        except TwitterClientError as e:
            _print_verbose_error(e)
            return

        print(json.dumps([post.model_dump(mode="json") for post in posts], indent=2))

    def do_sample(self, arg):
        """Show the built-in sample posts."""
        for i, post in enumerate(sample_posts(), 1):
            self._print_post(post, i)

    def do_quit(self, arg):
        """Exit the CLI."""
        self.client.close()
        print("Goodbye!")
        return True

    def do_exit(self, arg):
        """Exit the CLI."""
        return self.do_quit(arg)

    def do_EOF(self, arg):
        """Handle Ctrl+D."""
        print()
        return self.do_quit(arg)

    def emptyline(self):
        """Do nothing on empty line."""
        pass


def main():
    """Run the CLI."""
    cli = TwitterClientCLI()
    try:
        cli.cmdloop()
    except KeyboardInterrupt:
        print("\nGoodbye!")


if __name__ == "__main__":
    main()
