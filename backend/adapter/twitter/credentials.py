"""
Credential encoding for Twitter application-only auth.

The OAuth2 token endpoint expects the API key and secret as a Basic-Auth
credential: each value is URL-encoded, the two are joined with a colon and the
result is Base64-encoded.
https://developer.twitter.com/en/docs/basics/authentication/oauth-2-0/application-only
"""

from __future__ import annotations

import base64
from urllib.parse import quote


def encode_secrets(api_key: str, api_secret: str) -> str:
    """Encode an API key/secret pair into the Basic-Auth token for /oauth2/token."""
    encoded_key = quote(api_key, safe="")
    encoded_secret = quote(api_secret, safe="")

    combined = f"{encoded_key}:{encoded_secret}"
    return base64.b64encode(combined.encode("utf-8")).decode("ascii")


__all__ = ["encode_secrets"]
