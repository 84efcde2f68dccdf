"""
Shared data models for adapters.
"""

from typing import Dict

from pydantic import BaseModel, Field


class Post(BaseModel):
    """
    A single post (tweet) returned by the search API, ready for display.

    Attributes:
        author: Display name of the author
        handle: Author screen name
        body: Full post text
        avatar_url: HTTPS URL of the author's profile image
    """
    author: str = Field(description="Display name of the author")
    handle: str = Field(description="Author screen name")
    body: str = Field(description="Full post text")
    avatar_url: str = Field(description="HTTPS URL of the author's profile image")


class GeoQuery(BaseModel):
    """A location-bounded search: a term plus a centre point and radius in miles."""
    term: str = Field(default="Android", description="Search term")
    latitude: float = Field(description="Centre latitude")
    longitude: float = Field(description="Centre longitude")
    radius_miles: int = Field(default=30, description="Search radius in miles")

    @property
    def geocode(self) -> str:
        """Geocode parameter in the form `lat,lon,<radius>mi`."""
        return f"{self.latitude},{self.longitude},{self.radius_miles}mi"

    def to_params(self) -> Dict[str, str]:
        return {"q": self.term, "geocode": self.geocode}


__all__ = ["Post", "GeoQuery"]
