"""
Tweet Radar Backend - Main FastAPI Application

Run with:
    uvicorn main:app --reload --port 8000
"""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from adapter.twitter import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS, TwitterClient
from api import router, set_dependencies
from services import TweetFeed

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def build_feed() -> TweetFeed:
    """Create the client and feed from environment configuration."""
    client = TwitterClient(
        base_url=os.environ.get("TWITTER_BASE_URL", DEFAULT_BASE_URL),
        timeout=float(os.environ.get("TWITTER_TIMEOUT", DEFAULT_TIMEOUT_SECONDS)),
    )
    return TweetFeed(
        client=client,
        api_key=os.environ.get("TWITTER_API_KEY", ""),
        api_secret=os.environ.get("TWITTER_API_SECRET", ""),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan - setup and teardown.
    """
    logger.info("Starting Tweet Radar backend...")

    feed = build_feed()
    if feed.is_configured:
        logger.info("✓ Twitter credentials configured")
    else:
        logger.warning("⚠ Twitter credentials missing - set TWITTER_API_KEY and TWITTER_API_SECRET")

    set_dependencies(feed)
    logger.info("Tweet Radar backend ready!")

    yield  # Application runs here

    logger.info("Shutting down Tweet Radar backend...")
    set_dependencies(None)
    feed.client.close()


# Create FastAPI app
app = FastAPI(
    title="Tweet Radar API",
    description="Posts near a location via Twitter application-only search",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(router)


# Root endpoint
@app.get("/")
async def root():
    return {"name": "Tweet Radar API", "version": "1.0.0", "docs": "/docs"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=int(os.environ.get("PORT", "8000")),
        reload=True,
    )
