"""
FastAPI application for Content Sentiment.

Provides REST API endpoints for:
- Ad-hoc sentiment analysis of text
- Posts and comments with their stored sentiment score
- Sentiment category filtering of post and comment lists
- Batched recompute and cleanup of sentiment metadata
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.routes import comments, posts, sentiment
from content_sentiment import __version__
from content_sentiment.config import settings

logging.basicConfig(
    level=settings().LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    logger.info("Starting Content Sentiment API...")
    try:
        from content_sentiment.db import initialize_database

        initialize_database()
        logger.info("Database schema verified")
    except Exception as e:
        logger.error(f"Database initialization error: {e}")

    yield

    logger.info("Shutting down Content Sentiment API...")
    from content_sentiment.db import close_engine

    close_engine()


app = FastAPI(
    title="Content Sentiment API",
    description="Sentiment scoring and filtering for posts, pages and comments",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.include_router(
    sentiment.router,
    prefix="/sentiment",
    tags=["Sentiment"],
)
app.include_router(
    posts.router,
    prefix="/posts",
    tags=["Posts"],
)
app.include_router(
    comments.router,
    prefix="/comments",
    tags=["Comments"],
)


@app.get("/", include_in_schema=False)
async def root():
    return {"message": "Content Sentiment API", "docs": "/docs"}


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint for monitoring and load balancers.

    Returns:
        status: "healthy" or "degraded"
        timestamp: Current UTC timestamp
        database: Database connection status
        version: API version
    """
    db_healthy = False
    try:
        from content_sentiment.db import healthcheck

        db_healthy = healthcheck()
    except Exception as e:
        logger.warning(f"Health check database error: {e}")

    return {
        "status": "healthy" if db_healthy else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "connected" if db_healthy else "disconnected",
        "version": __version__,
    }


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": str(exc) if settings().DEBUG else "An unexpected error occurred",
            "status": 500,
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="127.0.0.1", port=8000, reload=True)
