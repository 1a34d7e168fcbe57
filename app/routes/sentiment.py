"""
Sentiment API routes.

Endpoints:
- POST /sentiment/analyze - Score arbitrary text
- GET /sentiment/filters - Category options for list filters
- POST /sentiment/update-scores - Recompute one batch of posts or comments
- DELETE /sentiment/meta - Remove all stored sentiment metadata
"""

import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from content_sentiment.nlp.schemas import BatchProgress, ContentType
from content_sentiment.nlp.sentiment import SentimentClassifierError, analyze
from content_sentiment.sentiment_sync import (
    SENTIMENT_FILTER_OPTIONS,
    purge_sentiment_meta,
    update_scores_batch,
)

logger = logging.getLogger(__name__)
router = APIRouter()


class AnalyzeRequest(BaseModel):
    text: str = ""


class AnalyzeResponse(BaseModel):
    """Score distribution plus the rendered label."""

    category: str
    label: str
    percent: float
    color: str
    html: str
    distribution: Dict[str, float]


class FilterOption(BaseModel):
    value: str
    label: str


class UpdateScoresRequest(BaseModel):
    type: ContentType = ContentType.POST
    offset: int = Field(0, ge=0)
    batchSize: Optional[int] = Field(None, ge=1, le=500)


class PurgeResponse(BaseModel):
    removed: int


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_text(request: AnalyzeRequest):
    """Strip shortcodes from the text, score it and return the label."""
    try:
        result = analyze(request.text)
    except SentimentClassifierError as e:
        logger.error(f"Sentiment classifier failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return AnalyzeResponse(
        category=result.category.value,
        label=result.label.text,
        percent=result.label.percent,
        color=result.label.color,
        html=result.label.html,
        distribution={key.value: value for key, value in result.distribution.items()},
    )


@router.get("/filters", response_model=List[FilterOption])
async def get_filter_options():
    """Categories accepted by the sentiment_type list filter."""
    return [FilterOption(value=value, label=label) for value, label in SENTIMENT_FILTER_OPTIONS.items()]


@router.post("/update-scores", response_model=BatchProgress)
async def update_scores(request: UpdateScoresRequest):
    """
    Recompute sentiment for one batch.

    Clients loop on the returned offset until completed is true, first for
    posts and then for comments.
    """
    try:
        return update_scores_batch(request.type, request.offset, request.batchSize)
    except Exception as e:
        logger.error(f"Error updating {request.type.value} scores at offset {request.offset}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/meta", response_model=PurgeResponse)
async def delete_sentiment_meta():
    """Remove every stored sentiment score and category."""
    try:
        return PurgeResponse(removed=purge_sentiment_meta())
    except Exception as e:
        logger.error(f"Error purging sentiment metadata: {e}")
        raise HTTPException(status_code=500, detail=str(e))
