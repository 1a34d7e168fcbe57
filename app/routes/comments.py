"""
Comment API routes.

Endpoints:
- POST /comments - Add a comment to a post and score it
- GET /comments?sentiment_type=neg - List comments with their sentiment score
- GET /comments/{comment_id}/score - Stored score, computed on first access
- POST /comments/{comment_id}/sentiment - Force a recompute
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from content_sentiment import content_store
from content_sentiment.content_store import ContentNotFoundError
from content_sentiment.nlp.schemas import ContentType
from content_sentiment.sentiment_sync import (
    ensure_comment_score,
    filter_comments,
    get_stored_category,
    on_comment_posted,
    update_comment_sentiment,
)

logger = logging.getLogger(__name__)
router = APIRouter()


class CommentCreate(BaseModel):
    postId: int
    content: str
    author: str = ""
    approved: bool = True


class CommentItem(BaseModel):
    id: int
    postId: int
    author: str
    approved: bool
    score: Optional[str] = None
    category: Optional[str] = None


class CommentListResponse(BaseModel):
    comments: List[CommentItem]
    total: int
    sentimentType: Optional[str] = None


class CommentScoreResponse(BaseModel):
    id: int
    score: str
    category: Optional[str] = None


def _comment_item(comment: dict, score: Optional[str]) -> CommentItem:
    category = get_stored_category(ContentType.COMMENT, comment["id"])
    return CommentItem(
        id=int(comment["id"]),
        postId=int(comment["post_id"]),
        author=comment.get("author") or "",
        approved=bool(comment.get("approved")),
        score=score,
        category=category.value if category else None,
    )


@router.post("", response_model=CommentItem, status_code=201)
async def create_comment(request: CommentCreate):
    try:
        comment_id = content_store.insert_comment(
            request.postId, request.content, author=request.author, approved=request.approved
        )
    except ContentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    try:
        score = on_comment_posted(comment_id, request.approved)
        return _comment_item(content_store.get_comment(comment_id), score)
    except Exception as e:
        logger.error(f"Error scoring comment {comment_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("", response_model=CommentListResponse)
async def list_comments(
    sentiment_type: Optional[str] = Query(None, description="Filter by sentiment: neu, pos, neg"),
):
    """List comments of every status, scoring any that have no stored score."""
    try:
        comments = filter_comments(sentiment_type)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        items = [_comment_item(comment, ensure_comment_score(comment["id"])) for comment in comments]
    except Exception as e:
        logger.error(f"Error listing comments: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return CommentListResponse(comments=items, total=len(items), sentimentType=sentiment_type or None)


@router.get("/{comment_id}/score", response_model=CommentScoreResponse)
async def get_comment_score(comment_id: int):
    try:
        score = ensure_comment_score(comment_id)
    except ContentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    category = get_stored_category(ContentType.COMMENT, comment_id)
    return CommentScoreResponse(id=comment_id, score=score, category=category.value if category else None)


@router.post("/{comment_id}/sentiment", response_model=CommentScoreResponse)
async def recompute_comment_sentiment(comment_id: int):
    try:
        label = update_comment_sentiment(comment_id)
    except ContentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return CommentScoreResponse(id=comment_id, score=label.html, category=label.category.value)
