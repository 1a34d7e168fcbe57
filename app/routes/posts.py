"""
Post API routes.

Endpoints:
- POST /posts - Create a post or page and score it
- GET /posts?sentiment_type=pos - List posts with their sentiment score
- GET /posts/{post_id}/score - Stored score, computed on first access
- POST /posts/{post_id}/sentiment - Force a recompute
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from content_sentiment import content_store
from content_sentiment.content_store import ContentNotFoundError
from content_sentiment.sentiment_sync import (
    REVISION_POST_TYPE,
    ensure_post_score,
    filter_posts,
    get_stored_category,
    on_post_saved,
    update_post_sentiment,
)
from content_sentiment.nlp.schemas import ContentType

logger = logging.getLogger(__name__)
router = APIRouter()


class PostCreate(BaseModel):
    content: str
    title: str = ""
    postType: str = "post"
    status: str = "publish"
    parentId: Optional[int] = None


class PostItem(BaseModel):
    id: int
    postType: str
    status: str
    title: str
    score: Optional[str] = None
    category: Optional[str] = None


class PostListResponse(BaseModel):
    posts: List[PostItem]
    total: int
    sentimentType: Optional[str] = None


class ScoreResponse(BaseModel):
    id: int
    score: str
    category: Optional[str] = None


def _post_item(post: dict, score: Optional[str]) -> PostItem:
    category = get_stored_category(ContentType.POST, post["id"])
    return PostItem(
        id=int(post["id"]),
        postType=post.get("post_type") or "post",
        status=post.get("status") or "",
        title=post.get("title") or "",
        score=score,
        category=category.value if category else None,
    )


@router.post("", response_model=PostItem, status_code=201)
async def create_post(request: PostCreate):
    """Insert a post and run the save hook (revisions are stored unscored)."""
    try:
        post_id = content_store.insert_post(
            request.content,
            title=request.title,
            post_type=request.postType,
            status=request.status,
            parent_id=request.parentId,
        )
        score = on_post_saved(post_id)
        return _post_item(content_store.get_post(post_id), score)
    except Exception as e:
        logger.error(f"Error creating post: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("", response_model=PostListResponse)
async def list_posts(
    sentiment_type: Optional[str] = Query(None, description="Filter by sentiment: neu, pos, neg"),
):
    """
    List posts and pages with their sentiment score.

    Posts without a stored score are scored while the list is built.
    """
    try:
        posts = filter_posts(sentiment_type)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        items = [
            _post_item(post, ensure_post_score(post["id"]))
            for post in posts
            if post.get("post_type") != REVISION_POST_TYPE
        ]
    except Exception as e:
        logger.error(f"Error listing posts: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return PostListResponse(posts=items, total=len(items), sentimentType=sentiment_type or None)


@router.get("/{post_id}/score", response_model=ScoreResponse)
async def get_post_score(post_id: int):
    try:
        score = ensure_post_score(post_id)
    except ContentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    category = get_stored_category(ContentType.POST, post_id)
    return ScoreResponse(id=post_id, score=score, category=category.value if category else None)


@router.post("/{post_id}/sentiment", response_model=ScoreResponse)
async def recompute_post_sentiment(post_id: int):
    try:
        label = update_post_sentiment(post_id)
    except ContentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return ScoreResponse(id=post_id, score=label.html, category=label.category.value)
