"""
Sentiment metadata sync for posts and comments.

Scores content bodies and keeps two metadata entries per item up to date:
the rendered score badge and the winning category. Covers the save hooks,
lazy scoring for list rows, forced recompute, batched bulk recompute,
category filtering and uninstall cleanup.
"""

import logging
from typing import Dict, List, Optional

from content_sentiment import content_store
from content_sentiment.config import settings
from content_sentiment.nlp.schemas import BatchProgress, Category, ContentType, ScoreLabel
from content_sentiment.nlp.sentiment import SentimentClassifier, analyze

logger = logging.getLogger(__name__)

POST_SCORE_KEY = "sentiment_post_score"
POST_CATEGORY_KEY = "sentiment_post_category"
COMMENT_SCORE_KEY = "sentiment_comment_score"
COMMENT_CATEGORY_KEY = "sentiment_comment_category"

# content type -> (score key, category key)
META_KEYS = {
    ContentType.POST: (POST_SCORE_KEY, POST_CATEGORY_KEY),
    ContentType.COMMENT: (COMMENT_SCORE_KEY, COMMENT_CATEGORY_KEY),
}

# Filter dropdown options, in display order
SENTIMENT_FILTER_OPTIONS = {
    Category.NEUTRAL.value: "Neutral",
    Category.POSITIVE.value: "Positive",
    Category.NEGATIVE.value: "Negative",
}

REVISION_POST_TYPE = "revision"


def _score_and_store(
    content_type: ContentType,
    item_id: int,
    content: Optional[str],
    classifier: Optional[SentimentClassifier] = None,
) -> ScoreLabel:
    result = analyze(content, classifier=classifier)
    score_key, category_key = META_KEYS[content_type]
    content_store.update_meta(content_type, item_id, score_key, result.label.html)
    content_store.update_meta(content_type, item_id, category_key, result.category.value)
    logger.debug(f"Stored sentiment for {content_type.value} {item_id}: {result.label.text}")
    return result.label


def update_sentiment(content_type, item_id: int, classifier: Optional[SentimentClassifier] = None) -> ScoreLabel:
    """Recompute and persist sentiment for a post or comment.

    Raises:
        ContentNotFoundError: If the item does not exist
        SentimentClassifierError: If scoring fails
    """
    content_type = ContentType(content_type)
    item = content_store.get_item(content_type, item_id)
    return _score_and_store(content_type, item_id, item.get("content"), classifier)


def update_post_sentiment(post_id: int, classifier: Optional[SentimentClassifier] = None) -> ScoreLabel:
    return update_sentiment(ContentType.POST, post_id, classifier)


def update_comment_sentiment(comment_id: int, classifier: Optional[SentimentClassifier] = None) -> ScoreLabel:
    return update_sentiment(ContentType.COMMENT, comment_id, classifier)


def ensure_score(content_type, item_id: int, classifier: Optional[SentimentClassifier] = None) -> str:
    """Return the stored score badge, scoring the item first if it has none."""
    content_type = ContentType(content_type)
    score_key, _ = META_KEYS[content_type]
    score = content_store.get_meta(content_type, item_id, score_key)
    if not score:
        score = update_sentiment(content_type, item_id, classifier).html
    return score


def ensure_post_score(post_id: int, classifier: Optional[SentimentClassifier] = None) -> str:
    return ensure_score(ContentType.POST, post_id, classifier)


def ensure_comment_score(comment_id: int, classifier: Optional[SentimentClassifier] = None) -> str:
    return ensure_score(ContentType.COMMENT, comment_id, classifier)


def on_post_saved(post_id: int, classifier: Optional[SentimentClassifier] = None) -> Optional[str]:
    """Score a newly created or edited post unless it is a revision.

    Returns the stored score badge, or None for revisions.
    """
    post = content_store.get_post(post_id)
    if post.get("post_type") == REVISION_POST_TYPE:
        logger.debug(f"Skipping sentiment for revision {post_id}")
        return None
    return ensure_post_score(post_id, classifier)


def on_comment_posted(comment_id: int, approved: bool = True, classifier: Optional[SentimentClassifier] = None) -> str:
    """Score a newly posted comment. Pending comments are scored too."""
    logger.debug(f"Comment {comment_id} posted (approved={approved})")
    return ensure_comment_score(comment_id, classifier)


def get_stored_category(content_type, item_id: int) -> Optional[Category]:
    content_type = ContentType(content_type)
    _, category_key = META_KEYS[content_type]
    value = content_store.get_meta(content_type, item_id, category_key)
    return Category(value) if value else None


# =============================================================================
# BULK UPDATE
# =============================================================================


def update_scores_batch(
    content_type,
    offset: int = 0,
    batch_size: Optional[int] = None,
    classifier: Optional[SentimentClassifier] = None,
) -> BatchProgress:
    """Recompute sentiment for one batch of posts or comments.

    Posts of every type and status are included, as are comments of every
    approval state.

    Returns:
        BatchProgress pointing at the next offset; completed is set once a
        batch comes back shorter than batch_size.

    Raises:
        ValueError: If content_type is unknown, batch_size is below 1 or
            offset is negative
    """
    content_type = ContentType(content_type)
    if batch_size is None:
        batch_size = settings().SENTIMENT_BATCH_SIZE
    if batch_size < 1:
        raise ValueError(f"batch_size must be a positive integer, got {batch_size}")
    if offset < 0:
        raise ValueError(f"offset must not be negative, got {offset}")
    items = content_store.list_items(content_type, offset=offset, limit=batch_size)

    for item in items:
        _score_and_store(content_type, item["id"], item.get("content"), classifier)

    logger.info(f"Updated sentiment for {len(items)} {content_type.value}s at offset {offset}")
    return BatchProgress(
        type=content_type,
        offset=offset + batch_size,
        completed=len(items) < batch_size,
    )


def update_all_scores(
    batch_size: Optional[int] = None,
    content_types=(ContentType.POST, ContentType.COMMENT),
    classifier: Optional[SentimentClassifier] = None,
) -> Dict[str, int]:
    """Run batches over posts, then comments, until each reports completed.

    Returns:
        Mapping of content type to the offset reached (items visited, rounded
        up to whole batches).
    """
    processed = {}
    for content_type in content_types:
        content_type = ContentType(content_type)
        offset = 0
        while True:
            progress = update_scores_batch(content_type, offset, batch_size, classifier)
            offset = progress.offset
            logger.info(f"Updating {content_type.value}s... processed {offset} so far")
            if progress.completed:
                break
        processed[content_type.value] = offset
    logger.info("✅ All sentiment scores updated")
    return processed


# =============================================================================
# FILTERING & CLEANUP
# =============================================================================


def filter_items(content_type, category: Optional[str] = None) -> List[dict]:
    """List items whose stored category matches; no category means no filter.

    Raises:
        ValueError: If category is not one of the filterable categories
    """
    content_type = ContentType(content_type)
    if not category:
        return content_store.list_items(content_type)
    if category not in SENTIMENT_FILTER_OPTIONS:
        raise ValueError(
            f"Unknown sentiment category '{category}'. "
            f"Valid categories: {list(SENTIMENT_FILTER_OPTIONS.keys())}"
        )
    _, category_key = META_KEYS[content_type]
    return content_store.items_with_meta(content_type, category_key, category)


def filter_posts(category: Optional[str] = None) -> List[dict]:
    return filter_items(ContentType.POST, category)


def filter_comments(category: Optional[str] = None) -> List[dict]:
    return filter_items(ContentType.COMMENT, category)


def purge_sentiment_meta() -> int:
    """Delete every sentiment metadata entry. Returns the number of rows removed."""
    removed = 0
    for content_type, keys in META_KEYS.items():
        removed += content_store.delete_meta_keys(content_type, keys)
    logger.info(f"Removed {removed} sentiment metadata entries")
    return removed
