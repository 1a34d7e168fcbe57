"""
Content store: posts, comments and their key-value metadata.

Thin data-access layer over execute_sql using named placeholders. Rows are
returned as plain dicts.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from content_sentiment.db import execute_sql
from content_sentiment.nlp.schemas import ContentType

logger = logging.getLogger(__name__)

# content type -> (content table, meta table, meta foreign key)
_TABLES = {
    ContentType.POST: ("posts", "post_meta", "post_id"),
    ContentType.COMMENT: ("comments", "comment_meta", "comment_id"),
}


class ContentNotFoundError(LookupError):
    """No post or comment exists with the requested id."""

    def __init__(self, content_type: ContentType, item_id: int):
        self.content_type = ContentType(content_type)
        self.item_id = item_id
        super().__init__(f"{self.content_type.value} {item_id} not found")


def _row_to_dict(row) -> Dict[str, Any]:
    return dict(row._mapping) if hasattr(row, "_mapping") else dict(row)


def _tables(content_type) -> tuple:
    return _TABLES[ContentType(content_type)]


# =============================================================================
# POSTS & COMMENTS
# =============================================================================


def insert_post(
    content: str,
    title: str = "",
    post_type: str = "post",
    status: str = "publish",
    parent_id: Optional[int] = None,
) -> int:
    """Insert a post (or page / revision) and return its id."""
    rows = execute_sql(
        """
        INSERT INTO posts (post_type, status, parent_id, title, content)
        VALUES (:post_type, :status, :parent_id, :title, :content)
        RETURNING id
        """,
        params={
            "post_type": post_type,
            "status": status,
            "parent_id": parent_id,
            "title": title or "",
            "content": content or "",
        },
        fetch_results=True,
    )
    post_id = int(rows[0][0])
    logger.debug(f"Inserted {post_type} {post_id}")
    return post_id


def insert_comment(post_id: int, content: str, author: str = "", approved: bool = True) -> int:
    """Insert a comment on an existing post and return its id."""
    get_post(post_id)
    rows = execute_sql(
        """
        INSERT INTO comments (post_id, author, content, approved)
        VALUES (:post_id, :author, :content, :approved)
        RETURNING id
        """,
        params={
            "post_id": post_id,
            "author": author or "",
            "content": content or "",
            "approved": 1 if approved else 0,
        },
        fetch_results=True,
    )
    comment_id = int(rows[0][0])
    logger.debug(f"Inserted comment {comment_id} on post {post_id}")
    return comment_id


def get_item(content_type, item_id: int) -> Dict[str, Any]:
    """Fetch a post or comment by id.

    Raises:
        ContentNotFoundError: If no row has that id
    """
    table, _, _ = _tables(content_type)
    rows = execute_sql(
        f"SELECT * FROM {table} WHERE id = :id",
        params={"id": item_id},
        fetch_results=True,
    )
    if not rows:
        raise ContentNotFoundError(content_type, item_id)
    return _row_to_dict(rows[0])


def get_post(post_id: int) -> Dict[str, Any]:
    return get_item(ContentType.POST, post_id)


def get_comment(comment_id: int) -> Dict[str, Any]:
    return get_item(ContentType.COMMENT, comment_id)


def list_items(content_type, offset: int = 0, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """List posts or comments of every type and status in id order.

    offset only applies when a limit is given.
    """
    table, _, _ = _tables(content_type)
    query = f"SELECT * FROM {table} ORDER BY id"
    params: Dict[str, Any] = {}
    if limit is not None:
        query += " LIMIT :limit OFFSET :offset"
        params = {"limit": limit, "offset": offset}
    rows = execute_sql(query, params=params, fetch_results=True)
    return [_row_to_dict(row) for row in rows or []]


def list_posts(offset: int = 0, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    return list_items(ContentType.POST, offset=offset, limit=limit)


def list_comments(offset: int = 0, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    return list_items(ContentType.COMMENT, offset=offset, limit=limit)


# =============================================================================
# METADATA
# =============================================================================


def get_meta(content_type, item_id: int, meta_key: str) -> Optional[str]:
    """Return a single metadata value, or None when the key is not set."""
    _, meta_table, fk = _tables(content_type)
    rows = execute_sql(
        f"SELECT meta_value FROM {meta_table} WHERE {fk} = :item_id AND meta_key = :meta_key",
        params={"item_id": item_id, "meta_key": meta_key},
        fetch_results=True,
    )
    return rows[0][0] if rows else None


def update_meta(content_type, item_id: int, meta_key: str, meta_value: str) -> None:
    """Insert or replace a metadata value."""
    _, meta_table, fk = _tables(content_type)
    execute_sql(
        f"""
        INSERT INTO {meta_table} ({fk}, meta_key, meta_value)
        VALUES (:item_id, :meta_key, :meta_value)
        ON CONFLICT ({fk}, meta_key) DO UPDATE SET meta_value = excluded.meta_value
        """,
        params={"item_id": item_id, "meta_key": meta_key, "meta_value": meta_value},
    )


def get_post_meta(post_id: int, meta_key: str) -> Optional[str]:
    return get_meta(ContentType.POST, post_id, meta_key)


def update_post_meta(post_id: int, meta_key: str, meta_value: str) -> None:
    update_meta(ContentType.POST, post_id, meta_key, meta_value)


def get_comment_meta(comment_id: int, meta_key: str) -> Optional[str]:
    return get_meta(ContentType.COMMENT, comment_id, meta_key)


def update_comment_meta(comment_id: int, meta_key: str, meta_value: str) -> None:
    update_meta(ContentType.COMMENT, comment_id, meta_key, meta_value)


def items_with_meta(content_type, meta_key: str, meta_value: str) -> List[Dict[str, Any]]:
    """List posts or comments whose metadata key equals the given value."""
    table, meta_table, fk = _tables(content_type)
    rows = execute_sql(
        f"""
        SELECT t.*
        FROM {table} t
        JOIN {meta_table} m ON m.{fk} = t.id
        WHERE m.meta_key = :meta_key AND m.meta_value = :meta_value
        ORDER BY t.id
        """,
        params={"meta_key": meta_key, "meta_value": meta_value},
        fetch_results=True,
    )
    return [_row_to_dict(row) for row in rows or []]


def delete_meta_keys(content_type, meta_keys: Iterable[str]) -> int:
    """Delete every metadata row carrying one of meta_keys. Returns rows removed."""
    _, meta_table, _ = _tables(content_type)
    keys = list(meta_keys)
    if not keys:
        return 0
    placeholders = ", ".join(f":key{i}" for i in range(len(keys)))
    deleted = execute_sql(
        f"DELETE FROM {meta_table} WHERE meta_key IN ({placeholders})",
        params={f"key{i}": key for i, key in enumerate(keys)},
    )
    return max(int(deleted or 0), 0)
