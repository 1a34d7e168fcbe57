"""
SQLAlchemy engine for the content store.
Handles connection pooling, health checks, schema creation and retry on connection errors.
"""
import logging
import time
from functools import wraps

from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import DBAPIError, DisconnectionError

from content_sentiment.config import get_database_url, settings

logger = logging.getLogger(__name__)

# Global engine instance
_sync_engine = None


def get_sync_engine():
    """
    Get or create the synchronous SQLAlchemy engine with connection pooling.
    """
    global _sync_engine

    if _sync_engine is None:
        try:
            database_url = get_database_url()
            logger.info("Creating synchronous SQLAlchemy engine for database connection")

            is_sqlite = database_url.startswith("sqlite")

            if is_sqlite:
                _sync_engine = create_engine(
                    database_url,
                    echo=settings().DEBUG,
                    future=True,
                    connect_args={
                        "check_same_thread": False,  # Allow SQLite in threads
                        "timeout": 20
                    }
                )
            else:
                _sync_engine = create_engine(
                    database_url,
                    pool_size=5,
                    max_overflow=2,
                    pool_pre_ping=True,             # Validate connections before use
                    pool_recycle=3600,
                    pool_timeout=30,
                    echo=settings().DEBUG,
                    future=True,
                    connect_args={"connect_timeout": 10}
                )

            @event.listens_for(_sync_engine, "engine_connect")
            def receive_engine_connect(conn):
                logger.debug("New database connection established")

            logger.info("✅ Synchronous SQLAlchemy engine created successfully")

        except Exception as e:
            logger.error(f"Failed to create synchronous SQLAlchemy engine: {e}")
            raise

    return _sync_engine


def is_sqlite() -> bool:
    return get_sync_engine().dialect.name == "sqlite"


def healthcheck():
    """
    Perform a health check on the database connection.
    Raises exception if connection fails.
    """
    try:
        engine = get_sync_engine()
        with engine.connect() as conn:
            row = conn.execute(text("SELECT 1 as health_check")).fetchone()
            if row and row[0] == 1:
                logger.debug("✅ Database health check passed")
                return True
            raise RuntimeError("Health check query returned unexpected result")
    except Exception as e:
        logger.error(f"❌ Database health check failed: {e}")
        raise


def close_engine():
    """
    Dispose the engine and all pooled connections.
    Should be called on application shutdown.
    """
    global _sync_engine

    if _sync_engine:
        try:
            _sync_engine.dispose()
            logger.info("Database engine closed successfully")
        finally:
            _sync_engine = None


def retry_on_connection_error(max_retries=3, delay=1):
    """
    Decorator to retry database operations on connection errors.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            for attempt in range(max_retries):
                try:
                    return func(*args, **kwargs)
                except (DisconnectionError, DBAPIError) as e:
                    # Statement errors (missing table, constraint violation) are not retried
                    if isinstance(e, DBAPIError) and not e.connection_invalidated:
                        raise
                    if attempt < max_retries - 1:
                        logger.warning(f"Database operation failed (attempt {attempt + 1}/{max_retries}): {e}")
                        time.sleep(delay * (2 ** attempt))  # Exponential backoff
                        # Force reconnection on the next attempt
                        close_engine()
                    else:
                        logger.error(f"Database operation failed after {max_retries} attempts: {e}")
                        raise
        return wrapper
    return decorator


@retry_on_connection_error(max_retries=3, delay=1)
def execute_sql(query: str, params=None, fetch_results=False):
    """
    Execute a SQL statement inside a transaction.

    Args:
        query: SQL string with named (:name) placeholders
        params: Query parameters (optional)
        fetch_results: Return fetched rows instead of the affected row count

    Returns:
        List of rows when fetch_results is True, otherwise the affected row count
    """
    engine = get_sync_engine()
    with engine.begin() as conn:
        result = conn.execute(text(query), params or {})
        if fetch_results:
            return result.fetchall()
        return result.rowcount


def _schema_statements(sqlite: bool):
    pk = "INTEGER PRIMARY KEY AUTOINCREMENT" if sqlite else "SERIAL PRIMARY KEY"
    return [
        f"""
        CREATE TABLE IF NOT EXISTS posts (
            id {pk},
            post_type TEXT NOT NULL DEFAULT 'post',
            status TEXT NOT NULL DEFAULT 'publish',
            parent_id INTEGER,
            title TEXT NOT NULL DEFAULT '',
            content TEXT NOT NULL DEFAULT '',
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
        """,
        f"""
        CREATE TABLE IF NOT EXISTS comments (
            id {pk},
            post_id INTEGER NOT NULL REFERENCES posts(id),
            author TEXT NOT NULL DEFAULT '',
            content TEXT NOT NULL DEFAULT '',
            approved INTEGER NOT NULL DEFAULT 1,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
        """,
        f"""
        CREATE TABLE IF NOT EXISTS post_meta (
            id {pk},
            post_id INTEGER NOT NULL REFERENCES posts(id),
            meta_key TEXT NOT NULL,
            meta_value TEXT,
            UNIQUE (post_id, meta_key)
        )
        """,
        f"""
        CREATE TABLE IF NOT EXISTS comment_meta (
            id {pk},
            comment_id INTEGER NOT NULL REFERENCES comments(id),
            meta_key TEXT NOT NULL,
            meta_value TEXT,
            UNIQUE (comment_id, meta_key)
        )
        """,
        "CREATE INDEX IF NOT EXISTS idx_post_meta_key_value ON post_meta (meta_key, meta_value)",
        "CREATE INDEX IF NOT EXISTS idx_comment_meta_key_value ON comment_meta (meta_key, meta_value)",
    ]


def initialize_database():
    """Create the posts, comments and metadata tables if they do not exist."""
    statements = _schema_statements(is_sqlite())
    for statement in statements:
        execute_sql(statement)
    logger.info(f"✅ Database schema ready ({len(statements)} statements applied)")
