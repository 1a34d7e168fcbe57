"""
Content Sentiment - Core Package
================================

Scores the sentiment of posts, pages and comments, stores the result as
content metadata and filters content lists by sentiment category.

Core Modules:
- config: Centralized configuration management
- db: SQLAlchemy engine, schema and execute_sql
- content_store: Posts, comments and their metadata
- sentiment_sync: Keeps sentiment metadata in step with content
- nlp: Shortcode cleaning, VADER classification, label formatting
"""

from content_sentiment.nlp import analyze

__version__ = "1.1.1"

__all__ = ["analyze", "__version__"]
