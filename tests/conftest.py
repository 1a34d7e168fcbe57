"""
Pytest configuration and shared fixtures for the test suite.

Provides:
- A throwaway SQLite database per test
- Stub classifiers with predictable distributions
- A FastAPI test client over the temporary database
"""

from typing import Dict, List, Optional
from unittest.mock import patch

import pytest

from content_sentiment.nlp.schemas import Category


# =============================================================================
# PYTEST MARKERS CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "vader: marks tests that run the real VADER lexicon (deselect with '-m \"not vader\"')",
    )


# =============================================================================
# CLASSIFIER STUBS
# =============================================================================


class FixedClassifier:
    """Returns the same distribution for every text and records the inputs."""

    def __init__(self, distribution: Optional[Dict] = None):
        self.distribution = distribution if distribution is not None else {}
        self.calls: List[str] = []

    def score(self, text):
        self.calls.append(text)
        return dict(self.distribution)

    def categorise(self, text):
        from content_sentiment.nlp.scoring import select_category

        return select_category(self.score(text))


class KeywordClassifier(FixedClassifier):
    """'love' scores positive, 'hate' negative, other text neutral, empty text unscored."""

    def score(self, text):
        self.calls.append(text)
        if not text:
            return {}
        lowered = text.lower()
        if "love" in lowered:
            return {Category.POSITIVE: 0.75, Category.NEUTRAL: 0.25, Category.NEGATIVE: 0.0}
        if "hate" in lowered:
            return {Category.NEGATIVE: 0.6, Category.NEUTRAL: 0.4, Category.POSITIVE: 0.0}
        return {Category.NEUTRAL: 1.0, Category.POSITIVE: 0.0, Category.NEGATIVE: 0.0}


@pytest.fixture
def fixed_classifier():
    """Factory fixture for FixedClassifier."""
    return FixedClassifier


@pytest.fixture
def keyword_classifier():
    return KeywordClassifier()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture
def sqlite_db(tmp_path, monkeypatch):
    """
    Point the engine at a fresh SQLite file and create the schema.

    Usage:
        def test_store(sqlite_db):
            post_id = insert_post("Hello")
    """
    from content_sentiment.config import settings
    from content_sentiment.db import close_engine, initialize_database

    db_file = tmp_path / "content_sentiment.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    settings.cache_clear()
    close_engine()

    initialize_database()
    yield db_file

    close_engine()
    settings.cache_clear()


# =============================================================================
# API FIXTURES
# =============================================================================


@pytest.fixture
def client(sqlite_db, keyword_classifier):
    """Test client with a fresh database and the keyword classifier."""
    from fastapi.testclient import TestClient

    with patch(
        "content_sentiment.nlp.sentiment.get_default_classifier",
        return_value=keyword_classifier,
    ):
        from app.main import app

        with TestClient(app) as c:
            yield c
