"""
Tests for app/routes/sentiment.py.

Sync functions are mocked; no database or lexicon is touched.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from content_sentiment.nlp.schemas import AnalysisResult, BatchProgress, ContentType
from content_sentiment.nlp.scoring import format_score
from content_sentiment.nlp.sentiment import SentimentClassifierError


@pytest.fixture
def api():
    """Test client without lifespan (no database)."""
    from app.main import app

    return TestClient(app)


class TestAnalyze:
    @patch("app.routes.sentiment.analyze")
    def test_returns_label_and_distribution(self, mock_analyze, api):
        dist = {"pos": 0.8, "neg": 0.1, "neu": 0.1}
        mock_analyze.return_value = AnalysisResult(distribution=dist, label=format_score(dist))

        resp = api.post("/sentiment/analyze", json={"text": "I love [b]this[/b] product"})

        assert resp.status_code == 200
        data = resp.json()
        assert data["category"] == "pos"
        assert data["label"] == "POSITIVE (80%)"
        assert data["percent"] == 80.0
        assert data["color"] == "green"
        assert data["distribution"] == {"pos": 0.8, "neg": 0.1, "neu": 0.1}
        assert data["html"].startswith("<div style='background-color:green;")
        mock_analyze.assert_called_once_with("I love [b]this[/b] product")

    @patch("app.routes.sentiment.analyze")
    def test_classifier_failure_is_500(self, mock_analyze, api):
        mock_analyze.side_effect = SentimentClassifierError("lexicon unavailable")
        resp = api.post("/sentiment/analyze", json={"text": "anything"})
        assert resp.status_code == 500
        assert "lexicon unavailable" in resp.json()["detail"]


class TestFilters:
    def test_lists_three_categories_in_order(self, api):
        resp = api.get("/sentiment/filters")
        assert resp.status_code == 200
        assert resp.json() == [
            {"value": "neu", "label": "Neutral"},
            {"value": "pos", "label": "Positive"},
            {"value": "neg", "label": "Negative"},
        ]


class TestUpdateScores:
    @patch("app.routes.sentiment.update_scores_batch")
    def test_defaults_to_posts_at_offset_zero(self, mock_batch, api):
        mock_batch.return_value = BatchProgress(type=ContentType.POST, offset=10, completed=False)

        resp = api.post("/sentiment/update-scores", json={})

        assert resp.status_code == 200
        assert resp.json() == {"type": "post", "offset": 10, "completed": False}
        mock_batch.assert_called_once_with(ContentType.POST, 0, None)

    @patch("app.routes.sentiment.update_scores_batch")
    def test_comment_batch(self, mock_batch, api):
        mock_batch.return_value = BatchProgress(type=ContentType.COMMENT, offset=30, completed=True)

        resp = api.post("/sentiment/update-scores", json={"type": "comment", "offset": 20, "batchSize": 10})

        assert resp.json()["completed"] is True
        mock_batch.assert_called_once_with(ContentType.COMMENT, 20, 10)

    def test_invalid_type_rejected(self, api):
        resp = api.post("/sentiment/update-scores", json={"type": "attachment"})
        assert resp.status_code == 422

    def test_negative_offset_rejected(self, api):
        resp = api.post("/sentiment/update-scores", json={"offset": -1})
        assert resp.status_code == 422

    @patch("app.routes.sentiment.update_scores_batch")
    def test_failure_is_500(self, mock_batch, api):
        mock_batch.side_effect = RuntimeError("DB Error")
        resp = api.post("/sentiment/update-scores", json={"type": "post"})
        assert resp.status_code == 500
        assert resp.json()["detail"] == "DB Error"


class TestPurge:
    @patch("app.routes.sentiment.purge_sentiment_meta", return_value=8)
    def test_returns_removed_count(self, mock_purge, api):
        resp = api.delete("/sentiment/meta")
        assert resp.status_code == 200
        assert resp.json() == {"removed": 8}
        mock_purge.assert_called_once_with()
