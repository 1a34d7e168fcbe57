"""
NLP modules for content sentiment scoring.

PIPELINE:
- Shortcode stripping (cleaner.py)
- VADER lexicon classifier (sentiment.py)
- Category selection and label formatting (scoring.py)
- Pydantic schemas for results (schemas.py)
"""

from content_sentiment.nlp.cleaner import clean_text
from content_sentiment.nlp.schemas import (
    CATEGORY_ORDER,
    AnalysisResult,
    BatchProgress,
    Category,
    ContentType,
    ScoreDistribution,
    ScoreLabel,
)
from content_sentiment.nlp.scoring import CATEGORY_DISPLAY, format_score, normalize_distribution, select_category
from content_sentiment.nlp.sentiment import (
    SentimentClassifier,
    SentimentClassifierError,
    VaderClassifier,
    analyze,
    get_default_classifier,
)

__all__ = [
    # Cleaner
    "clean_text",
    # Schemas
    "CATEGORY_ORDER",
    "AnalysisResult",
    "BatchProgress",
    "Category",
    "ContentType",
    "ScoreDistribution",
    "ScoreLabel",
    # Scoring
    "CATEGORY_DISPLAY",
    "format_score",
    "normalize_distribution",
    "select_category",
    # Classifier
    "SentimentClassifier",
    "SentimentClassifierError",
    "VaderClassifier",
    "analyze",
    "get_default_classifier",
]
