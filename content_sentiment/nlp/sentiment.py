"""
Sentiment scoring — thin wrapper around vaderSentiment.

VADER is rule-based and lexicon driven, requires no corpus downloads, and
reports the share of negative, neutral and positive weight in a text. Those
three proportions form the score distribution; the compound score is not used.
"""

import logging
from typing import Optional, Protocol

from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

from content_sentiment.nlp.cleaner import clean_text
from content_sentiment.nlp.schemas import AnalysisResult, Category, ScoreDistribution
from content_sentiment.nlp.scoring import format_score, normalize_distribution, select_category

logger = logging.getLogger(__name__)


class SentimentClassifierError(RuntimeError):
    """The underlying sentiment library could not score the text."""


class SentimentClassifier(Protocol):
    """Anything that can turn cleaned text into a score distribution."""

    def score(self, text: str) -> ScoreDistribution:
        ...

    def categorise(self, text: str) -> Category:
        ...


class VaderClassifier:
    """SentimentClassifier backed by the VADER lexicon."""

    def __init__(self, analyzer: Optional[SentimentIntensityAnalyzer] = None):
        self._analyzer = analyzer

    def _get_analyzer(self) -> SentimentIntensityAnalyzer:
        if self._analyzer is None:
            try:
                self._analyzer = SentimentIntensityAnalyzer()
            except Exception as e:
                raise SentimentClassifierError(f"Failed to load VADER lexicon: {e}") from e
        return self._analyzer

    def score(self, text: str) -> ScoreDistribution:
        """Return the neg/neu/pos proportions for text.

        Empty input, or text without any lexicon terms scoring above zero,
        yields an empty distribution.
        """
        if not text or not isinstance(text, str):
            return {}

        analyzer = self._get_analyzer()
        try:
            scores = analyzer.polarity_scores(text)
        except Exception as e:
            raise SentimentClassifierError(f"VADER failed to score text: {e}") from e

        distribution = {
            Category.NEGATIVE: float(scores.get("neg", 0.0)),
            Category.NEUTRAL: float(scores.get("neu", 0.0)),
            Category.POSITIVE: float(scores.get("pos", 0.0)),
        }
        if not any(distribution.values()):
            return {}
        return distribution

    def categorise(self, text: str) -> Category:
        return select_category(self.score(text))


_default_classifier: Optional[VaderClassifier] = None


def get_default_classifier() -> VaderClassifier:
    """Return the process-wide VADER classifier, creating it on first use."""
    global _default_classifier
    if _default_classifier is None:
        _default_classifier = VaderClassifier()
    return _default_classifier


def analyze(raw_text: Optional[str], classifier: Optional[SentimentClassifier] = None) -> AnalysisResult:
    """Clean, score and label a content body.

    Args:
        raw_text: Post or comment body, possibly containing shortcodes
        classifier: Scorer to use; defaults to the shared VADER classifier

    Returns:
        AnalysisResult with the neg/pos/neu distribution (empty when nothing
        scored above zero) and the label formatted from the raw scores.

    Raises:
        SentimentClassifierError: If the classifier cannot score the text
    """
    classifier = classifier or get_default_classifier()
    cleaned = clean_text(raw_text)
    scores = classifier.score(cleaned) or {}
    label = format_score(scores)
    logger.debug(f"Scored {len(cleaned)} chars as {label.text}")
    return AnalysisResult(distribution=normalize_distribution(scores), label=label)
