"""
Pydantic schemas for sentiment scoring results.

Defines the category taxonomy, the score distribution produced by a
classifier and the rendered label persisted against posts and comments.
"""

from enum import Enum
from typing import Dict

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS - Type-safe value constraints
# =============================================================================


class Category(str, Enum):
    """
    Sentiment category.

    Values match the short keys stored in content metadata. UNKNOWN is the
    fallback when nothing could be classified and never appears inside a
    score distribution.
    """

    NEGATIVE = "neg"
    POSITIVE = "pos"
    NEUTRAL = "neu"
    UNKNOWN = "unknown"


class ContentType(str, Enum):
    """Kinds of content that carry sentiment metadata."""

    POST = "post"
    COMMENT = "comment"


# Tie-break order when two categories share the maximum score
CATEGORY_ORDER = (Category.NEGATIVE, Category.POSITIVE, Category.NEUTRAL)

ScoreDistribution = Dict[Category, float]


# =============================================================================
# MODELS
# =============================================================================


class ScoreLabel(BaseModel):
    """Winning category with its display name, colour and confidence."""

    category: Category
    name: str
    color: str
    percent: float = 0.0

    @property
    def percent_text(self) -> str:
        # 80.0 -> "80", 33.33 -> "33.33"
        return f"{self.percent:g}"

    @property
    def text(self) -> str:
        return f"{self.name} ({self.percent_text}%)"

    @property
    def html(self) -> str:
        """Badge markup stored as the score metadata value."""
        return (
            f"<div style='background-color:{self.color};color:white;text-align: center;'>"
            f"{self.text}</div>"
        )


class AnalysisResult(BaseModel):
    """Output of analyze(): the neg/pos/neu distribution and the selected label."""

    distribution: ScoreDistribution = Field(default_factory=dict)
    label: ScoreLabel

    @property
    def category(self) -> Category:
        return self.label.category


class BatchProgress(BaseModel):
    """Progress report after one bulk-update batch."""

    type: ContentType
    offset: int
    completed: bool
