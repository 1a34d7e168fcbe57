"""
Score selection and label formatting.

Picks the winning category from a score distribution and renders the
colour-coded confidence label. Pure functions, safe to call from any thread.
"""

from typing import Dict, Mapping, Tuple

from content_sentiment.nlp.schemas import CATEGORY_ORDER, Category, ScoreLabel

# category -> (display name, background colour)
CATEGORY_DISPLAY: Dict[Category, Tuple[str, str]] = {
    Category.NEGATIVE: ("NEGATIVE", "red"),
    Category.POSITIVE: ("POSITIVE", "green"),
    Category.NEUTRAL: ("NEUTRAL", "grey"),
    Category.UNKNOWN: ("UNKNOWN", "grey"),
}


def _plain_keys(dist: Mapping) -> Dict[str, float]:
    return {str(getattr(key, "value", key)): float(value) for key, value in dist.items()}


def _select(dist: Mapping) -> Tuple[Category, float]:
    values = _plain_keys(dist or {})
    if not values:
        return Category.UNKNOWN, 0.0

    max_value = max(values.values())
    if max_value <= 0:
        return Category.UNKNOWN, 0.0

    for category in CATEGORY_ORDER:
        if values.get(category.value) == max_value:
            return category, max_value

    # Winning key is not one of neg/pos/neu
    return Category.UNKNOWN, max_value


def select_category(dist: Mapping) -> Category:
    """Return the category with the highest score.

    Ties resolve in the order neg, pos, neu regardless of the mapping's own
    iteration order. An empty or all-zero distribution yields UNKNOWN.
    """
    return _select(dist)[0]


def format_score(dist: Mapping) -> ScoreLabel:
    """Select the winning category and build its display label.

    Args:
        dist: Mapping of category (enum or its short key) to weight in [0, 1]

    Returns:
        ScoreLabel with the percent rounded to two decimal places. Never raises
        for out-of-domain keys; they render as UNKNOWN.
    """
    category, max_value = _select(dist)
    name, color = CATEGORY_DISPLAY[category]
    return ScoreLabel(
        category=category,
        name=name,
        color=color,
        percent=round(max_value * 100, 2),
    )


def normalize_distribution(dist: Mapping) -> Dict[Category, float]:
    """Keep only the neg/pos/neu weights of a classifier's output.

    Keys may be Category members or their short values. A distribution with
    no positive weight comes back empty.
    """
    values = _plain_keys(dist or {})
    normalized = {
        category: values[category.value] for category in CATEGORY_ORDER if category.value in values
    }
    if not any(value > 0 for value in normalized.values()):
        return {}
    return normalized
