"""
Shortcode stripping for post and comment bodies.

Content bodies embed bracket markup such as ``[gallery ids="1,2"]`` or
``[b]bold[/b]``. Everything between brackets, nested spans included, is
dropped before the text reaches the classifier.
"""

from typing import Optional


def clean_text(text: Optional[str]) -> str:
    """Remove bracket spans from text and trim surrounding whitespace.

    Args:
        text: Raw content body

    Returns:
        Text containing only the characters read at bracket depth zero.

    Notes:
        The depth counter is not clamped, so an unmatched ``]`` suppresses
        output until a later ``[`` brings the depth back to zero:
        ``clean_text("a]b[c") == "ac"``.
    """
    if not text:
        return ""

    depth = 0
    kept = []
    for char in text:
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        elif depth == 0:
            kept.append(char)

    return "".join(kept).strip()
