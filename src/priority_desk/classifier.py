"""Keyword-based urgency/importance classification of tasks."""

from .models import Quadrant

URGENT_KEYWORDS = (
    "urgent",
    "asap",
    "emergency",
    "immediate",
    "deadline",
    "today",
    "now",
    "critical",
    "crisis",
)

IMPORTANT_KEYWORDS = (
    "important",
    "strategic",
    "goal",
    "priority",
    "crucial",
    "essential",
    "significant",
    "key",
    "vital",
    "plan",
    "growth",
)


def matched_keywords(text: str) -> tuple[list[str], list[str]]:
    """Return the (urgent, important) keywords contained in text.

    Matching is plain substring containment on the lower-cased text, so
    "know" matches "now" and "keyboard" matches "key".
    """
    lower = text.lower()
    urgent = [k for k in URGENT_KEYWORDS if k in lower]
    important = [k for k in IMPORTANT_KEYWORDS if k in lower]
    return urgent, important


def classify_task(text: str) -> Quadrant:
    """Map free text to exactly one quadrant."""
    urgent, important = matched_keywords(text)
    has_urgent = bool(urgent)
    has_important = bool(important)

    if has_urgent and has_important:
        return "urgent-important"
    if has_important:
        return "not-urgent-important"
    if has_urgent:
        return "urgent-not-important"
    return "not-urgent-not-important"
