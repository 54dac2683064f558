"""Static language filter for guild chat."""

from __future__ import annotations

FLAGGED_WORDS: frozenset[str] = frozenset(
    {
        "ㅅㅂ",
        "시발",
        "병신",
        "ㅂㅅ",
        "장애",
        "새끼",
    }
)


def contains_flagged_word(content: str) -> bool:
    """True when *content* contains any flagged word as a substring."""
    return any(word in content for word in FLAGGED_WORDS)


def language_reminder(mention: str) -> str:
    return f"{mention} let's keep our **language respectful**."
