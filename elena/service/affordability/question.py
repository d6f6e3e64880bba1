"""
Hypothetical credit score detection in free-text questions.

A user can ask "what would my payment be if my credit score went up to 740"
and have 740 modeled without it ever becoming a stored fact. This is a
heuristic: phrasing such as "if I pay to 740 square feet" also matches.
"""

import re
from typing import Optional

# What-if / change phrasing that makes a number in the question a hypothetical.
HYPOTHETICAL_PATTERN = re.compile(
    r"\bif\b|\bwent\s*up\b|\braise\b|\bbump\b|\bincrease\b|\bimprove\b"
    r"|\bup\s*to\b|\bto\s*\d{3}\b",
    re.ASCII,
)

# A 3-digit number shortly after "credit score" / "fico".
SCORE_NEAR_KEYWORD_PATTERN = re.compile(
    r"(?:credit\s*score|fico)\D{0,12}(\d{3})\b",
    re.ASCII,
)

# A 3-digit number shortly after "to".
SCORE_AFTER_TO_PATTERN = re.compile(r"\bto\D{0,4}(\d{3})\b", re.ASCII)


def parse_hypothetical_credit_score(
    question: Optional[str],
    min_score: int = 300,
    max_score: int = 850,
) -> Optional[int]:
    """
    Extract a what-if credit score from a question.

    The question must contain hypothetical phrasing ("if", "went up",
    "raise", "bump", "increase", "improve", "up to", or "to ###"), and a
    3-digit number near "credit score"/"fico" or right after "to".

    Args:
        question: Free-text user question
        min_score: Lowest score accepted (inclusive)
        max_score: Highest score accepted (inclusive)

    Returns:
        The score, or None if the question doesn't state a usable one
    """
    text = (question or "").strip().lower()
    if not text:
        return None

    if not HYPOTHETICAL_PATTERN.search(text):
        return None

    match = SCORE_NEAR_KEYWORD_PATTERN.search(text) or SCORE_AFTER_TO_PATTERN.search(text)
    if match is None:
        return None

    score = int(match.group(1))
    if score < min_score or score > max_score:
        return None

    return score
