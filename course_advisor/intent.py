"""
Rule-based intent classification and language detection.

A query is classified by walking an ordered table of (pattern, intent)
pairs and returning the first intent whose pattern matches.  The table
order is the tie-break policy: a query that triggers both the course
selection and the learning path words is a course selection query.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import List, Sequence, Tuple

from loguru import logger

from .config import (
    COMPARISON_TRIGGERS,
    CONTENT_QUESTION_TRIGGERS,
    COURSE_SELECTION_TRIGGERS,
    DUTCH_KEYWORD_THRESHOLD,
    DUTCH_KEYWORDS,
    LEARNING_PATH_TRIGGERS,
    PRICING_TRIGGERS,
    SKILL_MATCHING_TRIGGERS,
    TECHNICAL_HELP_TRIGGERS,
)
from .normalize import normalize_query


class Intent(str, Enum):
    """Every purpose a learner query can be routed to."""
    COURSE_SELECTION = "course_selection"
    LEARNING_PATH = "learning_path"
    CONTENT_QUESTION = "content_question"
    SKILL_MATCHING = "skill_matching"
    PRICING = "pricing"
    COURSE_COMPARISON = "course_comparison"
    TECHNICAL_HELP = "technical_help"
    GENERAL_INFO = "general_info"


def _trigger_pattern(words: Sequence[str]) -> re.Pattern:
    alternatives = "|".join(re.escape(w) for w in words)
    return re.compile(r"\b(?:" + alternatives + r")\b", re.IGNORECASE)


# Evaluated top to bottom; first hit wins.
INTENT_PATTERNS: Tuple[Tuple[re.Pattern, Intent], ...] = (
    (_trigger_pattern(COURSE_SELECTION_TRIGGERS), Intent.COURSE_SELECTION),
    (_trigger_pattern(LEARNING_PATH_TRIGGERS), Intent.LEARNING_PATH),
    (_trigger_pattern(CONTENT_QUESTION_TRIGGERS), Intent.CONTENT_QUESTION),
    (_trigger_pattern(SKILL_MATCHING_TRIGGERS), Intent.SKILL_MATCHING),
    (_trigger_pattern(PRICING_TRIGGERS), Intent.PRICING),
    (_trigger_pattern(COMPARISON_TRIGGERS), Intent.COURSE_COMPARISON),
    (_trigger_pattern(TECHNICAL_HELP_TRIGGERS), Intent.TECHNICAL_HELP),
)


def classify_intent(normalized_query: str) -> Intent:
    """Return the first intent whose trigger pattern matches, else GENERAL_INFO."""
    text = normalized_query or ""
    for pattern, intent in INTENT_PATTERNS:
        if pattern.search(text):
            logger.debug("Classified query as {} (pattern {})", intent.value, pattern.pattern[:40])
            return intent
    return Intent.GENERAL_INFO


def matching_intents(normalized_query: str) -> List[Intent]:
    """All intents whose pattern matches, in priority order.  Debug helper."""
    text = normalized_query or ""
    return [intent for pattern, intent in INTENT_PATTERNS if pattern.search(text)]


def count_dutch_keywords(query: str) -> int:
    q = (query or "").lower()
    return sum(1 for word in DUTCH_KEYWORDS if word in q)


def detect_language(query: str) -> str:
    """
    Guess the query language from Dutch keyword hits.

    This is a heuristic, not a classifier: two or more keywords from
    ``DUTCH_KEYWORDS`` (substring hits on the lowercased raw query) mean
    Dutch, anything else is English.  Short Dutch queries with a single
    keyword are reported as English.
    """
    return "nl" if count_dutch_keywords(query) >= DUTCH_KEYWORD_THRESHOLD else "en"


if __name__ == "__main__":
    q = input("Enter query: ")
    norm = normalize_query(q)
    print("NORMALIZED:", norm)
    print("LANGUAGE:", detect_language(q))
    print("INTENT:", classify_intent(norm).value)
    print("ALL MATCHES:", [i.value for i in matching_intents(norm)])
