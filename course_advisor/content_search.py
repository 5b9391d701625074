"""
Keyword relevance search over lesson text.

Used to answer content questions ("what is RAG?") by pointing at the
lessons that talk about the topic.  Relevance combines the share of
query keywords found in a lesson with a small bonus per occurrence,
capped at 1.0; lessons at or below ``RELEVANCE_THRESHOLD`` are dropped.
"""

from __future__ import annotations

import re
from typing import List, Sequence

from loguru import logger

from .catalog_index import CatalogIndex
from .config import OCCURRENCE_WEIGHT, RELEVANCE_THRESHOLD
from .models import ContentMatch
from .normalize import extract_keywords, normalize_query


def calculate_relevance(keywords: Sequence[str], content: str) -> float:
    """Score ``content`` for ``keywords``; 0.0 when there are no keywords."""
    if not keywords:
        return 0.0
    content_lower = (content or "").lower()
    matches = 0
    score = 0.0
    for keyword in keywords:
        if keyword in content_lower:
            matches += 1
            occurrences = len(re.findall(re.escape(keyword), content_lower))
            score += occurrences * OCCURRENCE_WEIGHT
    return min(matches / len(keywords) + score * OCCURRENCE_WEIGHT, 1.0)


def search_content(index: CatalogIndex, query: str) -> List[ContentMatch]:
    """Lessons relevant to ``query``, most relevant first (catalog order on ties)."""
    keywords = extract_keywords(normalize_query(query))
    if not keywords:
        return []
    results: List[ContentMatch] = []
    for lesson in index.lessons:
        relevance = calculate_relevance(keywords, lesson.text)
        if relevance > RELEVANCE_THRESHOLD:
            results.append(
                ContentMatch(
                    course_id=lesson.course_id,
                    module_id=lesson.module_id,
                    lesson_id=lesson.lesson_id,
                    relevance=relevance,
                )
            )
    results.sort(key=lambda r: -r.relevance)
    logger.debug("Content search for {} matched {} lessons", keywords, len(results))
    return results
