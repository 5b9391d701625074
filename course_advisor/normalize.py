"""
Cleaning for catalog and lesson text, and normalization for learner
queries.

Catalog fields and lesson bodies go through ``basic_clean``.  Queries go
through ``normalize_query`` before intent matching, and through
``extract_keywords`` for content search.
"""

from __future__ import annotations

import re
import unicodedata
from typing import List

from bs4 import BeautifulSoup

from .config import MAX_INPUT_CHARS, STOP_WORDS


# ---------------------------
# Lesson / catalog text
# ---------------------------

_WHITESPACE_RE = re.compile(r"\s+")
_SPACE_BEFORE_PUNCT_RE = re.compile(r"\s+([.,!?;:])")

# Lesson bodies may embed players or snippets; their text is never lesson prose.
_NON_PROSE_TAGS = ("script", "style", "iframe", "noscript")


def clamp_text_length(text: str, max_chars: int = MAX_INPUT_CHARS) -> str:
    return str(text)[:max_chars]


def strip_html(raw: str) -> str:
    """
    Reduce a lesson body to its visible prose.

    Plain-text and markdown bodies (no ``<``) pass through untouched.
    Markup is parsed with BeautifulSoup/lxml, embedded scripts, styles
    and iframes are dropped, and the remaining strings are joined with
    single spaces, without a space before punctuation.
    """
    if not raw or "<" not in raw:
        return raw or ""
    soup = BeautifulSoup(raw, "lxml")
    for tag in soup.find_all(_NON_PROSE_TAGS):
        tag.decompose()
    prose = " ".join(soup.stripped_strings)
    return _SPACE_BEFORE_PUNCT_RE.sub(r"\1", prose)


def normalize_unicode(text: str) -> str:
    return unicodedata.normalize("NFC", text or "")


def normalize_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text or "").strip()


def basic_clean(text: str) -> str:
    """Clamp, strip markup, NFC-normalize and collapse whitespace."""
    if text is None:
        return ""
    cleaned = strip_html(clamp_text_length(text))
    return normalize_whitespace(normalize_unicode(cleaned))


# ---------------------------
# Query handling
# ---------------------------

# Punctuation replaced by a space during query normalization.  Question
# marks and quotes are kept; the intent patterns work on word boundaries.
QUERY_PUNCT_RE = re.compile(r"[.,/#!$%^&*;:{}=\-_`~()]")


def normalize_query(query: str) -> str:
    """Lowercase, trim, turn punctuation into spaces and collapse whitespace."""
    if not query:
        return ""
    text = normalize_unicode(clamp_text_length(query)).lower().strip()
    text = QUERY_PUNCT_RE.sub(" ", text)
    return normalize_whitespace(text)


def extract_keywords(query: str) -> List[str]:
    """
    Split a normalized query on spaces and keep the words worth searching
    for: longer than two characters and not a Dutch/English stop word.
    """
    if not query:
        return []
    return [
        word.lower()
        for word in query.split(" ")
        if len(word) > 2 and word.lower() not in STOP_WORDS
    ]
