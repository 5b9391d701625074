"""
Load and normalise course catalogs handed over by the content platform.

The catalog itself is owned by the content team; this module only reads
the exported JSON, coerces each record into a :class:`~course_advisor.models.Course`,
cleans the free-text fields and refuses catalogs that would break the
engine's assumptions (duplicate ids, records that don't validate).  It
also holds the two field parsers the scoring code relies on: course
level labels and free-text durations.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set

from loguru import logger
from pydantic import ValidationError

from .config import CATALOG_PATH, DEFAULT_COURSE_HOURS, HOURS_PER_WEEK
from .models import Course, DifficultyLevel
from .normalize import basic_clean


class CatalogError(ValueError):
    """Raised when an exported catalog can't be turned into course records."""


# ---------------------------
# Field parsing helpers
# ---------------------------

# Course labels as the platform writes them (Dutch and English).
COURSE_LEVEL_LABELS: Dict[str, DifficultyLevel] = {
    "absolute beginner": DifficultyLevel.ABSOLUTE_BEGINNER,
    "beginner": DifficultyLevel.BEGINNER,
    "intermediate": DifficultyLevel.INTERMEDIATE,
    "gevorderd": DifficultyLevel.INTERMEDIATE,
    "advanced": DifficultyLevel.ADVANCED,
    "expert": DifficultyLevel.EXPERT,
}

# Learner self-assessment labels.
USER_LEVEL_LABELS: Dict[str, DifficultyLevel] = {
    "beginner": DifficultyLevel.BEGINNER,
    "intermediate": DifficultyLevel.INTERMEDIATE,
    "advanced": DifficultyLevel.ADVANCED,
    "expert": DifficultyLevel.EXPERT,
}

_HOURS_RE = re.compile(r"(\d+)\s*(?:hours?|uur|uren)", re.IGNORECASE)
_WEEKS_RE = re.compile(r"(\d+)\s*(?:weeks?|weken)", re.IGNORECASE)


def course_level(label: Optional[str]) -> DifficultyLevel:
    """Map a catalog level label to its ordinal; unknown labels are Intermediate."""
    if not label:
        return DifficultyLevel.INTERMEDIATE
    return COURSE_LEVEL_LABELS.get(label.strip().lower(), DifficultyLevel.INTERMEDIATE)


def user_level(label: Optional[str]) -> DifficultyLevel:
    """Map a learner level to its ordinal; missing or unknown means absolute beginner."""
    if not label:
        return DifficultyLevel.ABSOLUTE_BEGINNER
    return USER_LEVEL_LABELS.get(label.strip().lower(), DifficultyLevel.ABSOLUTE_BEGINNER)


def parse_duration_hours(value: Any) -> int:
    """
    Estimate course hours from a free-text duration.

    Rules:
    - "<N> hour(s)" / "<N> uur" / "<N> uren" -> N
    - "<N> week(s)" / "<N> weken" -> N * HOURS_PER_WEEK
    - anything else (including None) -> DEFAULT_COURSE_HOURS

    Only these two phrasings are understood; "2 dagen" or "90 minutes"
    silently fall back to the default.
    """
    if value is None:
        return DEFAULT_COURSE_HOURS
    text = str(value)
    m = _HOURS_RE.search(text)
    if m:
        return int(m.group(1))
    m = _WEEKS_RE.search(text)
    if m:
        return int(m.group(1)) * HOURS_PER_WEEK
    return DEFAULT_COURSE_HOURS


# ---------------------------
# Record cleaning
# ---------------------------

_TEXT_FIELDS = ("title", "description", "shortDescription", "short_description")


def _clean_record(raw: Dict[str, Any]) -> Dict[str, Any]:
    record = dict(raw)
    for key in _TEXT_FIELDS:
        if isinstance(record.get(key), str):
            record[key] = basic_clean(record[key])
    tags = record.get("tags") or []
    if isinstance(tags, str):
        tags = [t for t in re.split(r"[;,|]+", tags)]
    record["tags"] = [basic_clean(t) for t in tags if str(t).strip()]
    return record


def courses_from_records(records: Iterable[Dict[str, Any]]) -> List[Course]:
    """
    Validate raw course dicts into :class:`Course` objects, preserving
    input order.  Catalog order matters downstream: it is the tie-break
    for equal scores.
    """
    courses: List[Course] = []
    seen: Set[str] = set()
    for pos, raw in enumerate(records):
        if not isinstance(raw, dict):
            raise CatalogError(f"Catalog entry #{pos} is not an object")
        try:
            course = Course.model_validate(_clean_record(raw))
        except ValidationError as e:
            raise CatalogError(f"Catalog entry #{pos} ({raw.get('id')!r}) is invalid: {e}") from e
        if course.id in seen:
            raise CatalogError(f"Duplicate course id {course.id!r} in catalog")
        seen.add(course.id)
        if course.level.strip().lower() not in COURSE_LEVEL_LABELS:
            logger.warning("Course {} has unknown level {!r}; treating as intermediate", course.id, course.level)
        courses.append(course)
    return courses


def load_catalog(path: Optional[Path] = None) -> List[Course]:
    """Read a JSON catalog (a list of courses, or ``{"courses": [...]}``)."""
    path = Path(path) if path is not None else CATALOG_PATH
    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}")
    with path.open("r", encoding="utf-8") as fh:
        try:
            payload = json.load(fh)
        except json.JSONDecodeError as e:
            raise CatalogError(f"Catalog file {path} is not valid JSON: {e}") from e
    if isinstance(payload, dict):
        payload = payload.get("courses", [])
    if not isinstance(payload, list):
        raise CatalogError(f"Catalog file {path} must hold a list of courses")
    courses = courses_from_records(payload)
    n_lessons = sum(len(m.lessons) for c in courses for m in c.modules)
    logger.info("Loaded {} courses ({} lessons) from {}", len(courses), n_lessons, path)
    return courses


if __name__ == "__main__":
    for c in load_catalog():
        print(f"{c.id:32s} {course_level(c.level).name:18s} {parse_duration_hours(c.duration):3d}h  {c.title}")
