"""
Read-only, pre-processed view over the course catalog.

Everything the scorer and path builder need per course (skills,
taxonomy categories, level ordinal, estimated hours) is computed once
when the index is built, together with the cleaned, lowercased text of
every lesson for content search.  After construction nothing here is written,
so one index can serve any number of concurrent queries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from loguru import logger

from .catalog_build import course_level, parse_duration_hours
from .models import Course, DifficultyLevel
from .normalize import basic_clean
from .skills import Taxonomy, course_skills, identify_categories


@dataclass(frozen=True)
class IndexedCourse:
    course: Course
    position: int
    skills: FrozenSet[str]
    categories: Tuple[str, ...]
    level: DifficultyLevel
    hours: int

    @property
    def id(self) -> str:
        return self.course.id


@dataclass(frozen=True)
class LessonEntry:
    course_id: str
    module_id: str
    lesson_id: str
    text: str


def _lesson_entries(course: Course) -> List[LessonEntry]:
    out: List[LessonEntry] = []
    for module in course.modules:
        for lesson in module.lessons:
            text = f"{lesson.title} {basic_clean(lesson.content)} {module.title} {course.title}"
            out.append(LessonEntry(course.id, module.id, lesson.id, text.lower()))
    return out


class CatalogIndex:
    def __init__(self, courses: Sequence[Course], taxonomy: Taxonomy) -> None:
        self._taxonomy = taxonomy
        entries: List[IndexedCourse] = []
        lessons: List[LessonEntry] = []
        by_id: Dict[str, IndexedCourse] = {}
        for pos, course in enumerate(courses):
            skills = course_skills(course, taxonomy)
            entry = IndexedCourse(
                course=course,
                position=pos,
                skills=frozenset(skills),
                categories=tuple(identify_categories(skills, taxonomy)),
                level=course_level(course.level),
                hours=parse_duration_hours(course.duration),
            )
            entries.append(entry)
            lessons.extend(_lesson_entries(course))
            # first occurrence wins; the loader rejects duplicates already
            by_id.setdefault(course.id, entry)
        self._entries: Tuple[IndexedCourse, ...] = tuple(entries)
        self._lessons: Tuple[LessonEntry, ...] = tuple(lessons)
        self._by_id = by_id
        logger.info(
            "Indexed {} courses ({} lessons) across {} skill categories",
            len(entries), len(lessons), len(taxonomy),
        )

    @property
    def taxonomy(self) -> Taxonomy:
        return self._taxonomy

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[IndexedCourse]:
        return iter(self._entries)

    @property
    def lessons(self) -> Tuple[LessonEntry, ...]:
        return self._lessons

    def get(self, course_id: str) -> Optional[IndexedCourse]:
        return self._by_id.get(course_id)

    def courses(self) -> List[Course]:
        return [e.course for e in self._entries]

    def categories_of(self, course_ids: Iterable[str]) -> Set[str]:
        """Categories of the given courses; unknown ids are ignored."""
        out: Set[str] = set()
        for cid in course_ids:
            entry = self._by_id.get(cid)
            if entry is not None:
                out.update(entry.categories)
        return out
