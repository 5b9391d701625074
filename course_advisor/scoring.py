"""
Multi-factor course scoring and ranking.

A course's relevance to a (query skills, learner level, learner context)
triple is the sum of five capped parts:

- skill overlap      0..40  share of query skills the course teaches
- level fit          0..30  30 minus 10 per ordinal step of difference
- interest fit       0|20   an interest appears in title or description
- time fit           0|10   estimated hours fit the availability bucket
- category affinity  0|15   shares (or relates to) a completed course's category

so every total lies in ``[0, MAX_COURSE_SCORE]`` (115).  Ranking is a
stable sort on the total: equal scores keep catalog order.  No secondary
key is applied on purpose.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from loguru import logger

from .catalog_build import course_level, parse_duration_hours, user_level as map_user_level
from .catalog_index import CatalogIndex, IndexedCourse
from .config import (
    CATEGORY_AFFINITY_BONUS,
    INTEREST_BONUS,
    LEVEL_FIT_MAX,
    LEVEL_MATCH_WINDOW,
    LEVEL_STEP_PENALTY,
    SKILL_MATCH_WEIGHT,
    TIME_AVAILABILITY_MAX_HOURS,
    TIME_FIT_BONUS,
)
from .models import Course, UserContext
from .skills import count_matched, course_skills, extract_skills, identify_categories, related_categories


@dataclass(frozen=True)
class ScoreBreakdown:
    skill_match: float
    level_fit: float
    interest_fit: float
    time_fit: float
    category_bonus: float

    @property
    def total(self) -> float:
        return self.skill_match + self.level_fit + self.interest_fit + self.time_fit + self.category_bonus


@dataclass(frozen=True)
class ScoredCourse:
    course: Course
    score: float
    breakdown: ScoreBreakdown


CourseLike = Union[Course, IndexedCourse]


def _entry_for(index: CatalogIndex, course: CourseLike) -> IndexedCourse:
    if isinstance(course, IndexedCourse):
        return course
    entry = index.get(course.id)
    if entry is not None and entry.course is course:
        return entry
    # a course that isn't part of the index: derive the same fields on the fly
    skills = course_skills(course, index.taxonomy)
    return IndexedCourse(
        course=course,
        position=len(index),
        skills=frozenset(skills),
        categories=tuple(identify_categories(skills, index.taxonomy)),
        level=course_level(course.level),
        hours=parse_duration_hours(course.duration),
    )


# ---------------------------
# Sub-scores
# ---------------------------

def skill_match_score(query_skills: Iterable[str], offered: Iterable[str]) -> float:
    query_skills = list(query_skills)
    matched = count_matched(query_skills, offered)
    return matched / max(len(query_skills), 1) * SKILL_MATCH_WEIGHT


def level_fit_score(course_ordinal: int, user_ordinal: int) -> float:
    return max(0.0, LEVEL_FIT_MAX - abs(int(course_ordinal) - int(user_ordinal)) * LEVEL_STEP_PENALTY)


def interest_score(course: Course, interests: Iterable[str]) -> float:
    title = course.title.lower()
    desc = course.description.lower()
    for interest in interests:
        needle = interest.strip().lower()
        if needle and (needle in title or needle in desc):
            return INTEREST_BONUS
    return 0.0


def time_fit_score(hours: float, time_availability: Optional[str]) -> float:
    if not time_availability or time_availability not in TIME_AVAILABILITY_MAX_HOURS:
        return 0.0
    cap = TIME_AVAILABILITY_MAX_HOURS[time_availability]
    if cap is None or hours <= cap:
        return TIME_FIT_BONUS
    return 0.0


def category_affinity_score(index: CatalogIndex, entry: IndexedCourse, completed: Iterable[str]) -> float:
    completed = list(completed)
    if not completed:
        return 0.0
    done = index.categories_of(completed)
    if not done:
        return 0.0
    reachable = done | related_categories(done, index.taxonomy)
    return CATEGORY_AFFINITY_BONUS if reachable.intersection(entry.categories) else 0.0


# ---------------------------
# Public scoring API
# ---------------------------

def score_breakdown(
    index: CatalogIndex,
    course: CourseLike,
    query_skills: Iterable[str],
    user_level: int,
    context: Optional[UserContext] = None,
) -> ScoreBreakdown:
    ctx = context or UserContext()
    entry = _entry_for(index, course)
    return ScoreBreakdown(
        skill_match=skill_match_score(query_skills, entry.skills),
        level_fit=level_fit_score(entry.level, user_level),
        interest_fit=interest_score(entry.course, ctx.interests),
        time_fit=time_fit_score(entry.hours, ctx.time_availability),
        category_bonus=category_affinity_score(index, entry, ctx.completed_courses),
    )


def score_course(
    index: CatalogIndex,
    course: CourseLike,
    query_skills: Iterable[str],
    user_level: int,
    context: Optional[UserContext] = None,
) -> float:
    """Total relevance score of one course, always within [0, 115]."""
    return score_breakdown(index, course, query_skills, user_level, context).total


def rank_courses(
    index: CatalogIndex,
    query_skills: Iterable[str],
    user_level: int,
    context: Optional[UserContext] = None,
) -> List[ScoredCourse]:
    """
    Score every catalog course and return them best first.

    Completed courses are removed from the result, not just pushed down.
    """
    ctx = context or UserContext()
    query_skills = sorted(set(query_skills))
    completed = set(ctx.completed_courses)
    scored: List[ScoredCourse] = []
    for entry in index:
        if entry.id in completed:
            continue
        breakdown = score_breakdown(index, entry, query_skills, user_level, ctx)
        scored.append(ScoredCourse(course=entry.course, score=breakdown.total, breakdown=breakdown))
    scored.sort(key=lambda s: -s.score)
    if scored:
        logger.debug("Ranked {} courses; top {} ({:.1f})", len(scored), scored[0].course.id, scored[0].score)
    return scored


def recommend_courses(index: CatalogIndex, goal: str, context: Optional[UserContext] = None) -> List[Course]:
    """Rank the catalog against the skills found in ``goal``."""
    ctx = context or UserContext()
    skills = extract_skills(goal, index.taxonomy)
    level = map_user_level(ctx.current_skill_level)
    return [s.course for s in rank_courses(index, skills, level, ctx)]


def match_by_skill_level(index: CatalogIndex, level_label: Optional[str], context: Optional[UserContext] = None) -> List[Course]:
    """Courses within one level of the learner, exact level first, catalog order otherwise."""
    ctx = context or UserContext()
    level = map_user_level(level_label)
    completed = set(ctx.completed_courses)
    window = [
        entry for entry in index
        if abs(entry.level - level) <= LEVEL_MATCH_WINDOW and entry.id not in completed
    ]
    window.sort(key=lambda e: abs(e.level - level))
    return [e.course for e in window]
