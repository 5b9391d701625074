"""
Learning path assembly and skill-gap analysis.

A path is built in three tiers from the skills found in the learner's
goal:

1. foundational  - beginner courses in a goal category (only for learners
                   at beginner level or below)
2. intermediate  - intermediate courses in a goal category that teach a
                   goal skill
3. specialized   - courses naming the goal outright, or covering at
                   least 60% of the goal skills

The tiers are concatenated, de-duplicated by id (first wins), stripped
of completed courses and stably sorted by level.  A goal with no
recognisable skills simply yields a short or empty path.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Set

from loguru import logger

from .catalog_build import user_level as map_user_level
from .catalog_index import CatalogIndex, IndexedCourse
from .config import SKILL_GAP_COURSES, SPECIALIZED_OVERLAP_RATIO
from .models import Course, DifficultyLevel, SkillGapReport, UserContext
from .skills import count_matched, extract_skills, identify_categories, skills_overlap


def foundational_tier(index: CatalogIndex, categories: Iterable[str]) -> List[IndexedCourse]:
    wanted = set(categories)
    return [
        e for e in index
        if e.level <= DifficultyLevel.BEGINNER and wanted.intersection(e.categories)
    ]


def intermediate_tier(index: CatalogIndex, categories: Iterable[str], goal_skills: Iterable[str]) -> List[IndexedCourse]:
    wanted = set(categories)
    goal_skills = list(goal_skills)
    return [
        e for e in index
        if e.level == DifficultyLevel.INTERMEDIATE
        and wanted.intersection(e.categories)
        and count_matched(goal_skills, e.skills) > 0
    ]


def specialized_tier(index: CatalogIndex, goal: str, goal_skills: Iterable[str]) -> List[IndexedCourse]:
    goal_lower = (goal or "").strip().lower()
    goal_skills = list(goal_skills)
    needed = math.ceil(len(goal_skills) * SPECIALIZED_OVERLAP_RATIO)
    out: List[IndexedCourse] = []
    for e in index:
        if goal_lower and (goal_lower in e.course.title.lower() or goal_lower in e.course.description.lower()):
            out.append(e)
        elif goal_skills and count_matched(goal_skills, e.skills) >= needed:
            out.append(e)
    return out


def optimize_path(entries: Iterable[IndexedCourse], context: UserContext) -> List[Course]:
    """Drop duplicate ids (first wins) and completed courses, then order by level."""
    completed = set(context.completed_courses)
    seen: Set[str] = set()
    unique: List[IndexedCourse] = []
    for e in entries:
        if e.id in seen:
            continue
        seen.add(e.id)
        if e.id not in completed:
            unique.append(e)
    unique.sort(key=lambda e: int(e.level))
    return [e.course for e in unique]


def build_path(index: CatalogIndex, goal: str, context: Optional[UserContext] = None) -> List[Course]:
    ctx = context or UserContext()
    goal_skills = sorted(extract_skills(goal, index.taxonomy))
    categories = identify_categories(goal_skills, index.taxonomy)
    level = map_user_level(ctx.current_skill_level)

    path: List[IndexedCourse] = []
    if level <= DifficultyLevel.BEGINNER:
        path.extend(foundational_tier(index, categories))
    path.extend(intermediate_tier(index, categories, goal_skills))
    path.extend(specialized_tier(index, goal, goal_skills))

    result = optimize_path(path, ctx)
    logger.debug(
        "Built path for goal skills {} (categories {}): {} courses",
        goal_skills, categories, len(result),
    )
    return result


# ---------------------------
# Skill gaps
# ---------------------------

def format_duration(hours: int, language: str = "en") -> str:
    nl = language == "nl"
    if hours < 10:
        return f"{hours} {'uur' if nl else 'hours'}"
    if hours < 40:
        weeks = math.ceil(hours / 5)
        return f"{weeks} weken ({hours} uur)" if nl else f"{weeks} weeks ({hours} hours)"
    months = math.ceil(hours / 20)
    return f"{months} maanden ({hours} uur)" if nl else f"{months} months ({hours} hours)"


def analyze_skill_gaps(
    index: CatalogIndex,
    current_skills: Iterable[str],
    target_goal: str,
    language: str = "en",
) -> SkillGapReport:
    """
    Compare what the learner already knows with what the goal needs and
    point at up to ``SKILL_GAP_COURSES`` courses (catalog order) that
    teach the missing skills.
    """
    have = [s.strip().lower() for s in current_skills if s and s.strip()]
    target = sorted(extract_skills(target_goal, index.taxonomy))
    missing = [skill for skill in target if not any(skills_overlap(skill, h) for h in have)]

    courses: List[IndexedCourse] = []
    if missing:
        for e in index:
            if count_matched(missing, e.skills) > 0:
                courses.append(e)
                if len(courses) >= SKILL_GAP_COURSES:
                    break

    total_hours = sum(e.hours for e in courses)
    return SkillGapReport(
        missing_skills=missing,
        recommended_courses=[e.course for e in courses],
        estimated_time=format_duration(total_hours, language),
    )
