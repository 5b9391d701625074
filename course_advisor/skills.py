"""
Skill taxonomy and skill extraction.

Free text (a query, a goal, a course's title/description/tags) is mapped
onto canonical skill labels by plain case-insensitive substring tests
against a small, fixed taxonomy.  Matching is generous: "api" also
hits "apis", "ai" also hits "email".
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, List, Mapping, Set, Tuple

from .config import COURSE_ID_SKILL_HINTS, GENERIC_AI_TERMS
from .models import Course


@dataclass(frozen=True)
class SkillCategory:
    id: str
    name: str
    skills: Tuple[str, ...]
    related_categories: Tuple[str, ...]


Taxonomy = Mapping[str, SkillCategory]

# (id, name, skills, related)
_TAXONOMY_ROWS = (
    ("ai-fundamentals", "AI Fundamentals",
     ("machine learning", "neural networks", "ai basics", "llm", "prompting"),
     ("practical-ai", "ai-development")),
    ("practical-ai", "Practical AI Applications",
     ("chatgpt", "gemini", "claude", "ai tools", "prompt engineering"),
     ("ai-fundamentals", "automation")),
    ("automation", "Automation & Integration",
     ("n8n", "make", "zapier", "workflow", "api", "webhooks"),
     ("practical-ai", "ai-development")),
    ("ai-development", "AI Development",
     ("langchain", "rag", "vector databases", "crewai", "agent development"),
     ("ai-fundamentals", "programming")),
    ("programming", "Programming & Technical",
     ("python", "javascript", "apis", "coding", "development"),
     ("ai-development", "automation")),
    ("business", "Business Applications",
     ("marketing", "customer service", "content creation", "strategy"),
     ("practical-ai", "automation")),
)


def build_skill_taxonomy() -> Taxonomy:
    """Build the read-only category table.  Called once per engine."""
    categories = {
        cid: SkillCategory(id=cid, name=name, skills=skills, related_categories=related)
        for cid, name, skills, related in _TAXONOMY_ROWS
    }
    return MappingProxyType(categories)


def skills_overlap(a: str, b: str) -> bool:
    """True when either label contains the other (case-insensitive)."""
    a, b = a.lower(), b.lower()
    return a in b or b in a


def extract_skills(text: str, taxonomy: Taxonomy) -> Set[str]:
    """
    Return the taxonomy skills and generic AI terms that occur in ``text``.

    Empty text gives an empty set.  Pure: depends only on the text and
    the (immutable) taxonomy.
    """
    lowered = (text or "").lower()
    if not lowered.strip():
        return set()
    found: Set[str] = set()
    for category in taxonomy.values():
        for skill in category.skills:
            if skill.lower() in lowered:
                found.add(skill)
    for term in GENERIC_AI_TERMS:
        if term in lowered:
            found.add(term)
    return found


def course_skills(course: Course, taxonomy: Taxonomy) -> Set[str]:
    """Skills taught by a course: its text fields plus hints from its id."""
    blob = " ".join([course.title, course.description, " ".join(course.tags)]).lower()
    found: Set[str] = set()
    for category in taxonomy.values():
        for skill in category.skills:
            if skill.lower() in blob:
                found.add(skill)
    cid = course.id.lower()
    for fragment, hinted in COURSE_ID_SKILL_HINTS.items():
        if fragment in cid:
            found.update(hinted)
    return found


def count_matched(wanted: Iterable[str], offered: Iterable[str]) -> int:
    """How many ``wanted`` skills overlap at least one ``offered`` skill."""
    offered = list(offered)
    return sum(1 for w in wanted if any(skills_overlap(w, o) for o in offered))


def identify_categories(skills: Iterable[str], taxonomy: Taxonomy) -> List[str]:
    """Category ids (taxonomy order) with a skill overlapping any of ``skills``."""
    skills = list(skills)
    if not skills:
        return []
    return [
        cid
        for cid, category in taxonomy.items()
        if any(skills_overlap(s, cs) for s in skills for cs in category.skills)
    ]


def related_categories(category_ids: Iterable[str], taxonomy: Taxonomy) -> Set[str]:
    """Union of the ``related_categories`` of the given categories."""
    out: Set[str] = set()
    for cid in category_ids:
        category = taxonomy.get(cid)
        if category is not None:
            out.update(category.related_categories)
    return out
