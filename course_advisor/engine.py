"""
Query engine: the single entry point a hosting application calls.

``QueryEngine.process_query`` normalizes the query, settles the answer
language (learner preference, else detection), classifies the intent
and hands off to the matching handler.  Each handler returns a fresh
:class:`~course_advisor.models.QueryResult`; nothing is kept between
calls, and the catalog index and taxonomy are only read after the
constructor returns.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from loguru import logger

from . import formatter
from .catalog_build import load_catalog, user_level as map_user_level
from .catalog_index import CatalogIndex
from .config import (
    COMPARISON_COURSE_KEYWORDS,
    CONFIDENCE,
    TOP_RELATED_CONTENT,
    TOP_SUGGESTIONS,
)
from .content_search import search_content
from .intent import Intent, classify_intent, detect_language
from .learning_path import analyze_skill_gaps, build_path
from .models import ContentMatch, Course, QueryResult, SkillGapReport, UserContext
from .normalize import extract_keywords, normalize_query
from .scoring import match_by_skill_level, recommend_courses, score_course
from .skills import Taxonomy, build_skill_taxonomy

ContextLike = Union[UserContext, Mapping[str, Any], None]
Handler = Callable[[str, UserContext, str], QueryResult]


def as_context(context: ContextLike) -> UserContext:
    """
    Accept a UserContext, a plain (camelCase or snake_case) mapping, or None.

    Anything else is logged and replaced by the empty profile.
    """
    if isinstance(context, UserContext):
        return context
    if not isinstance(context, Mapping):
        if context is not None:
            logger.warning("Ignoring learner context of type {}", type(context).__name__)
        return UserContext()
    return UserContext.model_validate(dict(context))


class QueryEngine:
    def __init__(self, courses: Sequence[Course]) -> None:
        self.taxonomy: Taxonomy = build_skill_taxonomy()
        self.index = CatalogIndex(courses, self.taxonomy)
        self._handlers: Dict[Intent, Handler] = {
            Intent.COURSE_SELECTION: self._handle_course_selection,
            Intent.LEARNING_PATH: self._handle_learning_path,
            Intent.CONTENT_QUESTION: self._handle_content_question,
            Intent.SKILL_MATCHING: self._handle_skill_matching,
            Intent.PRICING: self._handle_pricing,
            Intent.COURSE_COMPARISON: self._handle_course_comparison,
            Intent.TECHNICAL_HELP: self._handle_technical_help,
            Intent.GENERAL_INFO: self._handle_general_info,
        }

    @classmethod
    def from_catalog_file(cls, path: Optional[Path] = None) -> "QueryEngine":
        return cls(load_catalog(path))

    # ---------------------------
    # Entry point
    # ---------------------------

    def process_query(self, query: str, context: ContextLike = None) -> QueryResult:
        ctx = as_context(context)
        normalized = normalize_query(query)
        language = ctx.preferred_language or detect_language(query or "")
        intent = classify_intent(normalized)
        logger.debug("Query {!r} -> intent={} language={}", normalized[:80], intent.value, language)
        return self._handlers[intent](normalized, ctx, language)

    # ---------------------------
    # Direct operations
    # ---------------------------

    def recommend_courses(self, goal: str, context: ContextLike = None) -> List[Course]:
        return recommend_courses(self.index, goal, as_context(context))

    def build_path(self, goal: str, context: ContextLike = None) -> List[Course]:
        return build_path(self.index, goal, as_context(context))

    def match_by_skill_level(self, skill_level: Optional[str], context: ContextLike = None) -> List[Course]:
        return match_by_skill_level(self.index, skill_level, as_context(context))

    def analyze_skill_gaps(self, current_skills: Iterable[str], target_goal: str, language: str = "en") -> SkillGapReport:
        return analyze_skill_gaps(self.index, current_skills, target_goal, language)

    def search_content(self, query: str) -> List[ContentMatch]:
        return search_content(self.index, query)

    def score_course(
        self,
        course: Course,
        query_skills: Iterable[str],
        user_level: Union[int, str, None],
        context: ContextLike = None,
    ) -> float:
        level = user_level if isinstance(user_level, int) else map_user_level(user_level)
        return score_course(self.index, course, query_skills, level, as_context(context))

    # ---------------------------
    # Handlers
    # ---------------------------

    @staticmethod
    def _goal_text(query: str, ctx: UserContext) -> str:
        return " ".join(ctx.learning_goals) or query

    def _handle_course_selection(self, query: str, ctx: UserContext, language: str) -> QueryResult:
        keywords = extract_keywords(query)
        recommendations = self.recommend_courses(self._goal_text(query, ctx), ctx)
        top = recommendations[:TOP_SUGGESTIONS]
        return QueryResult(
            intent=Intent.COURSE_SELECTION,
            confidence=CONFIDENCE["course_selection"],
            language=language,
            response=formatter.format_course_recommendations(recommendations, keywords, language),
            suggested_courses=top,
            follow_up_questions=formatter.follow_up_questions(Intent.COURSE_SELECTION, language),
            action_links=formatter.course_links(top),
        )

    def _handle_learning_path(self, query: str, ctx: UserContext, language: str) -> QueryResult:
        path = self.build_path(self._goal_text(query, ctx), ctx)
        return QueryResult(
            intent=Intent.LEARNING_PATH,
            confidence=CONFIDENCE["learning_path"],
            language=language,
            response=formatter.format_learning_path(path, language),
            suggested_courses=path,
            follow_up_questions=formatter.follow_up_questions(Intent.LEARNING_PATH, language),
            action_links=formatter.course_links(path, numbered=True),
        )

    def _handle_content_question(self, query: str, ctx: UserContext, language: str) -> QueryResult:
        related = self.search_content(query)
        return QueryResult(
            intent=Intent.CONTENT_QUESTION,
            confidence=CONFIDENCE["content_question"],
            language=language,
            response=formatter.format_content_answer(query, related, language),
            related_content=related[:TOP_RELATED_CONTENT],
            follow_up_questions=formatter.follow_up_questions(Intent.CONTENT_QUESTION, language),
            action_links=formatter.lesson_links(related, self.index, language),
        )

    def _handle_skill_matching(self, query: str, ctx: UserContext, language: str) -> QueryResult:
        level = ctx.current_skill_level or "beginner"
        matched = self.match_by_skill_level(level, ctx)
        return QueryResult(
            intent=Intent.SKILL_MATCHING,
            confidence=CONFIDENCE["skill_matching"],
            language=language,
            response=formatter.format_skill_matching(level, matched, language),
            suggested_courses=matched,
            follow_up_questions=formatter.follow_up_questions(Intent.SKILL_MATCHING, language),
        )

    def _handle_pricing(self, query: str, ctx: UserContext, language: str) -> QueryResult:
        return QueryResult(
            intent=Intent.PRICING,
            confidence=CONFIDENCE["pricing"],
            language=language,
            response=formatter.pricing_text(language),
            follow_up_questions=formatter.follow_up_questions(Intent.PRICING, language),
            action_links=[formatter.browse_courses_link(language)],
        )

    def _courses_named(self, names: Iterable[str]) -> List[Course]:
        found: List[Course] = []
        for name in names:
            for entry in self.index:
                if name in entry.id.lower() or name in entry.course.title.lower():
                    if entry.course not in found:
                        found.append(entry.course)
                    break
        return found

    def _handle_course_comparison(self, query: str, ctx: UserContext, language: str) -> QueryResult:
        names = [k for k in COMPARISON_COURSE_KEYWORDS if k in query.lower()]
        if len(names) < 2:
            return QueryResult(
                intent=Intent.COURSE_COMPARISON,
                confidence=CONFIDENCE["course_comparison_unclear"],
                language=language,
                response=formatter.comparison_clarification(language),
                follow_up_questions=formatter.follow_up_questions(Intent.COURSE_COMPARISON, language),
            )
        compared = self._courses_named(names)
        return QueryResult(
            intent=Intent.COURSE_COMPARISON,
            confidence=CONFIDENCE["course_comparison"],
            language=language,
            response=formatter.format_comparison(names, compared, language),
            suggested_courses=compared,
            follow_up_questions=formatter.follow_up_questions(Intent.COURSE_COMPARISON, language),
            action_links=formatter.course_links(compared),
        )

    def _handle_technical_help(self, query: str, ctx: UserContext, language: str) -> QueryResult:
        return QueryResult(
            intent=Intent.TECHNICAL_HELP,
            confidence=CONFIDENCE["technical_help"],
            language=language,
            response=formatter.technical_help_text(language),
            follow_up_questions=formatter.follow_up_questions(Intent.TECHNICAL_HELP, language),
            action_links=[formatter.support_link()],
        )

    def _handle_general_info(self, query: str, ctx: UserContext, language: str) -> QueryResult:
        return QueryResult(
            intent=Intent.GENERAL_INFO,
            confidence=CONFIDENCE["general_info"],
            language=language,
            response=formatter.general_info_text(language),
            follow_up_questions=formatter.follow_up_questions(Intent.GENERAL_INFO, language),
        )
