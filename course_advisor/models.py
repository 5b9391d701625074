"""
Domain models for catalog records, learner context and query results.

Catalog records arrive from the content platform with camelCase keys
(``shortDescription``, ``completedCourses``); every model accepts both
the alias and the snake_case field name.
"""

from __future__ import annotations

from enum import IntEnum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import SUPPORTED_LANGUAGES, TIME_AVAILABILITY_MAX_HOURS
from .intent import Intent


class DifficultyLevel(IntEnum):
    ABSOLUTE_BEGINNER = 0
    BEGINNER = 1
    INTERMEDIATE = 2
    ADVANCED = 3
    EXPERT = 4


# ---------------------------
# Catalog records (read-only)
# ---------------------------

class Lesson(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str = ""
    content: str = ""
    duration: str = ""


class Module(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str = ""
    description: str = ""
    lessons: List[Lesson] = Field(default_factory=list)


class Course(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(..., min_length=1)
    title: str
    description: str = ""
    short_description: Optional[str] = Field(None, alias="shortDescription")
    tags: List[str] = Field(default_factory=list)
    level: str = "Gevorderd"
    category: Optional[str] = None
    duration: str = ""
    price: float = Field(0.0, ge=0)
    currency: str = "EUR"
    modules: List[Module] = Field(default_factory=list)


# ---------------------------
# Learner context (per call)
# ---------------------------

class UserContext(BaseModel):
    """
    Session-scoped learner profile supplied by the caller on every query.

    Every field is optional.  Unknown enumerated values are dropped to
    ``None`` rather than rejected, so a sloppy profile degrades to the
    neutral defaults instead of failing the query.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_id: Optional[str] = Field(None, alias="userId")
    preferred_language: Optional[str] = Field(None, alias="preferredLanguage")
    current_skill_level: Optional[str] = Field(None, alias="currentSkillLevel")
    interests: List[str] = Field(default_factory=list)
    completed_courses: List[str] = Field(default_factory=list, alias="completedCourses")
    current_course: Optional[str] = Field(None, alias="currentCourse")
    learning_goals: List[str] = Field(default_factory=list, alias="learningGoals")
    industry: Optional[str] = None
    time_availability: Optional[str] = Field(None, alias="timeAvailability")

    @field_validator("preferred_language", mode="before")
    @classmethod
    def _known_language(cls, v):
        if not isinstance(v, str):
            return None
        v = v.strip().lower()
        return v if v in SUPPORTED_LANGUAGES else None

    @field_validator("current_skill_level", mode="before")
    @classmethod
    def _lower_level(cls, v):
        if not isinstance(v, str) or not v.strip():
            return None
        return v.strip().lower()

    @field_validator("time_availability", mode="before")
    @classmethod
    def _known_bucket(cls, v):
        if not isinstance(v, str):
            return None
        v = v.strip().lower()
        return v if v in TIME_AVAILABILITY_MAX_HOURS else None

    @field_validator("user_id", "current_course", "industry", mode="before")
    @classmethod
    def _text_or_none(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v if isinstance(v, str) and v.strip() else None

    @field_validator("interests", "completed_courses", "learning_goals", mode="before")
    @classmethod
    def _as_list(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [v] if v.strip() else []
        if not isinstance(v, (list, tuple, set)):
            return []
        return [str(x) for x in v if x is not None and str(x).strip()]


# ---------------------------
# Query result (per call)
# ---------------------------

class ContentMatch(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    course_id: str = Field(..., alias="courseId")
    module_id: str = Field(..., alias="moduleId")
    lesson_id: str = Field(..., alias="lessonId")
    relevance: float = Field(..., gt=0.0, le=1.0)


class ActionLink(BaseModel):
    text: str
    url: str
    type: Literal["course", "lesson", "external"]


class QueryResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    intent: Intent
    confidence: float = Field(..., ge=0.0, le=1.0)
    language: Literal["nl", "en"] = "en"
    response: str
    suggested_courses: List[Course] = Field(default_factory=list, alias="suggestedCourses")
    related_content: List[ContentMatch] = Field(default_factory=list, alias="relatedContent")
    follow_up_questions: List[str] = Field(default_factory=list, alias="followUpQuestions")
    action_links: List[ActionLink] = Field(default_factory=list, alias="actionLinks")


class SkillGapReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    missing_skills: List[str] = Field(default_factory=list, alias="missingSkills")
    recommended_courses: List[Course] = Field(default_factory=list, alias="recommendedCourses")
    estimated_time: str = Field("", alias="estimatedTime")
