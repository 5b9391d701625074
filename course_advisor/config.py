"""
Configuration for the course advisor (query understanding + recommendation).

All tunables live here as module constants so the scoring, path building
and intent code never hardcode numbers or word lists.  The handful of
Pydantic schemas at the bottom are the request/response shapes used by
the HTTP surface in :mod:`course_advisor.api`.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Paths
PROJECT_ROOT = Path(__file__).resolve().parents[1]
DATA_DIR = PROJECT_ROOT / "data"
DEFAULT_CATALOG_PATH = DATA_DIR / "courses.json"
CATALOG_PATH = Path(os.getenv("COURSE_ADVISOR_CATALOG", str(DEFAULT_CATALOG_PATH)))

# Text processing
MAX_INPUT_CHARS = 20_000

# Scoring weights (sum of maxima = 115)
SKILL_MATCH_WEIGHT = 40.0
LEVEL_FIT_MAX = 30.0
LEVEL_STEP_PENALTY = 10.0
INTEREST_BONUS = 20.0
TIME_FIT_BONUS = 10.0
CATEGORY_AFFINITY_BONUS = 15.0
MAX_COURSE_SCORE = (
    SKILL_MATCH_WEIGHT + LEVEL_FIT_MAX + INTEREST_BONUS + TIME_FIT_BONUS + CATEGORY_AFFINITY_BONUS
)

# Time availability buckets -> max course hours (None = unconstrained)
TIME_AVAILABILITY_MAX_HOURS: Dict[str, Optional[float]] = {
    "low": 10.0,
    "medium": 20.0,
    "high": None,
}

# Duration parsing
HOURS_PER_WEEK = 5
DEFAULT_COURSE_HOURS = 10

# Path building
SPECIALIZED_OVERLAP_RATIO = 0.6

# Level matching window (ordinal steps either side)
LEVEL_MATCH_WINDOW = 1

# Content search
RELEVANCE_THRESHOLD = 0.3
OCCURRENCE_WEIGHT = 0.1

# Result policy
TOP_SUGGESTIONS = 3
TOP_RELATED_CONTENT = 5
TOP_LESSON_LINKS = 3
SKILL_GAP_COURSES = 5

# Fixed handler confidences (designer estimates, not statistics)
CONFIDENCE: Dict[str, float] = {
    "course_selection": 0.9,
    "learning_path": 0.85,
    "content_question": 0.8,
    "skill_matching": 0.85,
    "pricing": 1.0,
    "course_comparison": 0.9,
    "course_comparison_unclear": 0.6,
    "technical_help": 0.9,
    "general_info": 0.7,
}

# Language detection
SUPPORTED_LANGUAGES = ("nl", "en")
DUTCH_KEYWORDS: List[str] = ["wat", "hoe", "welke", "kan", "wil", "moet", "cursus", "leren", "kennis"]
DUTCH_KEYWORD_THRESHOLD = 2

# Intent trigger words, English + Dutch.  Order of the table in
# intent.py decides ties; these are only the bags of words.
COURSE_SELECTION_TRIGGERS: List[str] = [
    "which", "welke", "wat voor", "recommend", "aanraden", "aanbevelen",
    "best", "beste", "suitable", "geschikt",
]
LEARNING_PATH_TRIGGERS: List[str] = [
    "path", "pad", "roadmap", "route", "journey", "traject", "leertraject",
    "sequence", "volgorde",
]
CONTENT_QUESTION_TRIGGERS: List[str] = [
    "what is", "wat is", "how to", "hoe", "explain", "uitleggen", "betekent", "means",
]
SKILL_MATCHING_TRIGGERS: List[str] = [
    "skill", "skills", "vaardigheid", "vaardigheden", "background", "achtergrond",
    "experience", "ervaring", "level", "niveau",
]
PRICING_TRIGGERS: List[str] = [
    "price", "prices", "pricing", "prijs", "prijzen", "cost", "costs", "kost", "kosten",
    "fee", "fees", "tarief", "tarieven", "discount", "korting",
]
COMPARISON_TRIGGERS: List[str] = [
    "versus", "vs", "compare", "vergelijk", "vergelijken", "difference", "verschil",
    "better", "beter",
]
TECHNICAL_HELP_TRIGGERS: List[str] = [
    "problem", "probleem", "error", "fout", "help", "hulp", "access", "toegang", "login",
]

# Generic AI / automation vocabulary added on top of the taxonomy
GENERIC_AI_TERMS: List[str] = [
    "ai", "artificial intelligence", "machine learning", "automation",
    "chatbot", "llm", "prompt", "api", "integration", "workflow",
]

# Course-id fragments -> extra skills credited to the course
COURSE_ID_SKILL_HINTS: Dict[str, List[str]] = {
    "chatgpt": ["chatgpt", "openai"],
    "gemini": ["gemini", "google ai"],
    "claude": ["claude", "anthropic"],
    "langchain": ["langchain", "llm development"],
    "rag": ["rag", "retrieval augmented generation"],
    "n8n": ["automation", "workflow"],
    "make": ["automation", "workflow"],
}

# Names recognised when a query asks to compare courses
COMPARISON_COURSE_KEYWORDS: List[str] = [
    "chatgpt", "gemini", "claude", "langchain", "rag", "n8n", "make", "blockchain",
]

STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "de", "het", "een", "en", "of", "maar", "op", "aan", "voor", "van",
})

# Links / contact
COURSE_URL_TEMPLATE = "/courses/{course_id}"
LESSON_URL_TEMPLATE = "/courses/{course_id}/modules/{module_id}/lessons/{lesson_id}"
COURSES_INDEX_URL = "/courses"
SUPPORT_EMAIL = "support@groeimetai.com"

# Logging dir
LOG_DIR = PROJECT_ROOT / "logs"
LOG_DIR.mkdir(exist_ok=True)


# Pydantic schemas (HTTP surface)
class HealthResponse(BaseModel):
    status: str
    courses: int = Field(0, ge=0)


class QueryRequest(BaseModel):
    query: str = Field(..., min_length=1)
    context: Optional[Dict] = None


class GoalRequest(BaseModel):
    goal: str = ""
    context: Optional[Dict] = None


class SkillGapRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_skills: List[str] = Field(default_factory=list, alias="currentSkills")
    target_goal: str = Field("", alias="targetGoal")
