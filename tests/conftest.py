from __future__ import annotations

from typing import List

import pytest

from course_advisor.engine import QueryEngine
from course_advisor.models import Course
from course_advisor.skills import build_skill_taxonomy

# Small catalog whose skill tags are easy to reason about by hand.
# Order matters: it is the tie-break for equal scores.
RAW_COURSES = [
    {
        "id": "prompt-basics",
        "title": "Prompt Basics",
        "description": "Learn prompting with chatgpt.",
        "shortDescription": "Prompting for everyone",
        "tags": ["Prompt Engineering"],
        "level": "Beginner",
        "duration": "6 uur",
        "price": 49,
        "modules": [
            {
                "id": "m1",
                "title": "Getting started",
                "lessons": [
                    {"id": "l1", "title": "Zero-shot prompting", "content": "Write clear prompts."},
                ],
            }
        ],
    },
    {
        "id": "n8n-workflows",
        "title": "N8N Workflows",
        "description": "Automate your work with n8n.",
        "tags": ["Automation"],
        "level": "Beginner",
        "duration": "2 weken",
        "price": 99,
    },
    {
        "id": "langchain-apps",
        "title": "LangChain Apps",
        "description": "Build llm apps in python.",
        "tags": ["LangChain"],
        "level": "Intermediate",
        "duration": "12 hours",
        "price": 149,
    },
    {
        "id": "rag-systems",
        "title": "RAG Systems",
        "description": "Retrieval with vector databases.",
        "tags": ["RAG"],
        "level": "Advanced",
        "duration": "20 uur",
        "price": 299,
        "modules": [
            {
                "id": "rag-intro",
                "title": "Introduction",
                "lessons": [
                    {
                        "id": "what-is-rag",
                        "title": "What is RAG",
                        "content": "<p>RAG combines retrieval with generation. <b>RAG</b> grounds answers.</p>",
                    },
                ],
            }
        ],
    },
    {
        "id": "marketing-ai",
        "title": "AI for Marketing",
        "description": "Content creation for campaigns.",
        "tags": ["Marketing"],
        "level": "Beginner",
        "duration": "4 uur",
        "price": 79.5,
    },
]


@pytest.fixture
def courses() -> List[Course]:
    return [Course.model_validate(raw) for raw in RAW_COURSES]


@pytest.fixture
def taxonomy():
    return build_skill_taxonomy()


@pytest.fixture
def engine(courses) -> QueryEngine:
    return QueryEngine(courses)


@pytest.fixture
def index(engine):
    return engine.index


@pytest.fixture
def sample_engine() -> QueryEngine:
    """Engine over the bundled data/courses.json catalog."""
    return QueryEngine.from_catalog_file()
