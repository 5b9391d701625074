import pytest

from course_advisor.models import Course
from course_advisor.skills import (
    count_matched,
    course_skills,
    extract_skills,
    identify_categories,
    related_categories,
    skills_overlap,
)


def test_taxonomy_is_read_only(taxonomy):
    assert len(taxonomy) == 6
    assert "rag" in taxonomy["ai-development"].skills
    with pytest.raises(TypeError):
        taxonomy["new"] = taxonomy["automation"]


def test_skills_overlap_is_bidirectional():
    assert skills_overlap("api", "apis")
    assert skills_overlap("APIs", "api")
    assert not skills_overlap("rag", "python")


def test_extract_skills(taxonomy):
    skills = extract_skills("I want to automate with N8N and Make", taxonomy)
    assert {"n8n", "make"} <= skills
    assert "python" not in skills


def test_extract_skills_includes_generic_terms(taxonomy):
    assert "chatbot" in extract_skills("build a chatbot", taxonomy)


def test_extract_skills_empty_text(taxonomy):
    assert extract_skills("", taxonomy) == set()
    assert extract_skills("   ", taxonomy) == set()
    assert extract_skills(None, taxonomy) == set()


def test_course_skills_uses_text_and_id_hints(taxonomy):
    course = Course(id="langchain-apps", title="LangChain Apps", description="Build llm apps in python.")
    skills = course_skills(course, taxonomy)
    assert {"langchain", "llm", "python", "llm development"} <= skills


def test_count_matched():
    assert count_matched(["api", "rag"], ["apis", "python"]) == 1
    assert count_matched([], ["python"]) == 0


def test_identify_categories_keeps_taxonomy_order(taxonomy):
    assert identify_categories(["rag"], taxonomy) == ["ai-development"]
    assert identify_categories(["python", "llm"], taxonomy) == ["ai-fundamentals", "programming"]
    assert identify_categories([], taxonomy) == []


def test_related_categories(taxonomy):
    assert related_categories(["automation"], taxonomy) == {"practical-ai", "ai-development"}
    assert related_categories(["nope"], taxonomy) == set()
