import pytest

from course_advisor.engine import QueryEngine, as_context
from course_advisor.intent import Intent
from course_advisor.models import UserContext


def test_dutch_course_selection(engine):
    result = engine.process_query("Welke cursus is het beste voor een beginner in AI?")
    assert result.intent == Intent.COURSE_SELECTION
    assert result.language == "nl"
    assert result.confidence == 0.9
    assert len(result.suggested_courses) <= 3
    assert [link.type for link in result.action_links] == ["course"] * len(result.suggested_courses)


def test_course_selection_ranks_skill_match_first(engine):
    result = engine.process_query("Which course is best for llm?")
    assert [c.id for c in result.suggested_courses] == ["langchain-apps", "prompt-basics", "n8n-workflows"]
    assert result.action_links[0].url == "/courses/langchain-apps"
    assert "LangChain Apps" in result.response


def test_learning_goals_drive_course_selection(engine):
    result = engine.process_query("Which course do you recommend?", {"learningGoals": ["RAG systems"]})
    assert result.suggested_courses[0].id == "rag-systems"


def test_content_question_links_lessons(engine):
    result = engine.process_query("What is RAG and how does it work?")
    assert result.intent == Intent.CONTENT_QUESTION
    assert result.language == "en"
    assert result.confidence == 0.8
    assert [m.lesson_id for m in result.related_content] == ["what-is-rag"]
    assert result.action_links[0].type == "lesson"
    assert result.action_links[0].url == "/courses/rag-systems/modules/rag-intro/lessons/what-is-rag"


def test_content_question_without_matches(engine):
    result = engine.process_query("explain quantum knitting")
    assert result.intent == Intent.CONTENT_QUESTION
    assert result.related_content == []
    assert "couldn't find" in result.response


def test_pricing_in_dutch(engine):
    result = engine.process_query("Hoeveel kost de ChatGPT cursus?")
    assert result.intent == Intent.PRICING
    assert result.confidence == 1.0
    assert result.language == "nl"
    assert "€29 - €49" in result.response
    assert result.action_links[0].url == "/courses"


def test_learning_path_handler(engine):
    result = engine.process_query("What is the path to llm?", {"currentSkillLevel": "beginner"})
    assert result.intent == Intent.LEARNING_PATH
    assert result.confidence == 0.85
    assert [c.id for c in result.suggested_courses] == ["prompt-basics", "langchain-apps"]
    assert result.action_links[0].text == "1. Prompt Basics"


def test_skill_matching_defaults_to_beginner(engine):
    result = engine.process_query("What fits my skill set")
    assert result.intent == Intent.SKILL_MATCHING
    assert [c.id for c in result.suggested_courses][:3] == ["prompt-basics", "n8n-workflows", "marketing-ai"]
    assert "(beginner)" in result.response


def test_comparison_of_named_courses(engine):
    result = engine.process_query("langchain vs rag")
    assert result.intent == Intent.COURSE_COMPARISON
    assert result.confidence == 0.9
    assert [c.id for c in result.suggested_courses] == ["langchain-apps", "rag-systems"]


def test_comparison_without_names_asks_for_clarification(engine):
    result = engine.process_query("compare courses")
    assert result.intent == Intent.COURSE_COMPARISON
    assert result.confidence == 0.6
    assert result.suggested_courses == []


def test_technical_help_links_support(engine):
    result = engine.process_query("I have a login problem")
    assert result.intent == Intent.TECHNICAL_HELP
    assert result.action_links[0].url.startswith("mailto:")


def test_general_info_is_the_fallback(engine):
    result = engine.process_query("Hello there")
    assert result.intent == Intent.GENERAL_INFO
    assert result.confidence == 0.7
    assert result.suggested_courses == []


def test_preferred_language_overrides_detection(engine):
    result = engine.process_query("Hello there", {"preferredLanguage": "nl"})
    assert result.language == "nl"
    assert result.follow_up_questions[0].startswith("Waar")


@pytest.mark.parametrize(
    "query",
    [
        "Which course is best?",
        "Show me a roadmap",
        "What is RAG?",
        "my skill level",
        "Hoeveel kost de ChatGPT cursus?",
        "langchain vs rag",
        "login error",
        "Hello there",
    ],
)
def test_every_answer_has_three_follow_ups(engine, query):
    assert len(engine.process_query(query).follow_up_questions) == 3


def test_empty_catalog_still_answers():
    result = QueryEngine([]).process_query("Which course is best?")
    assert result.intent == Intent.COURSE_SELECTION
    assert result.suggested_courses == []
    assert "No courses found" in result.response


def test_engine_score_course_accepts_level_labels(engine):
    course = engine.index.get("prompt-basics").course
    assert engine.score_course(course, ["chatgpt"], "beginner") == 70
    assert engine.score_course(course, ["chatgpt"], 1) == 70


def test_as_context_accepts_dicts_and_models():
    ctx = as_context({"completedCourses": ["a"], "timeAvailability": "LOW", "preferredLanguage": "de"})
    assert ctx.completed_courses == ["a"]
    assert ctx.time_availability == "low"
    assert ctx.preferred_language is None
    model = UserContext(interests="ai")
    assert as_context(model) is model
    assert model.interests == ["ai"]
    assert as_context(None) == UserContext()


@pytest.mark.parametrize(
    "context",
    [
        {"interests": 5},
        {"completedCourses": {"a": 1}},
        {"learningGoals": 3.5},
        {"userId": 42, "industry": ["retail"], "timeAvailability": 7},
        "beginner",
        ["prompt-basics"],
    ],
)
def test_malformed_context_degrades_to_defaults(engine, context):
    result = engine.process_query("Which course is best for llm?", context)
    assert result.intent == Intent.COURSE_SELECTION
    assert result.suggested_courses[0].id == "langchain-apps"


@pytest.mark.parametrize(
    "query, context, intent",
    [
        ("Which course is best for llm?", {}, Intent.COURSE_SELECTION),
        ("What is the path to llm?", {"currentSkillLevel": "beginner"}, Intent.LEARNING_PATH),
        ("What fits my skill set", {"currentSkillLevel": "beginner"}, Intent.SKILL_MATCHING),
    ],
)
def test_completed_courses_never_suggested(engine, query, context, intent):
    before = engine.process_query(query, context)
    assert before.intent == intent
    done = before.suggested_courses[0].id

    after = engine.process_query(query, {**context, "completedCourses": [done]})
    assert after.intent == intent
    assert done not in [c.id for c in after.suggested_courses]
    assert done not in [link.url.rsplit("/", 1)[-1] for link in after.action_links]


def test_repeated_queries_give_identical_results(engine):
    ctx = {"currentSkillLevel": "beginner", "interests": ["marketing"], "timeAvailability": "medium"}
    for query in ["Which course is best for llm?", "What is the path to llm?", "What is RAG?", "langchain vs rag"]:
        first = engine.process_query(query, ctx)
        second = engine.process_query(query, ctx)
        assert first == second
