import pytest

from course_advisor.config import MAX_COURSE_SCORE
from course_advisor.models import Course, DifficultyLevel, UserContext
from course_advisor.scoring import (
    level_fit_score,
    match_by_skill_level,
    rank_courses,
    recommend_courses,
    score_breakdown,
    score_course,
    time_fit_score,
)

BEGINNER = DifficultyLevel.BEGINNER


def _course(index, course_id):
    return index.get(course_id).course


def test_full_match_scores_100(index):
    ctx = UserContext(currentSkillLevel="beginner", interests=["chatgpt"], timeAvailability="low")
    course = _course(index, "prompt-basics")
    breakdown = score_breakdown(index, course, ["chatgpt"], BEGINNER, ctx)
    assert breakdown.skill_match == 40
    assert breakdown.level_fit == 30
    assert breakdown.interest_fit == 20
    assert breakdown.time_fit == 10
    assert breakdown.category_bonus == 0
    assert breakdown.total == 100


def test_category_bonus_reaches_the_maximum(index):
    # n8n-workflows sits in "automation", which relates to "practical-ai"
    ctx = UserContext(
        interests=["chatgpt"], timeAvailability="low", completedCourses=["n8n-workflows"],
    )
    score = score_course(index, _course(index, "prompt-basics"), ["chatgpt"], BEGINNER, ctx)
    assert score == MAX_COURSE_SCORE == 115


def test_no_category_bonus_for_unrelated_completion(index):
    ctx = UserContext(completedCourses=["marketing-ai"])
    breakdown = score_breakdown(index, _course(index, "rag-systems"), [], BEGINNER, ctx)
    assert breakdown.category_bonus == 0


def test_level_fit_steps_down_by_ten():
    assert level_fit_score(1, 1) == 30
    assert level_fit_score(2, 1) == 20
    assert level_fit_score(3, 1) == 10
    assert level_fit_score(4, 1) == 0
    assert level_fit_score(0, 4) == 0


@pytest.mark.parametrize(
    "hours, bucket, expected",
    [
        (6, "low", 10),
        (12, "low", 0),
        (12, "medium", 10),
        (100, "high", 10),
        (5, None, 0),
        (5, "weekends", 0),
    ],
)
def test_time_fit(hours, bucket, expected):
    assert time_fit_score(hours, bucket) == expected


def test_scores_stay_within_bounds(sample_engine):
    contexts = [
        UserContext(),
        UserContext(currentSkillLevel="expert", interests=["ai", "data"], timeAvailability="high",
                    completedCourses=["prompt-engineering", "n8n-make-basics"]),
        UserContext(currentSkillLevel="beginner", timeAvailability="low"),
    ]
    for ctx in contexts:
        for scored in rank_courses(sample_engine.index, ["rag", "chatgpt", "n8n"], 2, ctx):
            assert 0 <= scored.score <= MAX_COURSE_SCORE


def test_completed_courses_are_excluded(index):
    ctx = UserContext(completedCourses=["langchain-apps"])
    ids = [c.id for c in recommend_courses(index, "llm with python", ctx)]
    assert "langchain-apps" not in ids
    assert len(ids) == len(index) - 1


def test_ties_keep_catalog_order(index):
    ranked = rank_courses(index, [], DifficultyLevel.ABSOLUTE_BEGINNER)
    assert [s.course.id for s in ranked] == [
        "prompt-basics", "n8n-workflows", "marketing-ai", "langchain-apps", "rag-systems",
    ]
    assert [s.score for s in ranked] == [20, 20, 20, 10, 0]


def test_recommendation_puts_skill_match_first(index):
    ids = [c.id for c in recommend_courses(index, "Which course is best for llm?")]
    assert ids[0] == "langchain-apps"


def test_ranking_is_deterministic(index):
    ctx = UserContext(currentSkillLevel="intermediate", interests=["marketing"])
    first = [c.id for c in recommend_courses(index, "automation and marketing", ctx)]
    second = [c.id for c in recommend_courses(index, "automation and marketing", ctx)]
    assert first == second


def test_score_course_outside_the_index(index):
    course = Course(id="python-101", title="Python coding", level="Beginner")
    assert score_course(index, course, ["python"], BEGINNER) == 70


def test_match_by_skill_level_orders_by_distance(index):
    ids = [c.id for c in match_by_skill_level(index, "beginner")]
    assert ids == ["prompt-basics", "n8n-workflows", "marketing-ai", "langchain-apps"]


def test_match_by_skill_level_skips_completed(index):
    ctx = UserContext(completedCourses=["n8n-workflows"])
    ids = [c.id for c in match_by_skill_level(index, "advanced", ctx)]
    assert ids == ["rag-systems", "langchain-apps"]
