from course_advisor.normalize import (
    basic_clean,
    clamp_text_length,
    extract_keywords,
    normalize_query,
    strip_html,
)


def test_normalize_query_lowercases_and_strips_punctuation():
    assert normalize_query("  Hello, World!  ") == "hello world"
    assert normalize_query("N8N/Make (basis)") == "n8n make basis"


def test_normalize_query_keeps_question_marks():
    assert normalize_query("What is RAG?") == "what is rag?"


def test_normalize_query_empty():
    assert normalize_query("") == ""
    assert normalize_query(None) == ""


def test_extract_keywords_drops_short_and_stop_words():
    assert extract_keywords("what is the rag of an llm") == ["what", "rag", "llm"]
    assert extract_keywords("de cursus voor een beginner") == ["cursus", "beginner"]


def test_extract_keywords_empty():
    assert extract_keywords("") == []


def test_strip_html_removes_tags():
    assert strip_html("<p>Hi <b>there</b>.</p>") == "Hi there."
    assert strip_html("plain text") == "plain text"
    assert strip_html("") == ""


def test_basic_clean_collapses_whitespace():
    assert basic_clean("  a\n\n  b\t c ") == "a b c"
    assert basic_clean(None) == ""


def test_clamp_text_length():
    assert clamp_text_length("abcdef", max_chars=3) == "abc"
    assert clamp_text_length("ab", max_chars=3) == "ab"


def test_strip_html_drops_embedded_scripts_and_players():
    body = (
        "<h2>Chunking</h2><script>track('view')</script>"
        "<p>Split documents , then embed.</p><iframe>player</iframe><style>p{}</style>"
    )
    assert strip_html(body) == "Chunking Split documents, then embed."


def test_basic_clean_normalizes_unicode_in_markup():
    assert basic_clean("<p>Cafe\u0301  <b>menu</b></p>") == "Caf\u00e9 menu"
