import pytest

from content_service import empty_content_suggestions, generate_ai_improvements, generate_content_suggestions


def _actions(improvements):
    return [item["action"] for item in improvements]


def test_low_score_includes_critical_items():
    improvements = generate_ai_improvements(30)
    assert len(improvements) == 6
    assert _actions(improvements)[:2] == ["Add TL;DR Summary Section", "Create FAQ Schema Markup"]
    assert [item["priority"] for item in improvements] == [1, 2, 3, 4, 5, 6]


def test_score_forty_accumulates_lower_tiers_and_truncates():
    actions = _actions(generate_ai_improvements(40))
    assert "Optimize for Voice Search Queries" in actions
    assert "Add Comparison Tables" not in actions
    assert "Link to Authoritative Sources" not in actions


def test_mid_score_skips_critical_tier():
    improvements = generate_ai_improvements(60)
    assert [item["priority"] for item in improvements] == [3, 4, 5, 6, 7]
    assert "Add TL;DR Summary Section" not in _actions(improvements)


def test_score_eighty_only_fine_tuning():
    assert _actions(generate_ai_improvements(80)) == ["Optimize for Voice Search Queries", "Add Comparison Tables"]


@pytest.mark.parametrize("score", [85, 90, 100])
def test_high_score_gets_polish_tier_only(score):
    improvements = generate_ai_improvements(score)
    assert _actions(improvements) == [
        "Link to Authoritative Sources",
        "Add Step-by-Step Instructions",
        "Implement Article Schema",
    ]
    assert all(item["impact"] == "low" for item in improvements)


@pytest.mark.parametrize("score", [0, 49, 50, 74, 75, 84, 85, 100])
def test_never_more_than_six(score):
    assert len(generate_ai_improvements(score)) <= 6


def test_suggestions_templates_are_static(make_page, rich_page):
    first = generate_content_suggestions(make_page(), 30)
    second = generate_content_suggestions(rich_page, 30)
    assert first == second
    assert set(first["ai_visibility"]) == {"chatgpt", "perplexity", "claude", "bard"}
    assert len(first["blog_titles"]) == 4
    assert len(first["faqs"]) == 4
    assert first["content_structure"][0] == "## What is SEO Optimization?"


def test_returned_templates_are_copies(empty_page):
    suggestions = generate_content_suggestions(empty_page, 10)
    suggestions["missing_keywords"].append("mutated")
    assert "mutated" not in generate_content_suggestions(empty_page, 10)["missing_keywords"]


def test_empty_suggestions_marks_platforms_low():
    empty = empty_content_suggestions()
    assert empty["ai_improvements"] == []
    assert set(empty["ai_visibility"].values()) == {"low"}
