import pytest

import ai_visibility
from ai_visibility import analyze_ai_platform_visibility, factor_status


def _factor(report, name):
    return next(f for f in report["factors"] if f["factor"] == name)


@pytest.mark.parametrize(
    "score,status",
    [(100, "pass"), (80, "pass"), (79, "warning"), (50, "warning"), (49, "fail"), (0, "fail")],
)
def test_factor_status_thresholds(score, status):
    assert factor_status(score) == status


def test_report_shape_and_overall_formula(rich_page):
    report = analyze_ai_platform_visibility(rich_page)
    assert len(report["factors"]) == 12
    scores = [f["score"] for f in report["factors"]]
    assert report["overall_score"] == round(sum(scores) / 1200 * 100)
    for factor in report["factors"]:
        assert 0 <= factor["score"] <= 100
        assert factor["status"] == factor_status(factor["score"])
    assert len(report["recommendations"]) <= 8


def test_rich_page_is_excellent(rich_page):
    report = analyze_ai_platform_visibility(rich_page)
    assert report["overall_score"] >= 80
    assert report["summary"].startswith("Excellent")
    assert _factor(report, "Summary Sections")["score"] == 100
    assert _factor(report, "Schema Markup")["score"] == 100
    assert _factor(report, "Trusted Entities")["score"] == 100
    assert _factor(report, "Credibility")["score"] == 100


def test_empty_page_is_poor_and_capped(empty_page):
    report = analyze_ai_platform_visibility(empty_page)
    assert report["overall_score"] == 2
    assert report["summary"].startswith("Poor")
    assert "12 factors are failing" in report["summary"]
    assert len(report["recommendations"]) == 8
    assert all(r["priority"] == "high" for r in report["recommendations"])
    assert report["recommendations"][0]["action"] == "Make content accessible to AI crawlers"


def test_failing_factors_come_before_warnings(make_page):
    page = make_page(
        content="In summary, the tool works.",
        word_count=5,
        has_schema=True,
        schema_types=["Organization"],
    )
    report = analyze_ai_platform_visibility(page)
    priorities = [r["priority"] for r in report["recommendations"]]
    assert priorities == sorted(priorities, key=lambda p: 0 if p == "high" else 1)
    assert _factor(report, "Summary Sections")["status"] == "warning"
    assert _factor(report, "Schema Markup")["score"] == 50


def test_generic_recommendation_when_overall_below_seventy():
    factors = [
        {"factor": name, "score": 90, "description": "", "status": "pass"} for name, _ in ai_visibility.FACTORS
    ]
    factors[4] = {"factor": "Summary Sections", "score": 0, "description": "", "status": "fail"}
    factors[6] = {"factor": "Schema Markup", "score": 60, "description": "", "status": "warning"}

    recommendations = ai_visibility._recommend(65, factors)
    assert [r["action"] for r in recommendations] == [
        "Add a TL;DR summary section",
        "Add FAQPage and Article schema",
        "Refresh content on a regular schedule",
    ]
    assert [r["priority"] for r in recommendations] == ["high", "medium", "medium"]

    assert len(ai_visibility._recommend(75, factors)) == 2


def test_heading_hierarchy_skip_lowers_structure(make_page):
    sequential = make_page(headings=[{"level": 1, "text": "A"}, {"level": 2, "text": "B"}, {"level": 3, "text": "C"}])
    skipping = make_page(headings=[{"level": 1, "text": "A"}, {"level": 3, "text": "C"}, {"level": 2, "text": "B"}])
    assert _factor(analyze_ai_platform_visibility(sequential), "HTML Structure")["score"] == 100
    assert _factor(analyze_ai_platform_visibility(skipping), "HTML Structure")["score"] == 80


def test_freshness_uses_fixed_reference_year(make_page):
    old = analyze_ai_platform_visibility(make_page(content="Published in 2019."))
    recent = analyze_ai_platform_visibility(make_page(content="Figures from 2023."))
    assert _factor(old, "Content Freshness")["score"] == 50
    assert _factor(recent, "Content Freshness")["score"] == 50
    assert _factor(analyze_ai_platform_visibility(make_page(content="See 2019.")), "Content Freshness")["score"] == 30


def test_long_sentences_reduce_clarity(make_page):
    long_sentence = " ".join(["word"] * 40) + "."
    report = analyze_ai_platform_visibility(make_page(content=long_sentence, word_count=40))
    assert _factor(report, "Content Clarity")["score"] == 25


def test_report_is_deterministic(rich_page):
    assert analyze_ai_platform_visibility(rich_page) == analyze_ai_platform_visibility(rich_page)
