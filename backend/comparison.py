"""Side-by-side comparison of two scored pages."""

from models import AiVisibilityReport, AuditReport, ComparisonResult, KeyDifference, WebsiteData
from schemas import validate_website_data

SCORE_DIFF_THRESHOLD = 10
VISIBILITY_DIFF_THRESHOLD = 15


def _has_h2(data: WebsiteData) -> bool:
    return any(heading["level"] == 2 for heading in data["headings"])


def _seo_differences(data1: WebsiteData, data2: WebsiteData, seo_score_diff: int) -> list[KeyDifference]:
    if seo_score_diff > 0:
        title_recommendation = "URL2 has better title length optimization (50-60 characters is ideal)"
    else:
        title_recommendation = "URL1 has better title length optimization (50-60 characters is ideal)"

    def meta_value(data: WebsiteData) -> str:
        return f"{len(data['meta_description'])} chars" if data["meta_description"] else "Missing"

    return [
        {
            "category": "seo",
            "aspect": "Title Tag Optimization",
            "url1_value": f"{len(data1['title'])} characters",
            "url2_value": f"{len(data2['title'])} characters",
            "recommendation": title_recommendation,
        },
        {
            "category": "seo",
            "aspect": "Meta Description",
            "url1_value": meta_value(data1),
            "url2_value": meta_value(data2),
            "recommendation": "Meta description should be 150-160 characters for best results",
        },
    ]


def _ai_differences(data1: WebsiteData, data2: WebsiteData) -> list[KeyDifference]:
    def structure(data: WebsiteData) -> str:
        return "Has H2 structure" if _has_h2(data) else "Poor heading structure"

    def tldr(data: WebsiteData) -> str:
        return "Present" if "tl;dr" in data["content"].lower() else "Missing"

    def schema(data: WebsiteData) -> str:
        return f"{len(data['schema_types'])} types" if data["has_schema"] else "None"

    return [
        {
            "category": "ai",
            "aspect": "Content Structure",
            "url1_value": structure(data1),
            "url2_value": structure(data2),
            "recommendation": "Use H2/H3 headings for better AI content parsing",
        },
        {
            "category": "ai",
            "aspect": "TL;DR Summary",
            "url1_value": tldr(data1),
            "url2_value": tldr(data2),
            "recommendation": "Add TL;DR section for better AI tool visibility",
        },
        {
            "category": "ai",
            "aspect": "Schema Markup",
            "url1_value": schema(data1),
            "url2_value": schema(data2),
            "recommendation": "Implement FAQ and Article schema for AI platforms",
        },
    ]


def _visibility_differences(
    visibility1: AiVisibilityReport, visibility2: AiVisibilityReport
) -> list[KeyDifference]:
    differences: list[KeyDifference] = [
        {
            "category": "visibility",
            "aspect": "Overall AI Visibility",
            "url1_value": f"{visibility1['overall_score']}%",
            "url2_value": f"{visibility2['overall_score']}%",
            "recommendation": "Work through the high priority AI visibility recommendations first",
        }
    ]
    factors2 = {factor["factor"]: factor for factor in visibility2["factors"]}
    for factor1 in visibility1["factors"]:
        factor2 = factors2.get(factor1["factor"])
        if factor2 is None or factor2["status"] == factor1["status"]:
            continue
        differences.append(
            {
                "category": "visibility",
                "aspect": factor1["factor"],
                "url1_value": f"{factor1['score']} ({factor1['status']})",
                "url2_value": f"{factor2['score']} ({factor2['status']})",
                "recommendation": f"Bring {factor1['factor']} up to a passing score (80+) on both pages",
            }
        )
    return differences


def compare_websites(
    data1: WebsiteData,
    report1: AuditReport,
    data2: WebsiteData,
    report2: AuditReport,
    ai_visibility1: AiVisibilityReport | None = None,
    ai_visibility2: AiVisibilityReport | None = None,
) -> ComparisonResult:
    """
    Compare two reports. Diffs are report2 minus report1, so a positive total
    makes url2 the better performer. Key differences are only listed for
    categories whose diff exceeds its threshold.

    The two AI visibility reports are used together or not at all; passing
    only one raises ValueError.
    """
    if (ai_visibility1 is None) != (ai_visibility2 is None):
        raise ValueError("ai_visibility1 and ai_visibility2 must be given together")

    data1 = validate_website_data(data1)
    data2 = validate_website_data(data2)

    seo_score_diff = report2["seo_score"] - report1["seo_score"]
    ai_score_diff = report2["ai_score"] - report1["ai_score"]
    total = seo_score_diff + ai_score_diff

    ai_visibility_diff = None
    if ai_visibility1 is not None and ai_visibility2 is not None:
        ai_visibility_diff = ai_visibility2["overall_score"] - ai_visibility1["overall_score"]
        total += ai_visibility_diff

    key_differences: list[KeyDifference] = []
    if abs(seo_score_diff) > SCORE_DIFF_THRESHOLD:
        key_differences.extend(_seo_differences(data1, data2, seo_score_diff))
    if abs(ai_score_diff) > SCORE_DIFF_THRESHOLD:
        key_differences.extend(_ai_differences(data1, data2))
    if ai_visibility_diff is not None and abs(ai_visibility_diff) > VISIBILITY_DIFF_THRESHOLD:
        key_differences.extend(_visibility_differences(ai_visibility1, ai_visibility2))

    differences = {
        "seo_score_diff": seo_score_diff,
        "ai_score_diff": ai_score_diff,
        "better_performer": "url2" if total > 0 else "url1",
        "key_differences": key_differences,
    }
    if ai_visibility_diff is not None:
        differences["ai_visibility_diff"] = ai_visibility_diff

    return {"url1_report": report1, "url2_report": report2, "differences": differences}
