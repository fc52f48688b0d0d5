"""Rule-based on-page scoring: traditional SEO signals and GEO (generative engine) signals.

Each rule group appends exactly one finding and adds its points to the score.
Points are never subtracted; the final score is capped at 100.
"""

import re

from models import Finding, ScoreResult, WebsiteData
from schemas import validate_website_data

MAX_SCORE = 100

TITLE_MIN_LENGTH = 30
TITLE_MAX_LENGTH = 60
META_MIN_LENGTH = 120
META_MAX_LENGTH = 160
SLOW_LOAD_MS = 3000

SUMMARY_MARKERS = ("tl;dr", "summary", "key takeaways")
QUESTION_MARKERS = ("what is", "how to", "why")
ENTITY_YEARS = ("2023", "2024")
PROPER_NOUN_PATTERN = re.compile(r"\b[A-Z][a-z]+ [A-Z][a-z]+\b")


def _clamp(score: int) -> int:
    return max(0, min(MAX_SCORE, score))


def _title_rule(title: str) -> tuple[Finding, int]:
    if not title:
        return {
            "type": "error",
            "title": "Missing title tag",
            "description": "The page is missing a title tag, which is crucial for SEO.",
        }, 0
    length = len(title)
    if length < TITLE_MIN_LENGTH:
        return {
            "type": "warning",
            "title": "Title tag too short",
            "description": "Title tag should be between 30-60 characters for optimal SEO.",
            "details": f'Current: "{title}"',
        }, 10
    if length > TITLE_MAX_LENGTH:
        return {
            "type": "warning",
            "title": "Title tag too long",
            "description": "Title tag may be truncated in search results.",
            "details": f"Current length: {length} characters",
        }, 10
    return {
        "type": "success",
        "title": "Title tag length optimal",
        "description": "Title tag length is within the recommended range.",
        "details": f"Length: {length} characters",
    }, 20


def _meta_description_rule(meta_description: str) -> tuple[Finding, int]:
    if not meta_description:
        return {
            "type": "error",
            "title": "Missing meta description",
            "description": "Meta description is missing, which affects click-through rates.",
        }, 0
    length = len(meta_description)
    if length < META_MIN_LENGTH:
        return {
            "type": "warning",
            "title": "Meta description too short",
            "description": "Meta description should be 120-160 characters for best results.",
            "details": f"Current length: {length} characters",
        }, 10
    if length > META_MAX_LENGTH:
        return {
            "type": "warning",
            "title": "Meta description too long",
            "description": "Meta description may be truncated in search results.",
            "details": f"Current length: {length} characters",
        }, 10
    return {
        "type": "success",
        "title": "Meta description length optimal",
        "description": "Meta description length is within the recommended range.",
        "details": f"Length: {length} characters",
    }, 20


def _h1_rule(data: WebsiteData) -> tuple[Finding, int]:
    h1_count = sum(1 for heading in data["headings"] if heading["level"] == 1)
    if h1_count == 0:
        return {
            "type": "error",
            "title": "Missing H1 tag",
            "description": "Every page should have exactly one H1 tag.",
        }, 0
    if h1_count > 1:
        return {
            "type": "warning",
            "title": "Multiple H1 tags found",
            "description": "Use only one H1 per page and structure other headings hierarchically.",
            "metrics": {"H1 tags": h1_count},
        }, 10
    return {
        "type": "success",
        "title": "Proper H1 structure",
        "description": "Page has exactly one H1 tag.",
    }, 15


def _image_rule(data: WebsiteData) -> tuple[Finding, int] | None:
    total = len(data["images"])
    missing_alt = sum(1 for image in data["images"] if not image["has_alt"])
    if missing_alt > 0:
        return {
            "type": "error",
            "title": "Missing alt text on images",
            "description": f"{missing_alt} images found without alt attributes, affecting accessibility and SEO.",
            "metrics": {"Total images": total, "Missing alt": missing_alt},
        }, 0
    if total > 0:
        return {
            "type": "success",
            "title": "All images have alt text",
            "description": "Great job! All images have descriptive alt attributes.",
            "metrics": {"Total images": total},
        }, 15
    # No images: nothing to report.
    return None


def _schema_rule(data: WebsiteData) -> tuple[Finding, int]:
    if not data["has_schema"]:
        return {
            "type": "warning",
            "title": "No schema markup found",
            "description": "Consider adding structured data to help search engines understand your content.",
        }, 0
    return {
        "type": "success",
        "title": "Schema markup present",
        "description": "Structured data found on the page.",
        "details": f"Types: {', '.join(data['schema_types'])}",
    }, 15


def _load_time_rule(load_time: int) -> tuple[Finding, int]:
    metrics = {"Load time": f"{load_time}ms"}
    if load_time > SLOW_LOAD_MS:
        return {
            "type": "warning",
            "title": "Slow page load time",
            "description": "Page took longer than 3 seconds to load, which may affect user experience.",
            "metrics": metrics,
        }, 0
    return {
        "type": "success",
        "title": "Good page load time",
        "description": "Page loads within acceptable time limits.",
        "metrics": metrics,
    }, 15


def analyze_traditional_seo(data: WebsiteData) -> ScoreResult:
    """
    Score classic on-page SEO signals: title, meta description, H1, image alt text,
    schema markup and load time. Maximum raw sum is 100.
    """
    data = validate_website_data(data)
    outcomes = [
        _title_rule(data["title"]),
        _meta_description_rule(data["meta_description"]),
        _h1_rule(data),
        _image_rule(data),
        _schema_rule(data),
        _load_time_rule(data["load_time"]),
    ]

    results: list[Finding] = []
    score = 0
    for outcome in outcomes:
        if outcome is None:
            continue
        finding, points = outcome
        results.append(finding)
        score += points

    return {"results": results, "score": _clamp(score)}


def has_entities(content: str) -> bool:
    """Dates or two consecutive capitalized words stand in for named entities."""
    return any(year in content for year in ENTITY_YEARS) or bool(PROPER_NOUN_PATTERN.search(content))


def analyze_geo(data: WebsiteData) -> ScoreResult:
    """Score how easily AI answer engines can parse, summarize and quote the page."""
    data = validate_website_data(data)
    results: list[Finding] = []
    score = 0
    content_lower = data["content"].lower()

    if any(heading["level"] == 2 for heading in data["headings"]):
        results.append(
            {
                "type": "success",
                "title": "Content structured with H2 headings",
                "description": "Good use of heading structure that AI engines can easily parse and understand.",
            }
        )
        score += 20
    else:
        results.append(
            {
                "type": "warning",
                "title": "Poor heading structure for AI",
                "description": "Add H2 and H3 headings to improve AI readability and content parsing.",
            }
        )

    if any(marker in content_lower for marker in SUMMARY_MARKERS):
        results.append(
            {
                "type": "success",
                "title": "Summary content present",
                "description": "Content includes summary sections that AI tools can easily extract.",
            }
        )
        score += 25
    else:
        results.append(
            {
                "type": "error",
                "title": "No TL;DR summary found",
                "description": (
                    "AI tools prefer concise summaries. Add a TL;DR section to improve "
                    "AI-driven content discovery."
                ),
            }
        )

    has_qa_format = any(marker in content_lower for marker in QUESTION_MARKERS) or any(
        "?" in heading["text"] for heading in data["headings"]
    )
    if has_qa_format:
        results.append(
            {
                "type": "success",
                "title": "Question-answer format detected",
                "description": "Content addresses user questions directly, improving AI platform visibility.",
            }
        )
        score += 20
    else:
        results.append(
            {
                "type": "warning",
                "title": "Limited question-answer format",
                "description": (
                    "Content doesn't directly answer user intent queries. "
                    "Consider restructuring with Q&A sections."
                ),
            }
        )

    if data["has_schema"]:
        results.append(
            {
                "type": "success",
                "title": "Schema markup enhances AI understanding",
                "description": "Structured data helps AI platforms understand content relationships and context.",
            }
        )
        score += 20
    else:
        results.append(
            {
                "type": "error",
                "title": "Missing schema markup",
                "description": "No structured data found. Schema markup helps AI engines understand your content context.",
            }
        )

    if has_entities(data["content"]):
        results.append(
            {
                "type": "success",
                "title": "Good entity and semantic clarity",
                "description": "Content includes specific entities, dates, and proper nouns that improve AI understanding.",
            }
        )
        score += 15
    else:
        results.append(
            {
                "type": "warning",
                "title": "Moderate entity and semantic clarity",
                "description": (
                    "Consider adding more specific dates, locations, and definitions "
                    "to improve AI understanding."
                ),
            }
        )

    return {"results": results, "score": _clamp(score)}
