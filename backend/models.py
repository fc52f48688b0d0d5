"""Data models and types used across the backend.

Database table definitions are in database.py.
Types for scraper, analyzer and comparison output live here.
"""

from typing import Literal, TypedDict

FindingType = Literal["success", "warning", "error"]
FactorStatus = Literal["pass", "warning", "fail"]
VisibilityLevel = Literal["low", "medium", "high"]


class Heading(TypedDict):
    level: int
    text: str


class Image(TypedDict):
    src: str
    alt: str
    has_alt: bool


class Link(TypedDict):
    href: str
    text: str
    is_internal: bool


class WebsiteData(TypedDict):
    """Structured output from the page scraper. Sole input to scoring."""

    title: str
    meta_description: str
    headings: list[Heading]
    images: list[Image]
    links: list[Link]
    content: str
    has_schema: bool
    schema_types: list[str]
    load_time: int
    word_count: int


class _FindingBase(TypedDict):
    type: FindingType
    title: str
    description: str


class Finding(_FindingBase, total=False):
    """One observation about one aspect of a page."""

    details: str
    metrics: dict[str, str | int]


class ScoreResult(TypedDict):
    results: list[Finding]
    score: int


class VisibilityFactor(TypedDict):
    factor: str
    score: int
    description: str
    status: FactorStatus


class VisibilityRecommendation(TypedDict):
    priority: Literal["high", "medium"]
    action: str
    description: str
    impact: str


class AiVisibilityReport(TypedDict):
    """12-factor AI platform visibility report."""

    overall_score: int
    summary: str
    factors: list[VisibilityFactor]
    recommendations: list[VisibilityRecommendation]


class BlogTitle(TypedDict):
    title: str
    target: str


class Faq(TypedDict):
    question: str
    answer: str


class AiImprovement(TypedDict):
    action: str
    description: str
    impact: VisibilityLevel
    priority: int


class ContentSuggestions(TypedDict):
    missing_keywords: list[str]
    blog_titles: list[BlogTitle]
    content_structure: list[str]
    faqs: list[Faq]
    ai_visibility: dict[str, VisibilityLevel]
    ai_improvements: list[AiImprovement]


class AuditReport(TypedDict):
    """Stored audit report as returned by database.py."""

    id: int
    url: str
    seo_score: int
    ai_score: int
    traditional_seo_results: list[Finding]
    geo_results: list[Finding]
    content_suggestions: ContentSuggestions
    created_at: str


class KeyDifference(TypedDict):
    category: Literal["seo", "ai", "visibility"]
    aspect: str
    url1_value: str
    url2_value: str
    recommendation: str


class _DifferencesBase(TypedDict):
    seo_score_diff: int
    ai_score_diff: int
    better_performer: Literal["url1", "url2"]
    key_differences: list[KeyDifference]


class Differences(_DifferencesBase, total=False):
    ai_visibility_diff: int


class ComparisonResult(TypedDict):
    url1_report: AuditReport
    url2_report: AuditReport
    differences: Differences
