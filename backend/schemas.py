"""Pydantic schemas for API request/response and scraped-data validation."""

from typing import Literal

from pydantic import BaseModel, Field, StrictBool, StrictInt, StrictStr, ValidationError, field_validator

from errors import WebsiteDataError
from models import WebsiteData


class HeadingModel(BaseModel):
    level: StrictInt = Field(ge=1, le=6)
    text: StrictStr


class ImageModel(BaseModel):
    src: StrictStr
    alt: StrictStr
    has_alt: StrictBool


class LinkModel(BaseModel):
    href: StrictStr
    text: StrictStr
    is_internal: StrictBool


class WebsiteDataModel(BaseModel):
    """Contract for data handed from the scraper to the analyzers."""

    title: StrictStr
    meta_description: StrictStr
    headings: list[HeadingModel]
    images: list[ImageModel]
    links: list[LinkModel]
    content: StrictStr
    has_schema: StrictBool
    schema_types: list[StrictStr]
    load_time: StrictInt = Field(ge=0)
    word_count: StrictInt = Field(ge=0)

    @field_validator("schema_types")
    @classmethod
    def dedupe_schema_types(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))


def validate_website_data(data: object) -> WebsiteData:
    """
    Check `data` against the WebsiteData contract and return a normalized copy.
    Raises WebsiteDataError naming the first offending field.
    """
    try:
        model = WebsiteDataModel.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "<root>"
        raise WebsiteDataError(field, first["msg"]) from exc
    return model.model_dump()


def _clean_url(value: object) -> str:
    text = str(value or "").strip()
    if not text.startswith(("http://", "https://")):
        raise ValueError("Please enter a valid URL")
    return text


class AnalyzeRequest(BaseModel):
    """Request body for POST /analyze."""

    url: str
    include_traditional_seo: bool = True
    include_geo: bool = True
    include_content_suggestions: bool = True

    @field_validator("url", mode="before")
    @classmethod
    def normalize_url(cls, value: object) -> str:
        return _clean_url(value)


class VisibilityRequest(BaseModel):
    """Request body for POST /ai-visibility."""

    url: str

    @field_validator("url", mode="before")
    @classmethod
    def normalize_url(cls, value: object) -> str:
        return _clean_url(value)


class CompareRequest(BaseModel):
    """Request body for POST /compare."""

    url1: str
    url2: str

    @field_validator("url1", "url2", mode="before")
    @classmethod
    def normalize_urls(cls, value: object) -> str:
        return _clean_url(value)


class FindingModel(BaseModel):
    type: Literal["success", "warning", "error"]
    title: str
    description: str
    details: str | None = None
    metrics: dict[str, str | int] | None = None


class BlogTitleModel(BaseModel):
    title: str
    target: str


class FaqModel(BaseModel):
    question: str
    answer: str


class AiImprovementModel(BaseModel):
    action: str
    description: str
    impact: Literal["high", "medium", "low"]
    priority: int


class ContentSuggestionsModel(BaseModel):
    missing_keywords: list[str]
    blog_titles: list[BlogTitleModel]
    content_structure: list[str]
    faqs: list[FaqModel]
    ai_visibility: dict[str, Literal["low", "medium", "high"]]
    ai_improvements: list[AiImprovementModel]


class AuditReportResponse(BaseModel):
    """Stored audit report returned by /analyze and /reports."""

    id: int
    url: str
    seo_score: int
    ai_score: int
    traditional_seo_results: list[FindingModel]
    geo_results: list[FindingModel]
    content_suggestions: ContentSuggestionsModel
    created_at: str


class VisibilityFactorModel(BaseModel):
    factor: str
    score: int
    description: str
    status: Literal["pass", "warning", "fail"]


class VisibilityRecommendationModel(BaseModel):
    priority: Literal["high", "medium"]
    action: str
    description: str
    impact: str


class AiVisibilityResponse(BaseModel):
    """12-factor AI visibility report returned by /ai-visibility."""

    overall_score: int
    summary: str
    factors: list[VisibilityFactorModel]
    recommendations: list[VisibilityRecommendationModel]


class KeyDifferenceModel(BaseModel):
    category: Literal["seo", "ai", "visibility"]
    aspect: str
    url1_value: str
    url2_value: str
    recommendation: str


class DifferencesModel(BaseModel):
    seo_score_diff: int
    ai_score_diff: int
    ai_visibility_diff: int | None = None
    better_performer: Literal["url1", "url2"]
    key_differences: list[KeyDifferenceModel]


class ComparisonResponse(BaseModel):
    """Side-by-side comparison returned by /compare."""

    url1_report: AuditReportResponse
    url2_report: AuditReportResponse
    differences: DifferencesModel
