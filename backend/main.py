"""SEO + GEO Audit API – FastAPI app wiring scrape -> score -> store."""

import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from ai_visibility import analyze_ai_platform_visibility
from comparison import compare_websites
from content_service import empty_content_suggestions, generate_content_suggestions
from database import create_report, get_report, get_reports_by_url, init_db, list_reports
from errors import ScrapeError, StorageError, WebsiteDataError
from models import AuditReport, WebsiteData
from schemas import (
    AiVisibilityResponse,
    AnalyzeRequest,
    AuditReportResponse,
    CompareRequest,
    ComparisonResponse,
    VisibilityRequest,
    validate_website_data,
)
from scraper import scrape_website
from seo_analyzer import analyze_geo, analyze_traditional_seo

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="SEO + GEO Audit API",
    description="Traditional SEO and AI visibility scoring for web pages",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def startup() -> None:
    init_db()


def _scrape(url: str) -> WebsiteData:
    try:
        return scrape_website(url)
    except ScrapeError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc


def _analyze_and_store(
    url: str,
    data: WebsiteData,
    include_traditional_seo: bool = True,
    include_geo: bool = True,
    include_content_suggestions: bool = True,
) -> AuditReport:
    """Score `data`, substituting empty results for switched-off analyses, and store the report."""
    try:
        traditional = analyze_traditional_seo(data) if include_traditional_seo else {"results": [], "score": 0}
        geo = analyze_geo(data) if include_geo else {"results": [], "score": 0}
        suggestions = (
            generate_content_suggestions(data, geo["score"])
            if include_content_suggestions
            else empty_content_suggestions()
        )
    except WebsiteDataError as exc:
        logger.error("Scraped data for %s rejected: %s", url, exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    try:
        return create_report(
            {
                "url": url,
                "seo_score": traditional["score"],
                "ai_score": geo["score"],
                "traditional_seo_results": traditional["results"],
                "geo_results": geo["results"],
                "content_suggestions": suggestions,
            }
        )
    except StorageError as exc:
        logger.error("Storing report for %s failed: %s", url, exc)
        raise HTTPException(status_code=500, detail="Failed to store report") from exc


@app.post("/analyze", response_model=AuditReportResponse, response_model_exclude_none=True)
def analyze(body: AnalyzeRequest) -> AuditReport:
    """
    Pipeline: scrape page -> traditional SEO + GEO scoring -> content suggestions -> store.
    """
    logger.info("Analyzing %s", body.url)
    data = _scrape(body.url)
    return _analyze_and_store(
        body.url,
        data,
        include_traditional_seo=body.include_traditional_seo,
        include_geo=body.include_geo,
        include_content_suggestions=body.include_content_suggestions,
    )


@app.post("/ai-visibility", response_model=AiVisibilityResponse)
def ai_visibility(body: VisibilityRequest) -> dict:
    """Return the 12-factor AI platform visibility report. Not persisted."""
    data = _scrape(body.url)
    try:
        return analyze_ai_platform_visibility(data)
    except WebsiteDataError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@app.post("/compare", response_model=ComparisonResponse, response_model_exclude_none=True)
def compare(body: CompareRequest) -> dict:
    """Analyze and store both pages, then compare scores and AI visibility."""
    logger.info("Comparing %s with %s", body.url1, body.url2)
    data1 = _scrape(body.url1)
    data2 = _scrape(body.url2)
    # Reject both pages before either report is stored
    for url, data in ((body.url1, data1), (body.url2, data2)):
        try:
            validate_website_data(data)
        except WebsiteDataError as exc:
            logger.error("Scraped data for %s rejected: %s", url, exc)
            raise HTTPException(status_code=422, detail=str(exc)) from exc
    report1 = _analyze_and_store(body.url1, data1)
    report2 = _analyze_and_store(body.url2, data2)
    try:
        return compare_websites(
            data1,
            report1,
            data2,
            report2,
            analyze_ai_platform_visibility(data1),
            analyze_ai_platform_visibility(data2),
        )
    except WebsiteDataError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@app.get("/reports/{report_id}", response_model=AuditReportResponse, response_model_exclude_none=True)
def get_report_by_id(report_id: int) -> AuditReport:
    """Return a stored audit report."""
    try:
        report = get_report(report_id)
    except StorageError as exc:
        logger.error("Reading report %s failed: %s", report_id, exc)
        raise HTTPException(status_code=500, detail="Failed to retrieve report") from exc
    if report is None:
        raise HTTPException(status_code=404, detail="Report not found")
    return report


@app.get("/reports", response_model=list[AuditReportResponse], response_model_exclude_none=True)
def get_reports(url: str | None = None, limit: int = 20) -> list[AuditReport]:
    """Return recent reports, or every report for `url` when given."""
    try:
        if url:
            return get_reports_by_url(url)
        return list_reports(limit=limit)
    except StorageError as exc:
        logger.error("Listing reports failed: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to retrieve reports") from exc


@app.get("/health")
def health() -> dict:
    """Health check for deployment."""
    return {"status": "ok"}
