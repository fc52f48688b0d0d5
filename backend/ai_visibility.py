"""12-factor AI platform visibility scoring.

Every factor is scored 0-100 from the scraped page alone, so the report is
reproducible for identical input. Overall score is the mean of the twelve.
"""

import re
from urllib.parse import urlparse

from models import AiVisibilityReport, FactorStatus, VisibilityFactor, VisibilityRecommendation, WebsiteData
from schemas import validate_website_data
from seo_analyzer import SLOW_LOAD_MS, has_entities

FACTOR_COUNT = 12
PASS_THRESHOLD = 80
WARNING_THRESHOLD = 50
MAX_RECOMMENDATIONS = 8
GENERIC_RECOMMENDATION_BELOW = 70

# Freshness is judged against a fixed year, never the clock.
REFERENCE_YEAR = 2025

WORD_RE = re.compile(r"[A-Za-z0-9']+")
ALPHA_WORD_RE = re.compile(r"[A-Za-z]+")
SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
VOWEL_GROUP_RE = re.compile(r"[aeiouy]+")
NUMBER_RE = re.compile(r"\b\d+(?:[.,]\d+)*\b")
PERCENT_RE = re.compile(r"\d+(?:\.\d+)?\s?%")
YEAR_RE = re.compile(r"\b(19\d{2}|20\d{2})\b")

QUESTION_WORDS = ("what", "how", "why", "when", "where", "which", "who", "can", "does", "is")
SUMMARY_FULL_MARKERS = ("tl;dr", "tldr")
SUMMARY_PARTIAL_MARKERS = ("key takeaways", "summary", "in short", "in a nutshell")
QUESTION_PHRASES = ("what is", "how to", "why")
FAQ_MARKERS = ("faq", "frequently asked")
FULL_SCHEMA_QA_TYPES = {"faqpage", "qapage"}
FULL_SCHEMA_CONTENT_TYPES = {"article", "blogposting", "newsarticle", "howto"}
TRUSTED_DOMAINS = (
    "wikipedia.org",
    "wikidata.org",
    "who.int",
    "nih.gov",
    "europa.eu",
    "reuters.com",
    "nature.com",
)
TRUSTED_SUFFIXES = (".gov", ".edu", ".gov.uk", ".ac.uk")
AUTHOR_MARKERS = ("written by", "author", "reviewed by", "posted by")
CITATION_MARKERS = ("according to", "source:", "sources", "study", "research", "cited")
UPDATE_MARKERS = ("updated", "last modified", "published")

FACTOR_REMEDIATIONS: dict[str, tuple[str, str, str]] = {
    "AI Crawlability": (
        "Make content accessible to AI crawlers",
        "Serve substantial text in the initial HTML, link related pages internally and keep load time under 3 seconds.",
        "AI crawlers can read and index the full page",
    ),
    "HTML Structure": (
        "Fix the heading hierarchy",
        "Use exactly one H1, then H2 sections with H3 subsections without skipping levels.",
        "AI engines can map the page outline",
    ),
    "Content Clarity": (
        "Shorten long sentences",
        "Keep sentences under 20 words on average and lead each paragraph with its main point.",
        "Passages become easier to quote verbatim",
    ),
    "Scannability": (
        "Break content into more sections",
        "Add a descriptive heading roughly every 300 words so each section answers one topic.",
        "AI tools can extract self-contained sections",
    ),
    "Summary Sections": (
        "Add a TL;DR summary section",
        "Place a 2-3 sentence summary of the main points at the top of the page.",
        "Summaries are the passages AI tools quote most often",
    ),
    "Q&A Format": (
        "Add question-based headings and an FAQ",
        "Phrase H2/H3 headings as the questions users ask (What is, How to, Why) and answer them directly.",
        "Matches the way users prompt AI assistants",
    ),
    "Schema Markup": (
        "Add FAQPage and Article schema",
        "Describe the page with JSON-LD structured data, including FAQPage for questions and Article for authorship.",
        "AI platforms understand entities and context",
    ),
    "Trusted Entities": (
        "Reference trusted sources and named entities",
        "Link to authoritative sources such as Wikipedia or government sites and name specific people, places and products.",
        "Improves entity recognition and citation confidence",
    ),
    "Data Richness": (
        "Include statistics and concrete figures",
        "Support claims with numbers, percentages and dated data points.",
        "AI answers favor sources with quotable facts",
    ),
    "Readability": (
        "Simplify vocabulary",
        "Replace long, complex words with plain language where possible.",
        "Content is easier to summarize accurately",
    ),
    "Content Freshness": (
        "Show when the content was last updated",
        "Add a visible last-updated date and refresh figures with current-year data.",
        "AI platforms prefer recent sources",
    ),
    "Credibility": (
        "Add author and source information",
        "Include an author byline, cite sources and link to your About and Contact pages.",
        "Signals expertise and trustworthiness",
    ),
}

GENERIC_RECOMMENDATION: VisibilityRecommendation = {
    "priority": "medium",
    "action": "Refresh content on a regular schedule",
    "description": "Review the page every few months, update statistics and note the revision date.",
    "impact": "Keeps the page eligible for time-sensitive AI answers",
}


def factor_status(score: int) -> FactorStatus:
    if score >= PASS_THRESHOLD:
        return "pass"
    if score >= WARNING_THRESHOLD:
        return "warning"
    return "fail"


def _count_syllables(word: str) -> int:
    word = word.lower()
    count = len(VOWEL_GROUP_RE.findall(word))
    if word.endswith("e") and count > 1:
        count -= 1
    return max(count, 1)


def _sentences(content: str) -> list[str]:
    return [part for part in SENTENCE_SPLIT_RE.split(content) if WORD_RE.search(part)]


def _host(href: str) -> str:
    return (urlparse(href).hostname or "").lower()


def _is_trusted(href: str) -> bool:
    host = _host(href)
    if not host:
        return False
    if host.endswith(TRUSTED_SUFFIXES):
        return True
    return any(host == domain or host.endswith("." + domain) for domain in TRUSTED_DOMAINS)


def _crawlability(data: WebsiteData) -> tuple[int, str]:
    word_count = data["word_count"]
    score = 0
    if word_count >= 300:
        score += 50
    elif word_count >= 100:
        score += 30
    elif word_count > 0:
        score += 10
    internal_links = sum(1 for link in data["links"] if link["is_internal"])
    if internal_links:
        score += 25
    if data["load_time"] <= SLOW_LOAD_MS:
        score += 25
    return score, (
        f"{word_count} words of readable text, {internal_links} internal links, "
        f"loaded in {data['load_time']}ms."
    )


def _html_structure(data: WebsiteData) -> tuple[int, str]:
    levels = [heading["level"] for heading in data["headings"]]
    h1_count = levels.count(1)
    score = 40 if h1_count == 1 else 20 if h1_count > 1 else 0
    if 2 in levels:
        score += 25
    if 3 in levels:
        score += 15
    skipped = any(current - previous > 1 for previous, current in zip(levels, levels[1:]))
    if levels and not skipped:
        score += 20
    hierarchy = "skips levels" if skipped else "is sequential"
    return score, f"{h1_count} H1, {levels.count(2)} H2, {levels.count(3)} H3; heading hierarchy {hierarchy}."


def _content_clarity(data: WebsiteData) -> tuple[int, str]:
    sentences = _sentences(data["content"])
    if not sentences:
        return 0, "No sentences found in the page content."
    average = sum(len(WORD_RE.findall(sentence)) for sentence in sentences) / len(sentences)
    if average <= 20:
        score = 100
    elif average <= 25:
        score = 75
    elif average <= 30:
        score = 50
    else:
        score = 25
    return score, f"Average sentence length: {average:.1f} words."


def _scannability(data: WebsiteData) -> tuple[int, str]:
    word_count = data["word_count"]
    heading_count = len(data["headings"])
    if word_count == 0:
        return 0, "No content to scan."
    expected = max(1.0, word_count / 300)
    score = min(100, round(heading_count / expected * 100))
    return score, f"{heading_count} headings for {word_count} words (target: one per 300 words)."


def _summary_sections(data: WebsiteData) -> tuple[int, str]:
    text = " ".join([data["content"]] + [heading["text"] for heading in data["headings"]]).lower()
    if any(marker in text for marker in SUMMARY_FULL_MARKERS):
        return 100, "TL;DR section found."
    if any(marker in text for marker in SUMMARY_PARTIAL_MARKERS):
        return 70, "Summary wording found, but no explicit TL;DR section."
    return 0, "No TL;DR or summary section found."


def _is_question(text: str) -> bool:
    stripped = text.strip().lower()
    if stripped.endswith("?"):
        return True
    words = stripped.split()
    return bool(words) and words[0] in QUESTION_WORDS


def _qa_format(data: WebsiteData) -> tuple[int, str]:
    content_lower = data["content"].lower()
    question_headings = sum(1 for heading in data["headings"] if _is_question(heading["text"]))
    score = question_headings * 35
    if any(marker in content_lower for marker in FAQ_MARKERS):
        score += 20
    if any(phrase in content_lower for phrase in QUESTION_PHRASES):
        score += 20
    return min(100, score), f"{question_headings} question-style headings."


def _schema_markup(data: WebsiteData) -> tuple[int, str]:
    if not data["has_schema"]:
        return 0, "No structured data found."
    types = {schema_type.lower() for schema_type in data["schema_types"]}
    score = 50
    if types & FULL_SCHEMA_QA_TYPES:
        score += 25
    if types & FULL_SCHEMA_CONTENT_TYPES:
        score += 25
    return score, f"Schema types: {', '.join(data['schema_types']) or 'unspecified'}."


def _trusted_entities(data: WebsiteData) -> tuple[int, str]:
    trusted = sum(1 for link in data["links"] if not link["is_internal"] and _is_trusted(link["href"]))
    score = min(60, trusted * 20)
    entities = has_entities(data["content"])
    if entities:
        score += 40
    named = "named entities present" if entities else "few named entities"
    return score, f"{trusted} links to trusted sources; {named}."


def _data_richness(data: WebsiteData) -> tuple[int, str]:
    numbers = len(NUMBER_RE.findall(data["content"]))
    percentages = len(PERCENT_RE.findall(data["content"]))
    score = min(100, numbers * 10 + percentages * 10)
    return score, f"{numbers} numeric values, {percentages} percentages."


def _readability(data: WebsiteData) -> tuple[int, str]:
    words = ALPHA_WORD_RE.findall(data["content"])
    if not words:
        return 0, "No readable words found."
    complex_words = sum(1 for word in words if _count_syllables(word) >= 3)
    ratio = complex_words / len(words)
    if ratio <= 0.10:
        score = 100
    elif ratio <= 0.15:
        score = 80
    elif ratio <= 0.20:
        score = 60
    elif ratio <= 0.30:
        score = 40
    else:
        score = 20
    return score, f"{ratio:.0%} of words have three or more syllables."


def _freshness(data: WebsiteData) -> tuple[int, str]:
    years = [int(year) for year in YEAR_RE.findall(data["content"])]
    latest = max(years, default=0)
    if latest >= REFERENCE_YEAR - 1:
        score = 80
    elif latest >= REFERENCE_YEAR - 3:
        score = 50
    elif latest:
        score = 30
    else:
        score = 0
    if any(marker in data["content"].lower() for marker in UPDATE_MARKERS):
        score += 20
    described = f"Most recent year mentioned: {latest}." if latest else "No dates mentioned."
    return min(100, score), described


def _credibility(data: WebsiteData) -> tuple[int, str]:
    content_lower = data["content"].lower()
    signals: list[str] = []
    score = 0
    if any(marker in content_lower for marker in AUTHOR_MARKERS):
        score += 30
        signals.append("author")
    if any(marker in content_lower for marker in CITATION_MARKERS):
        score += 30
        signals.append("citations")
    external_links = sum(1 for link in data["links"] if not link["is_internal"])
    if external_links >= 2:
        score += 20
        signals.append("outbound links")
    elif external_links == 1:
        score += 10
        signals.append("outbound link")
    about_or_contact = any(
        marker in (link["href"] + " " + link["text"]).lower()
        for link in data["links"]
        if link["is_internal"]
        for marker in ("about", "contact")
    )
    if about_or_contact:
        score += 20
        signals.append("about/contact page")
    found = ", ".join(signals) if signals else "none"
    return score, f"Credibility signals: {found}."


FACTORS = [
    ("AI Crawlability", _crawlability),
    ("HTML Structure", _html_structure),
    ("Content Clarity", _content_clarity),
    ("Scannability", _scannability),
    ("Summary Sections", _summary_sections),
    ("Q&A Format", _qa_format),
    ("Schema Markup", _schema_markup),
    ("Trusted Entities", _trusted_entities),
    ("Data Richness", _data_richness),
    ("Readability", _readability),
    ("Content Freshness", _freshness),
    ("Credibility", _credibility),
]


def _summarize(overall_score: int, factors: list[VisibilityFactor]) -> str:
    fails = sum(1 for factor in factors if factor["status"] == "fail")
    warnings = sum(1 for factor in factors if factor["status"] == "warning")
    if overall_score >= 80:
        return (
            f"Excellent AI platform visibility. {fails} factors failing and "
            f"{warnings} with minor room for improvement."
        )
    if overall_score >= 60:
        return (
            f"Good AI platform visibility. Fixing {fails} failing and {warnings} "
            f"warning factors would make the page a stronger citation source."
        )
    if overall_score >= 40:
        return (
            f"Moderate AI platform visibility. {fails} factors are failing and "
            f"{warnings} need improvement."
        )
    return (
        f"Poor AI platform visibility. {fails} factors are failing and {warnings} "
        f"need improvement; start with the high priority recommendations."
    )


def _recommend(overall_score: int, factors: list[VisibilityFactor]) -> list[VisibilityRecommendation]:
    recommendations: list[VisibilityRecommendation] = []
    for status, priority in (("fail", "high"), ("warning", "medium")):
        for factor in factors:
            if factor["status"] != status:
                continue
            action, description, impact = FACTOR_REMEDIATIONS[factor["factor"]]
            recommendations.append(
                {"priority": priority, "action": action, "description": description, "impact": impact}
            )
    if overall_score < GENERIC_RECOMMENDATION_BELOW:
        recommendations.append(dict(GENERIC_RECOMMENDATION))
    return recommendations[:MAX_RECOMMENDATIONS]


def analyze_ai_platform_visibility(data: WebsiteData) -> AiVisibilityReport:
    """
    Score the page on twelve AI-visibility factors.

    overall_score is round(sum / 1200 * 100); each factor's status follows its
    own score (pass >= 80, warning >= 50, else fail). Recommendations list
    failing factors first, then warnings, then one generic freshness item
    when overall_score < 70, capped at 8.
    """
    data = validate_website_data(data)
    factors: list[VisibilityFactor] = []
    for name, scorer in FACTORS:
        score, description = scorer(data)
        score = max(0, min(100, score))
        factors.append(
            {"factor": name, "score": score, "description": description, "status": factor_status(score)}
        )

    overall_score = round(sum(factor["score"] for factor in factors) / (FACTOR_COUNT * 100) * 100)
    return {
        "overall_score": overall_score,
        "summary": _summarize(overall_score, factors),
        "factors": factors,
        "recommendations": _recommend(overall_score, factors),
    }
