"""Content suggestions and AI-visibility improvements.

Keywords, blog titles, outline, FAQs and per-platform labels are fixed
templates and do not depend on the page. Only ai_improvements follows the
page's AI score.
"""

from models import AiImprovement, ContentSuggestions, WebsiteData
from schemas import validate_website_data

MAX_IMPROVEMENTS = 6

MISSING_KEYWORDS = [
    "SEO optimization",
    "website performance",
    "search engine ranking",
    "content marketing",
    "digital marketing",
]

BLOG_TITLES = [
    {
        "title": "How to Improve Your Page Speed for Better Rankings in 2024",
        "target": "page speed optimization, Core Web Vitals",
    },
    {
        "title": "The Complete Guide to AI-Friendly Content Creation",
        "target": "AI optimization, content structure",
    },
    {
        "title": "SEO vs GEO: What's the Difference and Why It Matters",
        "target": "generative engine optimization, SEO comparison",
    },
    {
        "title": "Schema Markup: The Secret to Better AI Visibility",
        "target": "structured data, schema implementation",
    },
]

CONTENT_STRUCTURE = [
    "## What is SEO Optimization?",
    "### Definition and Core Principles",
    "### Why SEO Matters in 2024",
    "## Traditional SEO vs. AI Optimization",
    "### Search Engine Optimization Basics",
    "### Generative Engine Optimization (GEO)",
    "## Step-by-Step Implementation Guide",
    "### Technical SEO Checklist",
    "### Content Optimization Strategies",
    "## Measuring Success",
    "### Key Performance Indicators",
    "### Tools and Analytics",
]

FAQS = [
    {
        "question": "What is a good page speed score?",
        "answer": (
            "A good page speed score is above 90 for mobile and desktop. Core Web Vitals should meet "
            "Google's thresholds: LCP under 2.5s, FID under 100ms, and CLS under 0.1."
        ),
    },
    {
        "question": "How can I optimize images without losing quality?",
        "answer": (
            "Use modern formats like WebP or AVIF, implement lazy loading, compress images to 80-85% "
            "quality, and serve responsive images using srcset attributes."
        ),
    },
    {
        "question": "What's the difference between SEO and GEO?",
        "answer": (
            "SEO optimizes for search engines like Google, while GEO (Generative Engine Optimization) "
            "optimizes for AI platforms like ChatGPT and Perplexity that generate direct answers."
        ),
    },
    {
        "question": "How important is schema markup for AI visibility?",
        "answer": (
            "Schema markup is crucial for AI platforms to understand your content context, entity "
            "relationships, and factual information, significantly improving visibility in "
            "AI-generated responses."
        ),
    },
]

AI_VISIBILITY = {
    "chatgpt": "medium",
    "perplexity": "low",
    "claude": "medium",
    "bard": "low",
}

# (upper bound on ai_score, improvements). None marks the ">= 85" tier.
IMPROVEMENT_TIERS: list[tuple[int | None, list[tuple[str, str, str]]]] = [
    (
        50,
        [
            (
                "Add TL;DR Summary Section",
                "Add a 2-3 line summary at the top of the page covering the main points for AI tools.",
                "high",
            ),
            (
                "Create FAQ Schema Markup",
                "Add common questions and their answers as structured data so AI can parse them easily.",
                "high",
            ),
        ],
    ),
    (
        75,
        [
            (
                "Improve Content Structure with Clear Headings",
                "Use H2/H3 headings that directly answer questions (What is, How to, Why).",
                "high",
            ),
            (
                'Add "People Also Ask" Section',
                "Add related questions users commonly ask, each with a short answer.",
                "medium",
            ),
            (
                "Include Specific Dates and Statistics",
                "Add the current year, numbers and specific data points that AI tools can reference.",
                "medium",
            ),
        ],
    ),
    (
        85,
        [
            (
                "Optimize for Voice Search Queries",
                "Add natural language phrases people use when asking voice assistants.",
                "medium",
            ),
            (
                "Add Comparison Tables",
                "Present options, features or alternatives in table format.",
                "medium",
            ),
        ],
    ),
    (
        None,
        [
            (
                "Link to Authoritative Sources",
                "Reference Wikipedia, government sites and other trusted sources for credibility.",
                "low",
            ),
            (
                "Add Step-by-Step Instructions",
                "Convert process-based content into numbered lists.",
                "low",
            ),
            (
                "Implement Article Schema",
                "Add structured data for publisher, author and publication date.",
                "low",
            ),
        ],
    ),
]


def generate_ai_improvements(ai_score: int) -> list[AiImprovement]:
    """
    Build the tiered improvement list for `ai_score`, top 6 in priority order.

    Tiers below 50, 75 and 85 accumulate; the final tier only applies at 85+.
    """
    improvements: list[AiImprovement] = []
    priority = 0
    for upper_bound, items in IMPROVEMENT_TIERS:
        unlocked = ai_score >= 85 if upper_bound is None else ai_score < upper_bound
        for action, description, impact in items:
            priority += 1
            if unlocked:
                improvements.append(
                    {"action": action, "description": description, "impact": impact, "priority": priority}
                )
    return improvements[:MAX_IMPROVEMENTS]


def generate_content_suggestions(data: WebsiteData, ai_score: int) -> ContentSuggestions:
    """Return the content suggestion templates plus score-driven AI improvements."""
    validate_website_data(data)
    return {
        "missing_keywords": list(MISSING_KEYWORDS),
        "blog_titles": [dict(item) for item in BLOG_TITLES],
        "content_structure": list(CONTENT_STRUCTURE),
        "faqs": [dict(item) for item in FAQS],
        "ai_visibility": dict(AI_VISIBILITY),
        "ai_improvements": generate_ai_improvements(ai_score),
    }


def empty_content_suggestions() -> ContentSuggestions:
    """Placeholder used when content suggestions are switched off for a request."""
    return {
        "missing_keywords": [],
        "blog_titles": [],
        "content_structure": [],
        "faqs": [],
        "ai_visibility": {platform: "low" for platform in AI_VISIBILITY},
        "ai_improvements": [],
    }
