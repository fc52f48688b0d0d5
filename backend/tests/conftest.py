import pytest


def build_website_data(**overrides) -> dict:
    data = {
        "title": "",
        "meta_description": "",
        "headings": [],
        "images": [],
        "links": [],
        "content": "",
        "has_schema": False,
        "schema_types": [],
        "load_time": 0,
        "word_count": 0,
    }
    data.update(overrides)
    return data


@pytest.fixture
def make_page():
    return build_website_data


@pytest.fixture
def empty_page() -> dict:
    return build_website_data()


@pytest.fixture
def rich_page() -> dict:
    content = (
        "TL;DR: Green tea lowers stress for 62% of drinkers, according to a 2024 study. "
        "What is green tea? It is tea made from unoxidized leaves. "
        "How to brew it: heat water to 80 degrees and steep for 2 minutes. "
        "Written by Jane Doe. Last updated March 2025. "
        "Frequently asked questions cover caffeine, dosage and taste. "
        "Sources include the National Institutes of Health and Kyoto University. "
        "Drink 3 cups a day. Most people enjoy 1 cup in the morning. "
    ) * 4
    return build_website_data(
        title="Green Tea Benefits: A Practical Guide for Beginners",
        meta_description=(
            "Learn what green tea is, how to brew it and which health benefits are backed by research, "
            "with tips for choosing the best leaves."
        ),
        headings=[
            {"level": 1, "text": "Green Tea Benefits"},
            {"level": 2, "text": "What is green tea?"},
            {"level": 3, "text": "Where does it come from?"},
            {"level": 2, "text": "How to brew green tea?"},
            {"level": 2, "text": "Why drink it daily?"},
            {"level": 2, "text": "Summary"},
        ],
        images=[{"src": "/tea.jpg", "alt": "Cup of green tea", "has_alt": True}],
        links=[
            {"href": "/about", "text": "About us", "is_internal": True},
            {"href": "/contact", "text": "Contact", "is_internal": True},
            {"href": "https://en.wikipedia.org/wiki/Green_tea", "text": "Wikipedia", "is_internal": False},
            {"href": "https://www.nih.gov/tea", "text": "NIH", "is_internal": False},
            {"href": "https://www.harvard.edu/tea", "text": "Harvard", "is_internal": False},
        ],
        content=content,
        has_schema=True,
        schema_types=["Article", "FAQPage"],
        load_time=1200,
        word_count=len(content.split()),
    )
