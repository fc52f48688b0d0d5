"""Page scraper: fetch a URL and extract the WebsiteData consumed by the analyzers.

Extracts title, meta description, headings in document order, images with alt
status, links, visible text, structured data types and load time.
Does NOT crawl subpages.
"""

import json as _json
import logging
import os
import re
from pathlib import Path
from urllib.parse import urljoin, urlparse

import requests
from bs4 import BeautifulSoup
from dotenv import load_dotenv

from errors import ScrapeError
from models import Heading, Image, Link, WebsiteData

load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env")

logger = logging.getLogger(__name__)

SCRAPER_TIMEOUT_SECONDS = float(os.getenv("SCRAPER_TIMEOUT_SECONDS", "12"))

_REQUEST_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/122.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

_HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
_SKIPPED_HREF_PREFIXES = ("javascript:", "mailto:", "tel:")


def _collect_ld_types(node: object, found: list[str]) -> None:
    if isinstance(node, list):
        for item in node:
            _collect_ld_types(item, found)
        return
    if not isinstance(node, dict):
        return
    sd_type = node.get("@type", "")
    if isinstance(sd_type, list):
        found.extend(str(t) for t in sd_type if t)
    elif sd_type:
        found.append(str(sd_type))
    if "@graph" in node:
        _collect_ld_types(node["@graph"], found)


def extract_schema_types(soup: BeautifulSoup) -> list[str]:
    """JSON-LD @type values plus microdata itemtype names, unique, in page order."""
    schema_types: list[str] = []
    for script_tag in soup.find_all("script", attrs={"type": "application/ld+json"}):
        try:
            ld = _json.loads(script_tag.string or "")
        except ValueError:
            logger.debug("Skipping unparseable JSON-LD block")
            continue
        _collect_ld_types(ld, schema_types)

    for tag in soup.find_all(attrs={"itemtype": True}):
        itemtype = (tag.get("itemtype") or "").strip().rstrip("/")
        if itemtype:
            schema_types.append(itemtype.rsplit("/", 1)[-1])

    return list(dict.fromkeys(schema_types))


def parse_html(html: str, url: str, load_time: int = 0) -> WebsiteData:
    """Extract WebsiteData from an already fetched HTML document."""
    soup = BeautifulSoup(html, "html.parser")

    parsed_url = urlparse(url)
    base_domain = (parsed_url.netloc or "").lower().strip()

    # Structured data lives in script tags, so read it before decomposing them
    schema_types = extract_schema_types(soup)

    for tag in soup.find_all(["script", "style", "noscript"]):
        tag.decompose()

    # --- Title ---
    title = ""
    if soup.title and soup.title.string:
        title = soup.title.string.strip()

    # --- Meta description ---
    meta_description = ""
    meta_desc_tag = soup.find("meta", attrs={"name": re.compile(r"^description$", re.I)})
    if meta_desc_tag and meta_desc_tag.get("content"):
        meta_description = (meta_desc_tag["content"] or "").strip()

    # --- Headings (document order) ---
    headings: list[Heading] = []
    for tag in soup.find_all(_HEADING_TAGS):
        headings.append({"level": int(tag.name[1]), "text": tag.get_text(" ", strip=True)})

    # --- Images ---
    images: list[Image] = []
    for img in soup.find_all("img"):
        alt = img.get("alt")
        alt_text = alt.strip() if isinstance(alt, str) else ""
        images.append({"src": (img.get("src") or "").strip(), "alt": alt_text, "has_alt": bool(alt_text)})

    # --- Links ---
    links: list[Link] = []
    for a in soup.find_all("a", href=True):
        href = (a["href"] or "").strip()
        if not href or href.startswith("#") or href.lower().startswith(_SKIPPED_HREF_PREFIXES):
            continue
        resolved_host = (urlparse(urljoin(url, href)).netloc or "").lower()
        links.append(
            {
                "href": href,
                "text": a.get_text(" ", strip=True),
                "is_internal": href.startswith("/") or resolved_host == base_domain,
            }
        )

    # --- Visible text ---
    body = soup.body or soup
    content = body.get_text(separator=" ", strip=True)
    word_count = len(content.split()) if content else 0

    return {
        "title": title,
        "meta_description": meta_description,
        "headings": headings,
        "images": images,
        "links": links,
        "content": content,
        "has_schema": len(schema_types) > 0,
        "schema_types": schema_types,
        "load_time": load_time,
        "word_count": word_count,
    }


def scrape_website(url: str) -> WebsiteData:
    """
    Fetch the page at `url` and return its WebsiteData.
    Raises ScrapeError on network failure, timeout or an HTTP error status.
    """
    status_code = 0
    try:
        response = requests.get(url, timeout=SCRAPER_TIMEOUT_SECONDS, headers=_REQUEST_HEADERS)
        status_code = response.status_code
        response.raise_for_status()
        response.encoding = response.apparent_encoding or "utf-8"
        html = response.text
    except requests.RequestException as exc:
        logger.warning("Scrape failed for %s: %s", url, exc)
        raise ScrapeError(url, str(exc), status_code=status_code) from exc

    load_time = int(response.elapsed.total_seconds() * 1000)
    logger.info("Fetched %s (status=%s, %sms)", url, status_code, load_time)
    return parse_html(html, url, load_time=load_time)
