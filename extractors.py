"""Turn a URL into a NormalizedDocument.

One extractor per source kind:

- Reddit threads are read through the ``.json`` view of the post.
- Product Hunt pages are scraped for title, tagline, description and reviews.
- Anything else goes through a generic readable-text extractor.

Every fetch or parse failure is logged and re-raised as an ExtractionError
with a fixed, user-safe message.
"""
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

import requests
from bs4 import BeautifulSoup

import config
from errors import ExtractionError
from sources import SourceKind, classify_source

logger = logging.getLogger(__name__)

DISCUSSION_ERROR = "Failed to load data from Reddit"
LISTING_ERROR = "Failed to load data from Product Hunt"
GENERIC_ERROR = "Failed to load data from URL"
LISTING_FALLBACK = "Could not extract content from Product Hunt"

BOILERPLATE_TAGS = ["script", "style", "nav", "footer", "header", "aside"]
CONTENT_SELECTORS = ["article", "main", '[role="main"]', ".content", "#content"]


@dataclass
class NormalizedDocument:
    title: str
    body: str

    def to_markdown(self) -> str:
        if not self.title:
            return self.body
        return f"# {self.title}\n\n{self.body}"


def _fetch(url, timeout):
    resp = requests.get(url, headers=config.HEADERS, timeout=timeout)
    resp.raise_for_status()
    return resp


def _text(el) -> str:
    return el.get_text(separator="\n", strip=True) if el is not None else ""


# ————— Reddit —————

def discussion_json_url(url: str) -> str:
    """Return the JSON view of a post URL, e.g. ``/comments/abc/`` -> ``/comments/abc.json``."""
    parts = urlsplit(url)
    return urlunsplit(parts._replace(path=parts.path.rstrip("/") + ".json"))


def _listing_children(listing):
    return (listing.get("data") or {}).get("children") or []


def format_discussion(data) -> NormalizedDocument:
    if not isinstance(data, list) or len(data) < 2:
        raise ValueError("expected a post listing followed by a comment listing")

    post_children = _listing_children(data[0])
    post = post_children[0].get("data") if post_children else None
    comments = _listing_children(data[1])

    lines = []
    title = ""
    if post:
        title = post.get("title") or ""
        lines.append(f"**Author:** u/{post.get('author')}")
        lines.append(f"**Subreddit:** r/{post.get('subreddit')}")
        lines.append(f"**Score:** {post.get('score')} | **Comments:** {post.get('num_comments')}")
        lines.append("")
        if post.get("selftext"):
            lines.append(f"## Post text\n{post['selftext']}\n")

    shown = min(len(comments), config.MAX_COMMENTS)
    lines.append(f"## Comments ({shown} of {len(comments)})\n")

    for comment in comments[:config.MAX_COMMENTS]:
        c = comment.get("data") or {}
        if not c.get("body") or c.get("author") == config.MODERATOR_ACCOUNT:
            continue
        lines.append(f"**u/{c.get('author')}** (score: {c.get('score')}):\n{c['body']}\n\n---\n")

    return NormalizedDocument(title=title, body="\n".join(lines))


def extract_discussion(url: str) -> NormalizedDocument:
    timeout = config.request_timeout()
    try:
        resp = _fetch(discussion_json_url(url), timeout)
        return format_discussion(resp.json())
    except Exception:
        logger.exception("Reddit parse error for %s", url)
        raise ExtractionError(DISCUSSION_ERROR, SourceKind.DISCUSSION)


# ————— Product Hunt —————

def _first_text(soup, selector) -> str:
    return _text(soup.select_one(selector))


def _meta_description(soup) -> Optional[str]:
    meta = soup.select_one('meta[name="description"]')
    if meta is None:
        return None
    content = (meta.get("content") or "").strip()
    return content or None


def _is_review_length(text: str) -> bool:
    return config.REVIEW_MIN_CHARS < len(text) < config.REVIEW_MAX_CHARS


def _bullet_text(text: str) -> str:
    return " ".join(text.split())


def format_listing(html: str) -> NormalizedDocument:
    soup = BeautifulSoup(html, "html.parser")

    title = _first_text(soup, "h1")
    tagline = _first_text(soup, '[class*="tagline"]') or _meta_description(soup)
    description = "\n".join(
        t for t in (_text(el) for el in soup.select('[class*="description"]')) if t
    )
    candidates = soup.select('[class*="comment"], [class*="review"]')[:config.MAX_REVIEW_CANDIDATES]
    # Length is measured on the raw trimmed text of the element.
    reviews = [
        _bullet_text(t) for t in (el.get_text().strip() for el in candidates) if _is_review_length(t)
    ]

    if not (title or tagline or description or reviews):
        return NormalizedDocument(title="", body=LISTING_FALLBACK)

    sections = []
    if tagline:
        sections.append(f"**Tagline:** {tagline}\n")
    if description:
        sections.append(f"## Description\n{description}\n")
    if reviews:
        sections.append("## Reviews and comments\n")
        sections.extend(f"- {review}\n" for review in reviews)
    return NormalizedDocument(title=title, body="\n".join(sections))


def extract_listing(url: str) -> NormalizedDocument:
    timeout = config.request_timeout()
    try:
        resp = _fetch(url, timeout)
    except Exception:
        logger.exception("Product Hunt fetch error for %s", url)
        raise ExtractionError(LISTING_ERROR, SourceKind.LISTING)
    try:
        return format_listing(resp.text)
    except Exception:
        logger.exception("Product Hunt parse error for %s", url)
        return NormalizedDocument(title="", body=LISTING_FALLBACK)


# ————— Anything else —————

def format_generic(html: str) -> NormalizedDocument:
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(BOILERPLATE_TAGS):
        tag.decompose()

    title = _text(soup.title) or _first_text(soup, "h1")

    body = ""
    for selector in CONTENT_SELECTORS:
        container = soup.select_one(selector)
        if container is not None:
            body = _text(container)
            break
    if not body:
        body = _text(soup.body) or _text(soup)

    return NormalizedDocument(title=title, body=body[:config.MAX_BODY_CHARS])


def extract_generic(url: str) -> NormalizedDocument:
    timeout = config.request_timeout()
    try:
        resp = _fetch(url, timeout)
        return format_generic(resp.text)
    except Exception:
        logger.exception("Generic URL parse error for %s", url)
        raise ExtractionError(GENERIC_ERROR, SourceKind.GENERIC)


EXTRACTORS = {
    SourceKind.DISCUSSION: extract_discussion,
    SourceKind.LISTING: extract_listing,
    SourceKind.GENERIC: extract_generic,
}


def extract_url(url: str) -> NormalizedDocument:
    kind = classify_source(url)
    logger.info("Extracting %s as %s", url, kind.value)
    return EXTRACTORS[kind](url)
