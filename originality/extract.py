"""Main-content extraction from HTML — uses trafilatura and selectolax.

Callers that already hold clean text pass it straight to the engine.
"""
from __future__ import annotations

import logging
import re

import trafilatura
from selectolax.parser import HTMLParser

logger = logging.getLogger(__name__)

NON_VISIBLE_TAGS = ["script", "style", "noscript", "template"]
WHITESPACE_RE = re.compile(r"\s+")


def _visible_text(raw_html: str) -> str:
    tree = HTMLParser(raw_html)
    tree.strip_tags(NON_VISIBLE_TAGS)
    # Head content (title, meta) is not page text.
    body = tree.body
    if body is None:
        return ""
    return WHITESPACE_RE.sub(" ", body.text(separator=" ")).strip()


def extract_main_text(raw_html: str | None) -> str:
    """Primary textual content of a document; visible body text when trafilatura finds none."""
    if not raw_html or not str(raw_html).strip():
        return ""
    extracted = trafilatura.extract(
        raw_html,
        include_comments=False,
        include_tables=False,
    )
    if extracted:
        return extracted

    logger.info("trafilatura yielded no main content; falling back to visible text")
    return _visible_text(str(raw_html))
