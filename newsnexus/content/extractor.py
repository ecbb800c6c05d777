"""Heuristic article-body extraction from raw news-site HTML.

No HTML parser is involved: an ordered cascade of container patterns is
tried against the raw markup, and the ``<p>`` tags inside the first
container that yields enough paragraphs become the article body.  When
no container qualifies the extractor degrades to every ``<p>`` in the
page, then to a source-specific container, and finally to an empty
string.  Nothing in here raises for malformed input.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache

from newsnexus.config import ExtractionConfig

logger = logging.getLogger(__name__)

_FLAGS = re.IGNORECASE | re.DOTALL

ARTICLE_PATTERN = r"<article[^>]*>(.*?)</article>"
MAIN_PATTERN = r"<main[^>]*>(.*?)</main>"
PARAGRAPH_PATTERN = r"<p\b[^>]*>(.*?)</p>"

_TAG = re.compile(r"<[^>]+>")


def div_class_pattern(marker: str) -> str:
    """Pattern for a ``<div>`` whose class attribute contains *marker*.

    The marker search stays inside the quoted attribute value, so a
    ``<div>`` without the marker fails within its own opening tag.
    """
    return (
        r"<div\b[^>]*\bclass\s*=\s*[\"'][^\"']*"
        + re.escape(marker)
        + r"[^\"']*[\"'][^>]*>(.*?)</div>"
    )


@lru_cache(maxsize=64)
def _compile(pattern: str) -> re.Pattern | None:
    try:
        return re.compile(pattern, _FLAGS)
    except re.error as exc:
        logger.error("Regex error in %r: %s", pattern, exc)
        return None


def first_match(pattern: str, html: str) -> str | None:
    """Return the first captured container body for *pattern*, if any."""
    regex = _compile(pattern)
    if regex is None:
        return None
    match = regex.search(html)
    if match is None:
        return None
    return match.group(1)


def extract_paragraphs(html: str) -> list[str]:
    """Return the tag-stripped, non-empty text of every ``<p>`` in *html*."""
    regex = _compile(PARAGRAPH_PATTERN)
    if regex is None:
        return []
    paragraphs: list[str] = []
    for match in regex.finditer(html):
        text = _TAG.sub("", match.group(1)).strip()
        if text:
            paragraphs.append(text)
    return paragraphs


def _join(paragraphs: list[str]) -> str:
    return "\n\n".join(paragraphs)


class ContentExtractor:
    def __init__(self, config: ExtractionConfig | None = None) -> None:
        self.config = config or ExtractionConfig()

    @property
    def container_patterns(self) -> list[str]:
        """Container patterns in priority order."""
        return [
            ARTICLE_PATTERN,
            *(div_class_pattern(m) for m in self.config.container_markers),
            MAIN_PATTERN,
        ]

    def extract(self, html: str, source_name: str = "") -> str:
        """Return the best-effort article body, paragraphs split by blank lines.

        An empty string means every strategy came up dry; callers fall
        back to whatever snippet they already hold.
        """
        if not html:
            return ""

        for pattern in self.container_patterns:
            container = first_match(pattern, html)
            if container is None:
                continue
            paragraphs = extract_paragraphs(container)
            if len(paragraphs) > self.config.min_paragraphs:
                logger.debug(
                    "Container %s yielded %d paragraphs",
                    pattern[:30], len(paragraphs),
                )
                return _join(paragraphs)

        paragraphs = extract_paragraphs(html)
        if paragraphs:
            return _join(paragraphs)

        # Source-specific wrapper, only tried once the generic scan is empty.
        if "BBC" in source_name and self.config.bbc_marker:
            container = first_match(div_class_pattern(self.config.bbc_marker), html)
            if container is not None:
                paragraphs = extract_paragraphs(container)
                if paragraphs:
                    return _join(paragraphs)

        return _join(extract_paragraphs(html))


def extract_content(
    html: str,
    source_name: str = "",
    config: ExtractionConfig | None = None,
) -> str:
    return ContentExtractor(config).extract(html, source_name)
