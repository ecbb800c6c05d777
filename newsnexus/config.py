from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_CONTAINER_MARKERS = (
    "article-content",
    "entry-content",
    "story-body",
    "content",
    "post-content",
)


@dataclass
class NewsApiConfig:
    base_url: str = "https://newsapi.org/v2"
    api_key: str = ""
    country: str = "us"
    category: str = "general"
    query: str = ""


@dataclass
class SummarizerConfig:
    """Settings for the local Ollama-compatible summarization server."""

    enabled: bool = True
    base_url: str = "http://localhost:11434"
    model: str = "gemma2:2b"
    temperature: float = 0.1
    top_p: float = 0.9
    max_tokens: int = 200
    timeout: float = 60.0


@dataclass
class ExtractionConfig:
    """Tunables for the article-body heuristics.

    A container is accepted only when it yields *more than*
    ``min_paragraphs`` paragraphs.
    """

    min_paragraphs: int = 3
    container_markers: list[str] = field(
        default_factory=lambda: list(DEFAULT_CONTAINER_MARKERS),
    )
    bbc_marker: str = "ssrcss-11r1m41-RichTextComponentWrapper"
    max_segment_chars: int = 350
    heading_ratio: float = 0.8


@dataclass
class Config:
    news: NewsApiConfig = field(default_factory=NewsApiConfig)
    summarizer: SummarizerConfig = field(default_factory=SummarizerConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    log_level: str = "INFO"
    max_retries: int = 3
    max_workers: int = 4
    detail_count: int = 3


def load_config(path: Path) -> Config:
    with open(path, "rb") as f:
        raw = tomllib.load(f)

    general = raw.get("general", {})

    news_raw = raw.get("news", {})
    news = NewsApiConfig(
        base_url=str(news_raw.get("base_url", "https://newsapi.org/v2")).rstrip("/"),
        api_key=str(news_raw.get("api_key") or os.environ.get("NEWSAPI_KEY", "")),
        country=str(news_raw.get("country", "us")),
        category=str(news_raw.get("category", "general")),
        query=str(news_raw.get("query", "")),
    )

    sum_raw = raw.get("summarizer", {})
    summarizer = SummarizerConfig(
        enabled=bool(sum_raw.get("enabled", True)),
        base_url=str(sum_raw.get("base_url", "http://localhost:11434")).rstrip("/"),
        model=str(sum_raw.get("model", "gemma2:2b")),
        temperature=float(sum_raw.get("temperature", 0.1)),
        top_p=float(sum_raw.get("top_p", 0.9)),
        max_tokens=int(sum_raw.get("max_tokens", 200)),
        timeout=float(sum_raw.get("timeout", 60)),
    )

    ex_raw = raw.get("extraction", {})
    extraction = ExtractionConfig(
        min_paragraphs=int(ex_raw.get("min_paragraphs", 3)),
        container_markers=list(
            ex_raw.get("container_markers", DEFAULT_CONTAINER_MARKERS),
        ),
        bbc_marker=str(
            ex_raw.get("bbc_marker", "ssrcss-11r1m41-RichTextComponentWrapper"),
        ),
        max_segment_chars=int(ex_raw.get("max_segment_chars", 350)),
        heading_ratio=float(ex_raw.get("heading_ratio", 0.8)),
    )

    return Config(
        news=news,
        summarizer=summarizer,
        extraction=extraction,
        log_level=str(general.get("log_level", "INFO")).upper(),
        max_retries=int(general.get("max_retries", 3)),
        max_workers=int(general.get("max_workers", 4)),
        detail_count=int(general.get("detail_count", 3)),
    )
