from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

_TRUNCATION_MARKER = re.compile(r"\s*\[\+\d+\s*chars\]\s*$")


class Category(str, Enum):
    GENERAL = "general"
    BUSINESS = "business"
    TECHNOLOGY = "technology"
    ENTERTAINMENT = "entertainment"
    SPORTS = "sports"
    SCIENCE = "science"
    HEALTH = "health"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def api_value(self) -> str | None:
        """Category parameter sent to the API; ``general`` sends none."""
        return None if self is Category.GENERAL else self.value


@dataclass(frozen=True)
class Source:
    name: str
    id: str | None = None


@dataclass(frozen=True, eq=False)
class Article:
    """A headline as returned by the news API.

    Articles compare and hash by their generated ``id`` only, so two
    responses carrying the same story are still distinct articles.
    """

    source: Source
    title: str
    url: str
    published_at: str
    author: str | None = None
    description: str | None = None
    url_to_image: str | None = None
    content: str | None = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Article):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @classmethod
    def from_api(cls, raw: dict) -> Article:
        source = raw["source"] or {}
        return cls(
            source=Source(name=source["name"], id=source.get("id")),
            title=raw["title"],
            url=raw["url"],
            published_at=raw["publishedAt"],
            author=raw.get("author"),
            description=raw.get("description"),
            url_to_image=raw.get("urlToImage"),
            content=raw.get("content"),
        )

    @property
    def clean_snippet(self) -> str | None:
        """The API snippet without its ``[+1234 chars]`` truncation marker."""
        if self.content is None:
            return None
        return _TRUNCATION_MARKER.sub("", self.content)

    @property
    def formatted_date(self) -> str:
        try:
            dt = datetime.strptime(self.published_at, "%Y-%m-%dT%H:%M:%SZ")
        except (ValueError, TypeError):
            return self.published_at
        return f"{dt:%b} {dt.day}, {dt.year}"

    @property
    def headline(self) -> str:
        if ":" in self.title:
            return self.title.split(":", 1)[0].strip()
        if " - " in self.title:
            return self.title.split(" - ", 1)[0].strip()
        return self.title

    @property
    def subheading(self) -> str | None:
        if ":" in self.title:
            after = self.title.split(":", 1)[1].strip()
            return after or None
        if " - " in self.title:
            after = self.title.split(" - ", 1)[1].strip()
            if after and after != self.source.name:
                return after
        return None


@dataclass
class NewsResponse:
    status: str
    total_results: int
    articles: list[Article] = field(default_factory=list)

    @classmethod
    def from_api(cls, raw: dict) -> NewsResponse:
        return cls(
            status=str(raw["status"]),
            total_results=int(raw["totalResults"]),
            articles=[Article.from_api(a) for a in raw["articles"]],
        )


class LoadState(str, Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


_TRANSITIONS: dict[LoadState, set[LoadState]] = {
    LoadState.UNLOADED: {LoadState.LOADING},
    LoadState.LOADING: {LoadState.LOADED, LoadState.FAILED},
    LoadState.LOADED: set(),
    LoadState.FAILED: {LoadState.LOADING},
}


def _advance(current: LoadState, target: LoadState) -> LoadState:
    if target not in _TRANSITIONS[current]:
        raise ValueError(f"Cannot move from {current.value} to {target.value}")
    return target


@dataclass
class ArticleState:
    """Mutable per-article state, tracked separately from the Article.

    Content and summary each run their own
    ``UNLOADED -> LOADING -> {LOADED, FAILED}`` machine; ``FAILED`` may
    go back to ``LOADING`` on retry.
    """

    content: LoadState = LoadState.UNLOADED
    full_content: str | None = None
    summary_state: LoadState = LoadState.UNLOADED
    summary: str | None = None
    summary_error: str | None = None

    @property
    def summary_in_progress(self) -> bool:
        return self.summary_state is LoadState.LOADING

    def begin_content(self) -> None:
        self.content = _advance(self.content, LoadState.LOADING)

    def finish_content(self, text: str) -> None:
        self.content = _advance(self.content, LoadState.LOADED)
        self.full_content = text

    def fail_content(self) -> None:
        self.content = _advance(self.content, LoadState.FAILED)

    def begin_summary(self) -> None:
        self.summary_state = _advance(self.summary_state, LoadState.LOADING)
        self.summary_error = None

    def finish_summary(self, summary: str) -> None:
        self.summary_state = _advance(self.summary_state, LoadState.LOADED)
        self.summary = summary

    def fail_summary(self, message: str) -> None:
        self.summary_state = _advance(self.summary_state, LoadState.FAILED)
        self.summary_error = message
