from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable

from newsnexus.config import Config
from newsnexus.content.segmenter import segment
from newsnexus.errors import NewsNexusError, user_message
from newsnexus.models import Article, ArticleState, Category, LoadState
from newsnexus.services.articles import ArticleContentService
from newsnexus.services.headlines import NewsClient
from newsnexus.services.notifications import NotificationCenter, is_breaking
from newsnexus.services.summary import SummaryService

logger = logging.getLogger(__name__)


class NewsReader:
    """Holds the current article list and the per-article load state.

    Every operation here is best-effort: failures end up in
    :attr:`error_message` or in the article's :class:`ArticleState`,
    never as exceptions.  A per-article ``LOADING`` state is the guard
    against issuing the same content fetch or summary request twice.
    """

    def __init__(
        self,
        config: Config,
        *,
        news: NewsClient | None = None,
        content: ArticleContentService | None = None,
        summarizer: SummaryService | None = None,
        notifications: NotificationCenter | None = None,
    ) -> None:
        self.config = config
        self.news = news or NewsClient(config.news, max_retries=config.max_retries)
        self.content = content or ArticleContentService(
            config.extraction, max_retries=config.max_retries,
        )
        self.summarizer = summarizer or SummaryService(config.summarizer)
        self.notifications = notifications or NotificationCenter()

        self.articles: list[Article] = []
        self.error_message: str | None = None
        self._states: dict[str, ArticleState] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Headlines
    # ------------------------------------------------------------------

    def fetch_top_headlines(self, category: Category = Category.GENERAL) -> list[Article]:
        logger.debug("Fetching top headlines for category: %s", category.value)
        self.error_message = None
        try:
            response = self.news.top_headlines(category.api_value)
        except NewsNexusError as exc:
            logger.error("Error fetching top headlines: %s", exc)
            self.error_message = user_message(exc)
            return self.articles

        if not response.articles:
            logger.warning("Received empty articles list from API")
            self.error_message = "No articles found for this category. Try another category."
            return self.articles

        logger.debug("Received %d articles", len(response.articles))
        self._replace_articles(response.articles)

        first = self.articles[0]
        if is_breaking(first.title):
            self.notifications.notify_breaking(
                first.title, first.description or "Breaking news update", first.url,
            )
        return self.articles

    def search(self, query: str) -> list[Article]:
        if not query.strip():
            return self.fetch_top_headlines()

        logger.debug("Searching for news with query: %s", query)
        self.error_message = None
        try:
            response = self.news.everything(query)
        except NewsNexusError as exc:
            logger.error("Error searching news: %s", exc)
            self.error_message = user_message(exc)
            return self.articles

        if not response.articles:
            logger.warning("No search results found")
            self.error_message = f"No articles found for '{query}'. Try a different search term."
            return self.articles

        logger.debug("Received %d search results", len(response.articles))
        self._replace_articles(response.articles)
        return self.articles

    def _replace_articles(self, articles: list[Article]) -> None:
        with self._lock:
            self.articles = list(articles)
            self._states = {a.id: ArticleState() for a in self.articles}

    # ------------------------------------------------------------------
    # Per-article state
    # ------------------------------------------------------------------

    def state(self, article: Article) -> ArticleState:
        with self._lock:
            return self._states.setdefault(article.id, ArticleState())

    def text_for(self, article: Article) -> str:
        """Best text available right now: full body, snippet, or description."""
        state = self.state(article)
        return state.full_content or article.clean_snippet or article.description or ""

    def segments_for(self, article: Article) -> list[str]:
        ex = self.config.extraction
        return segment(
            self.text_for(article),
            max_chars=ex.max_segment_chars,
            heading_ratio=ex.heading_ratio,
        )

    def load_full_content(self, article: Article) -> str | None:
        """Fetch and extract the article body unless already loaded or loading."""
        state = self.state(article)
        with self._lock:
            if state.content is LoadState.LOADED:
                return state.full_content
            if state.content is LoadState.LOADING:
                return None
            state.begin_content()

        try:
            text = self.content.fetch_full_content(article)
        except NewsNexusError as exc:
            # The snippet stays on screen; nothing is surfaced to the user.
            logger.error("Error fetching full article content: %s", exc)
            with self._lock:
                state.fail_content()
            return None

        with self._lock:
            state.finish_content(text)
        logger.debug("Fetched full content: %d characters", len(text))
        return text

    def prefetch_content(
        self,
        articles: list[Article],
        *,
        on_done: Callable[[Article, str | None], None] | None = None,
    ) -> dict[str, str | None]:
        """Load content for several articles on a thread pool.

        Returns a mapping of article id to loaded text (``None`` on failure).
        """
        results: dict[str, str | None] = {}
        with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
            futures = {
                pool.submit(self.load_full_content, article): article
                for article in articles
            }
            for future in as_completed(futures):
                article = futures[future]
                text = future.result()
                results[article.id] = text
                if on_done is not None:
                    on_done(article, text)
        return results

    def generate_summary(self, article: Article) -> str | None:
        """Request an AI summary, loading the full body first if needed.

        Does nothing when a summary is already loaded or in progress.
        """
        state = self.state(article)
        with self._lock:
            if state.summary_state is LoadState.LOADED:
                return state.summary
            if state.summary_in_progress:
                return None
            state.begin_summary()

        if state.content is not LoadState.LOADED:
            self.load_full_content(article)

        try:
            summary = self.summarizer.generate(article, state.full_content)
        except NewsNexusError as exc:
            logger.error("Error generating AI summary: %s", exc)
            with self._lock:
                state.fail_summary(f"Failed to generate summary: {exc}")
            return None

        with self._lock:
            state.finish_summary(summary)
        logger.debug("Generated AI summary: %s", summary)
        return summary

    def summarizer_available(self) -> bool:
        return self.summarizer.is_available()
