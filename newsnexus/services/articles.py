from __future__ import annotations

import logging

import httpx

from newsnexus.config import ExtractionConfig
from newsnexus.content.cleaner import clean
from newsnexus.content.extractor import ContentExtractor
from newsnexus.errors import ApiError, DecodingError, InvalidURLError, NetworkError
from newsnexus.models import Article
from newsnexus.utils.retry import with_retry

logger = logging.getLogger(__name__)

UNAVAILABLE_TEXT = "Unable to retrieve full article content."

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)


class ArticleContentService:
    """Scrapes an article's page and reduces it to clean body text.

    When extraction yields nothing the API snippet, then the description,
    stand in for the body.  Fetch failures are raised as
    :class:`~newsnexus.errors.NewsNexusError` subclasses so the caller can
    keep showing the snippet.
    """

    def __init__(
        self,
        config: ExtractionConfig | None = None,
        *,
        client: httpx.Client | None = None,
        max_retries: int = 3,
    ) -> None:
        self.extractor = ContentExtractor(config)
        self.max_retries = max_retries
        self._client = client

    def fetch_full_content(self, article: Article) -> str:
        logger.debug("Fetching full content from: %s", article.url)
        html = self.fetch_html(article.url)

        content = clean(self.extractor.extract(html, article.source.name))
        if not content:
            logger.debug("No body extracted for %s, using snippet", article.url)
            return article.clean_snippet or article.description or UNAVAILABLE_TEXT

        logger.debug("Extracted %d characters of content", len(content))
        return content

    def fetch_html(self, url: str) -> str:
        """GET *url* and decode the body as UTF-8."""
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as exc:
            raise InvalidURLError(url) from exc
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise InvalidURLError(url)

        own_client = self._client is None
        client = self._client or httpx.Client(
            timeout=15, follow_redirects=True, headers={"User-Agent": USER_AGENT},
        )
        try:
            def _get() -> httpx.Response:
                resp = client.get(parsed)
                resp.raise_for_status()
                return resp

            resp = with_retry(_get, max_retries=self.max_retries)
        except httpx.HTTPStatusError as exc:
            code = exc.response.status_code
            logger.error("Article fetch for %s returned HTTP %d", url, code)
            raise ApiError(f"HTTP Error {code}", status_code=code) from exc
        except httpx.HTTPError as exc:
            logger.error("Error fetching article content: %s", exc)
            raise NetworkError(str(exc)) from exc
        finally:
            if own_client:
                client.close()

        try:
            return resp.content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodingError("Invalid HTML encoding") from exc
