from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from newsnexus.config import NewsApiConfig
from newsnexus.errors import ApiError, DecodingError, InvalidURLError, NetworkError
from newsnexus.models import NewsResponse
from newsnexus.utils.retry import with_retry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TopHeadlines:
    country: str
    category: str | None = None

    path = "/top-headlines"

    def params(self) -> dict[str, str]:
        params = {"country": self.country}
        if self.category:
            params["category"] = self.category
        return params


@dataclass(frozen=True)
class Everything:
    query: str

    path = "/everything"

    def params(self) -> dict[str, str]:
        return {"q": self.query}


Endpoint = TopHeadlines | Everything


class NewsClient:
    """Thin client for a NewsAPI-compatible headline service."""

    def __init__(
        self,
        config: NewsApiConfig,
        *,
        client: httpx.Client | None = None,
        max_retries: int = 3,
    ) -> None:
        self.config = config
        self.max_retries = max_retries
        self._client = client

    def fetch(self, endpoint: Endpoint) -> NewsResponse:
        url = self._build_url(endpoint)
        params = {**endpoint.params(), "apiKey": self.config.api_key}
        logger.debug("Fetching %s %s", url, endpoint.params())

        own_client = self._client is None
        client = self._client or httpx.Client(timeout=30, follow_redirects=True)
        try:
            def _get() -> httpx.Response:
                resp = client.get(url, params=params)
                if resp.status_code >= 500:
                    resp.raise_for_status()
                return resp

            try:
                resp = with_retry(_get, max_retries=self.max_retries)
            except httpx.HTTPStatusError as exc:
                resp = exc.response
            except httpx.HTTPError as exc:
                logger.error("Network error fetching headlines: %s", exc)
                raise NetworkError(str(exc)) from exc
        finally:
            if own_client:
                client.close()

        logger.debug("HTTP status code: %d", resp.status_code)
        if resp.status_code != 200:
            raise self._api_error(resp)

        try:
            return NewsResponse.from_api(resp.json())
        except (ValueError, KeyError, TypeError) as exc:
            logger.error("Decoding error: %s", exc)
            raise DecodingError(str(exc)) from exc

    def top_headlines(self, category: str | None = None) -> NewsResponse:
        return self.fetch(TopHeadlines(country=self.config.country, category=category))

    def everything(self, query: str) -> NewsResponse:
        return self.fetch(Everything(query=query))

    def _build_url(self, endpoint: Endpoint) -> httpx.URL:
        try:
            url = httpx.URL(self.config.base_url + endpoint.path)
        except httpx.InvalidURL as exc:
            raise InvalidURLError(self.config.base_url) from exc
        if url.scheme not in ("http", "https") or not url.host:
            logger.error("Invalid URL created: %s", url)
            raise InvalidURLError(str(url))
        return url

    @staticmethod
    def _api_error(resp: httpx.Response) -> ApiError:
        try:
            body = resp.json()
        except ValueError:
            body = None
        message = body.get("message") if isinstance(body, dict) else None
        if isinstance(message, str) and message:
            logger.error("API error: %s", message)
            return ApiError(message, status_code=resp.status_code)
        logger.error("HTTP error: %d", resp.status_code)
        return ApiError(f"HTTP Error {resp.status_code}", status_code=resp.status_code)
