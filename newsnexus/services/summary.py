from __future__ import annotations

import logging

import httpx

from newsnexus.config import SummarizerConfig
from newsnexus.errors import (
    ApiError,
    InsufficientContentError,
    InvalidResponseError,
    InvalidResponseFormatError,
    NetworkError,
)
from newsnexus.models import Article
from newsnexus.templates import get_template

logger = logging.getLogger(__name__)

# Boilerplate lead-ins models like to put in front of the summary.
SUMMARY_PREFIXES = (
    "Summary:",
    "Here's a summary:",
    "In summary:",
    "To summarize:",
    "Concise summary:",
    "Brief summary:",
    "TL;DR:",
    "TLDR:",
)


def clean_summary(summary: str) -> str:
    """Trim *summary* and drop at most one leading boilerplate prefix."""
    cleaned = summary.strip()
    lowered = cleaned.lower()
    for prefix in SUMMARY_PREFIXES:
        if lowered.startswith(prefix.lower()):
            return cleaned[len(prefix):].strip()
    return cleaned


class SummaryService:
    """Client for an Ollama-compatible ``/api/generate`` endpoint."""

    def __init__(
        self,
        config: SummarizerConfig | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        self.config = config or SummarizerConfig()
        self._client = client

    @property
    def generate_url(self) -> str:
        return f"{self.config.base_url}/api/generate"

    def build_prompt(self, title: str, content: str) -> str:
        return get_template("summary_prompt.txt").render(title=title, content=content)

    def build_payload(self, prompt: str) -> dict:
        return {
            "model": self.config.model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": self.config.temperature,
                "top_p": self.config.top_p,
                "max_tokens": self.config.max_tokens,
            },
        }

    def generate(self, article: Article, content: str | None = None) -> str:
        """Summarize *article*, preferring *content* over the API snippet.

        Raises :class:`InsufficientContentError` when there is no text at
        all, and the other :class:`~newsnexus.errors.NewsNexusError`
        subclasses for server or transport failures.
        """
        text = content or article.clean_snippet or article.description or ""
        if not text:
            raise InsufficientContentError()

        logger.debug("Attempting to summarize article: %s", article.title)
        payload = self.build_payload(self.build_prompt(article.title, text))

        own_client = self._client is None
        client = self._client or httpx.Client(timeout=self.config.timeout)
        try:
            resp = client.post(self.generate_url, json=payload)
        except httpx.HTTPError as exc:
            logger.error("Failed to generate summary: %s", exc)
            raise NetworkError(str(exc)) from exc
        finally:
            if own_client:
                client.close()

        if resp.status_code != 200:
            logger.error("Summarization server returned status code: %d", resp.status_code)
            raise ApiError(
                f"Summarization server error with status code: {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            body = resp.json()
        except ValueError as exc:
            raise InvalidResponseError(str(exc)) from exc

        generated = body.get("response") if isinstance(body, dict) else None
        if not isinstance(generated, str):
            raise InvalidResponseFormatError()

        logger.debug("Successfully generated summary")
        return clean_summary(generated)

    def is_available(self) -> bool:
        """Return True when the server answers ``GET /api/tags`` with 200."""
        own_client = self._client is None
        client = self._client or httpx.Client(timeout=5)
        try:
            resp = client.get(f"{self.config.base_url}/api/tags")
            return resp.status_code == 200
        except httpx.HTTPError as exc:
            logger.error("Error checking summarizer availability: %s", exc)
            return False
        finally:
            if own_client:
                client.close()
