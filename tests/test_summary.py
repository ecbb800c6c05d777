from __future__ import annotations

import dataclasses
import json

import httpx
import pytest

from newsnexus.config import SummarizerConfig
from newsnexus.errors import (
    ApiError,
    InsufficientContentError,
    InvalidResponseError,
    InvalidResponseFormatError,
    NetworkError,
)
from newsnexus.services.summary import SummaryService, clean_summary

BASE_URL = "http://ollama.test:11434"


def _service(handler) -> SummaryService:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return SummaryService(SummarizerConfig(base_url=BASE_URL), client=client)


class TestCleanSummary:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("  The council approved the plan.  ", "The council approved the plan."),
            ("Summary: The council approved the plan.", "The council approved the plan."),
            ("here's a summary:\nThe plan passed.", "The plan passed."),
            ("TL;DR: Plan passed.", "Plan passed."),
            ("Summary: In summary: twice", "In summary: twice"),
            ("The Summary: is mid-sentence", "The Summary: is mid-sentence"),
        ],
    )
    def test_prefixes(self, raw: str, expected: str) -> None:
        assert clean_summary(raw) == expected


class TestGenerate:
    def test_request_payload(self, article) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"response": "Summary: Three bus lanes approved."})

        summary = _service(handler).generate(article, "Full body text about buses.")

        assert summary == "Three bus lanes approved."
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == f"{BASE_URL}/api/generate"
        body = json.loads(request.content)
        assert body["model"] == "gemma2:2b"
        assert body["stream"] is False
        assert body["options"] == {"temperature": 0.1, "top_p": 0.9, "max_tokens": 200}
        assert "Article Title: City Council Approves Downtown Transit Plan" in body["prompt"]
        assert "Full body text about buses." in body["prompt"]
        assert "2-3 sentence summary" in body["prompt"]

    def test_uses_snippet_without_content(self, article) -> None:
        seen: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"response": "ok"})

        _service(handler).generate(article)

        assert "The city council voted 7-2 on Tuesday night…" in seen[0]["prompt"]
        assert "[+2140 chars]" not in seen[0]["prompt"]

    def test_insufficient_content(self, article) -> None:
        article = dataclasses.replace(article, content=None, description=None)

        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        with pytest.raises(InsufficientContentError):
            _service(handler).generate(article)

    def test_non_200_is_api_error(self, article) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": "model not loaded"})

        with pytest.raises(ApiError) as excinfo:
            _service(handler).generate(article)
        assert excinfo.value.status_code == 500

    def test_body_not_json(self, article) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="definitely not json")

        with pytest.raises(InvalidResponseError):
            _service(handler).generate(article)

    def test_missing_response_field(self, article) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"done": True})

        with pytest.raises(InvalidResponseFormatError):
            _service(handler).generate(article)

    def test_network_error(self, article) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(NetworkError):
            _service(handler).generate(article)


class TestIsAvailable:
    def test_available(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/tags"
            return httpx.Response(200, json={"models": []})

        assert _service(handler).is_available() is True

    def test_bad_status(self) -> None:
        assert _service(lambda request: httpx.Response(404)).is_available() is False

    def test_unreachable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        assert _service(handler).is_available() is False
