from __future__ import annotations

import json
from pathlib import Path

import pytest

from newsnexus.models import Article, Source

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def sample_article_html() -> str:
    return (FIXTURES_DIR / "sample_article.html").read_text()


@pytest.fixture
def top_headlines() -> dict:
    return json.loads((FIXTURES_DIR / "newsapi_top_headlines.json").read_text())


@pytest.fixture
def article() -> Article:
    return Article(
        source=Source(name="Metro Daily"),
        title="City Council Approves Downtown Transit Plan",
        url="https://metrodaily.example.com/news/transit-plan",
        published_at="2024-03-05T22:15:00Z",
        author="Jordan Lee",
        description="Three new bus lanes are coming to the downtown core.",
        content="The city council voted 7-2 on Tuesday night… [+2140 chars]",
    )
