from __future__ import annotations

import re

# Literal substitutions only; this is not a general entity decoder.
ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
)

_TAG = re.compile(r"<[^>]+>")
_WHITESPACE = re.compile(r"\s+")
_BLANK_LINES = re.compile(r"\n\s*\n")


def clean(text: str) -> str:
    """Turn extracted markup into a single run of plain text.

    Entities are decoded and tags stripped *before* whitespace is
    collapsed, otherwise leftover markup fragments survive the collapse.
    """
    for entity, replacement in ENTITIES:
        text = text.replace(entity, replacement)
    text = _TAG.sub("", text)
    text = _WHITESPACE.sub(" ", text)
    text = _BLANK_LINES.sub("\n\n", text)
    return text.strip()
