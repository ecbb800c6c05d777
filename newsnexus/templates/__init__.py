"""Shared Jinja2 template environment for News Nexus.

Prompt templates live in this package directory and are loaded via
``PackageLoader``.
"""

from __future__ import annotations

from functools import lru_cache

from jinja2 import Environment, PackageLoader, StrictUndefined


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    """Return a shared Jinja2 Environment that loads from this package."""
    return Environment(
        loader=PackageLoader("newsnexus", "templates"),
        autoescape=False,
        keep_trailing_newline=False,
        undefined=StrictUndefined,
    )


def get_template(name: str):
    """Load a template by file name from the ``newsnexus/templates/`` directory."""
    return get_environment().get_template(name)
