"""Slug generation for heading identifiers."""

from __future__ import annotations

import html
import re

from .transliteration import TRANSLITERATION

# Characters dropped outright instead of becoming a separator.
_REMOVED = "\r\"'#?/&;"

_SLUG_TABLE = str.maketrans({**{char: None for char in _REMOVED}, **TRANSLITERATION})
_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def generate_slug(title: str) -> str:
    """Generate an anchor-safe identifier from a heading title.

    Decodes HTML entities, drops a small punctuation set, folds extended
    Latin letters to ASCII, lowercases, and joins the remaining
    alphanumeric runs with single underscores.

    Args:
        title: Heading text (or an explicit identifier) to convert.

    Returns:
        str: Lowercase ASCII slug. Empty when nothing alphanumeric remains;
            callers decide whether that is an error.

    Examples:
        generate_slug("Héllo, Wörld!")  # "hello_world"
        generate_slug("What's New?")  # "whats_new"
        generate_slug("&amp; ...")  # ""
    """
    slug = html.unescape(title).strip()
    slug = slug.translate(_SLUG_TABLE).lower()
    slug = _NON_ALNUM.sub(" ", slug).strip()
    return slug.replace(" ", "_")
