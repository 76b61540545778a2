"""Text canonicalization for user-visible document strings."""

from __future__ import annotations

import re
from typing import Final

_INVISIBLE: Final[re.Pattern[str]] = re.compile("\u2060")
_SINGLE_QUOTES: Final[re.Pattern[str]] = re.compile("[\u2018\u2019\u201a\u201b]")
_DOUBLE_QUOTES: Final[re.Pattern[str]] = re.compile("[\u201c\u201d\u201e\u201f]")


def clean_string(text: str) -> str:
    """Remove invisible whitespace characters and normalize quotes.

    Args:
        text: The string to be cleaned

    Returns:
        The string without U+2060 word joiners, with curly single quotes (low-9
        and reversed forms included) replaced by an apostrophe and curly
        double quotes by a plain double quote.
    """
    text = _INVISIBLE.sub("", text)
    text = _SINGLE_QUOTES.sub("'", text)
    return _DOUBLE_QUOTES.sub('"', text)
