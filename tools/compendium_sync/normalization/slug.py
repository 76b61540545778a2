"""Name slug encoding for source file and folder names."""

from __future__ import annotations

import re
from typing import Final

_NON_ALNUM: Final[re.Pattern[str]] = re.compile(r"[^a-z0-9]+")
_SEPARATORS: Final[re.Pattern[str]] = re.compile(r"\s+|-{2,}")


def slugify(name: str) -> str:
    """Standardize a display name into a file name component.

    Args:
        name: Document or folder display name

    Returns:
        Lowercase token made of ``[a-z0-9]`` runs joined by single hyphens.
        Empty when the name holds no ASCII letters or digits.

    Examples:
        >>> slugify("Tasha's Hideous Laughter")
        'tashas-hideous-laughter'
        >>> slugify("  Multiple   Spaces--Here ")
        'multiple-spaces-here'
    """
    slug = name.lower().replace("'", "")
    slug = _NON_ALNUM.sub(" ", slug).strip()
    return _SEPARATORS.sub("-", slug)
