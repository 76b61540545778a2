"""Normalization layer for compendium documents.

This module exports the pure transforms applied to documents:
- Text canonicalization of names, labels and descriptions
- Slug encoding of display names into file name components
- Entry normalization removing volatile, environment-specific data
"""

from compendium_sync.normalization.entry import clean_pack_entry
from compendium_sync.normalization.slug import slugify
from compendium_sync.normalization.text import clean_string

__all__ = [
    "clean_pack_entry",
    "clean_string",
    "slugify",
]
