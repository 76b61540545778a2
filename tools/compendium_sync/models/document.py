"""Domain models for compendium documents.

A Document is a typed view over the raw mapping read from a pack or a
source file. The known fields get accessors; every other key (``system``,
``img``, namespaced ``flags`` ...) stays in the mapping untouched, so
normalization and serialization always operate on the original data.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, MutableMapping

from compendium_sync.errors import InvalidDocumentError
from compendium_sync.models.common import (
    DocumentId,
    StorageKey,
    is_folder_key,
    validate_document_id,
    validate_storage_key,
)


@dataclass(frozen=True, slots=True)
class FolderNode:
    """Folder reduced to what path resolution needs.

    Attributes:
        slug: Slugified folder name
        parent: Id of the parent folder, None at the root
    """
    slug: str
    parent: DocumentId | None = None


@dataclass(frozen=True)
class Document:
    """A pack document with a valid identifier and storage key.

    Invariants:
        - id and key are non-empty strings taken from data
        - data is the live mapping; mutations through it are visible here

    Use Document.from_mapping() to build one; it refuses documents missing
    either required field instead of fabricating them.
    """
    data: MutableMapping[str, Any]
    id: DocumentId
    key: StorageKey

    @classmethod
    def from_mapping(cls, data: Any, source: str) -> "Document":
        """Wrap a raw mapping after checking the required fields.

        Args:
            data: Parsed document (any type; non-mappings are rejected)
            source: File path or pack name used in the error message

        Returns:
            Document view over data

        Raises:
            InvalidDocumentError: If data is not a mapping or lacks _id/_key
        """
        if not isinstance(data, MutableMapping):
            raise InvalidDocumentError(source, ["_id", "_key"])
        doc_id = validate_document_id(data.get("_id"))
        key = validate_storage_key(data.get("_key"))
        missing = [name for name, value in (("_id", doc_id), ("_key", key)) if value is None]
        if doc_id is None or key is None:
            raise InvalidDocumentError(source, missing)
        return cls(data=data, id=doc_id, key=key)

    @property
    def name(self) -> str:
        name = self.data.get("name")
        return name if isinstance(name, str) else ""

    @property
    def folder(self) -> DocumentId | None:
        """Parent folder id, None when absent or empty."""
        return validate_document_id(self.data.get("folder"))

    @property
    def is_folder(self) -> bool:
        return is_folder_key(self.key)
