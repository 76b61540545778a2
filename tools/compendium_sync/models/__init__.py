"""Domain models for compendium content.

This module exports all domain model types for use across the CLI:
- Document view and FolderNode for pack documents
- PackEntry for module manifest declarations
- Common identifier types (DocumentId, StorageKey)
"""

from compendium_sync.models.common import (
    DocumentId,
    StorageKey,
    is_folder_key,
    validate_document_id,
    validate_storage_key,
)
from compendium_sync.models.document import Document, FolderNode
from compendium_sync.models.manifest import PackEntry

__all__ = [
    # Common
    "DocumentId",
    "StorageKey",
    "is_folder_key",
    "validate_document_id",
    "validate_storage_key",
    # Documents
    "Document",
    "FolderNode",
    # Manifest
    "PackEntry",
]
