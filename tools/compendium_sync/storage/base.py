"""Pack codec protocol.

A codec moves whole documents between a pack's storage and memory. It does
not normalize, name or filter documents; the commands do that around it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping, Protocol


class PackCodec(Protocol):
    """Reads and writes the documents of one pack storage format.

    Invariants:
        - read_documents yields every primary document of the pack with its
          _key set and embedded sub-documents expanded in place
        - write_documents replaces the whole pack content
        - Storage failures surface as CodecError
    """

    name: str

    def pack_location(self, dest_root: Path, pack_name: str) -> Path:
        """Storage path of a pack named pack_name under dest_root."""
        ...

    def read_documents(self, pack_path: Path) -> Iterator[dict[str, Any]]:
        """Yield the documents stored at pack_path in storage order."""
        ...

    def write_documents(self, pack_path: Path, documents: Iterable[Mapping[str, Any]]) -> int:
        """Replace the pack at pack_path with documents; return how many were stored."""
        ...
