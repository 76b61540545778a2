"""Pack storage codecs.

This module exports the codec protocol and its implementations:
- LevelDbCodec for LevelDB pack directories (requires plyvel)
- JsonLinesCodec for single-file JSON lines packs
"""

from __future__ import annotations

from compendium_sync.errors import UnknownFormatError
from compendium_sync.storage.base import PackCodec
from compendium_sync.storage.jsonl import JsonLinesCodec
from compendium_sync.storage.leveldb import LevelDbCodec, split_key

_CODECS: dict[str, type[PackCodec]] = {
    LevelDbCodec.name: LevelDbCodec,
    JsonLinesCodec.name: JsonLinesCodec,
}


def get_codec(name: str) -> PackCodec:
    """Instantiate the codec registered under name.

    Raises:
        UnknownFormatError: If no codec has that name
    """
    codec_type = _CODECS.get(name)
    if codec_type is None:
        raise UnknownFormatError(name, sorted(_CODECS))
    return codec_type()


__all__ = [
    "PackCodec",
    "LevelDbCodec",
    "JsonLinesCodec",
    "get_codec",
    "split_key",
]
