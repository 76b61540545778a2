"""YAML source file I/O with atomic writes.

This module handles reading and writing source documents:
- Parsing uses a safe loader that keeps timestamps as plain strings
- Dumping is block style, keeps key order and unicode, and writes
  multi-line strings as literal blocks for readable diffs
- Uses atomic write pattern (write temp file, then rename) with fixed
  permissions
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from compendium_sync.config import SOURCE_FILE_MODE, YAML_WIDTH
from compendium_sync.errors import SourceParseError, SourceAccessError

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class SourceLoader(yaml.SafeLoader):
    """Safe loader that leaves date-like scalars as strings.

    Pack documents are JSON data; resolving timestamps would turn strings
    into datetime objects the pack codecs cannot store.
    """


SourceLoader.yaml_implicit_resolvers = {
    first_char: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class SourceDumper(yaml.SafeDumper):
    """Safe dumper writing multi-line strings as literal blocks."""


def _represent_str(dumper: yaml.SafeDumper, value: str) -> yaml.ScalarNode:
    if "\n" in value:
        return dumper.represent_scalar("tag:yaml.org,2002:str", value, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", value)


SourceDumper.add_representer(str, _represent_str)


def load_document(text: str, source: str = "<string>") -> Any:
    """Parse YAML text holding one document.

    Args:
        text: Raw YAML content
        source: Name used in error messages

    Returns:
        Parsed Python object (typically a dict, None for an empty file)

    Raises:
        SourceParseError: If the text is not valid YAML
    """
    try:
        return yaml.load(text, Loader=SourceLoader)
    except yaml.YAMLError as exc:
        raise SourceParseError(source, str(exc)) from exc


def dump_document(data: Any) -> str:
    """Serialize a document to YAML text ending with exactly one newline."""
    text = yaml.dump(
        data,
        Dumper=SourceDumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=YAML_WIDTH,
    )
    return text.rstrip("\n") + "\n"


def parse_source_file(path: Path) -> Any:
    """Read and parse a YAML source file.

    Raises:
        SourceParseError: If parsing fails or the file is not valid UTF-8
        SourceAccessError: If the file cannot be read
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise SourceParseError(str(path), str(exc)) from exc
    except OSError as exc:
        raise SourceAccessError(str(path), str(exc)) from exc
    return load_document(raw, str(path))


def write_source_file(path: Path, data: Any) -> None:
    """Write a document to a YAML source file atomically.

    Uses a write-then-rename pattern:
    1. Write to a temporary file (path.tmp) with SOURCE_FILE_MODE
    2. Rename temp file over the target path

    Invariants:
        - Parent directories are created if they don't exist
        - The target keeps SOURCE_FILE_MODE regardless of its previous mode
        - Original file is not corrupted if write fails partway

    Raises:
        SourceAccessError: If the directory or file cannot be written
    """
    text = dump_document(data)
    temp_path = path.with_suffix(f"{path.suffix}.tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path.write_text(text, encoding="utf-8")
        os.chmod(temp_path, SOURCE_FILE_MODE)
        temp_path.replace(path)
    except OSError as exc:
        raise SourceAccessError(str(path), str(exc)) from exc
