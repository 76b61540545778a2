"""Typed error hierarchy with explicit failure states.

This module provides a consistent Result/Error pattern for the CLI:
- All domain errors extend CliError and carry structured context
- User-facing messages are derived from error type and context
- Per-pack outcomes are Ok/Err values so one failing pack never hides another
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar, Union

T = TypeVar("T")


# -----------------------------------------------------------------------------
# Result Type
# -----------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result containing a value."""
    value: T


@dataclass(frozen=True, slots=True)
class Err:
    """Failed result containing an error.

    Invariants:
        - error is always a CliError subclass
    """
    error: "CliError"


Result = Union[Ok[T], Err]
"""Discriminated union for operation results. Check with isinstance(result, Ok)."""


# -----------------------------------------------------------------------------
# Error Hierarchy
# -----------------------------------------------------------------------------

class CliError(RuntimeError):
    """Base error for all CLI operations.

    Subclasses provide structured context; the message is formatted for the
    user. Never raise raw CliError; always use a specific subclass.
    """
    pass


class InvalidDocumentError(CliError):
    """Document lacks a required identifier or storage key.

    Never fatal: callers skip the document and report this error.

    Attributes:
        source: File path or pack name the document came from
        missing: Names of the missing fields (e.g. ["_id"])
    """
    def __init__(self, source: str, missing: list[str]) -> None:
        self.source = source
        self.missing = missing
        self.reason = f"must have _id and _key (missing {', '.join(missing)})"
        super().__init__(f"{source} {self.reason}")


class SourceParseError(CliError):
    """YAML source file could not be parsed.

    Attributes:
        path: The file that failed to parse
        detail: Parser error message
    """
    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid YAML in {path}: {detail}")


class SourceAccessError(CliError):
    """Source file or directory could not be read, written or removed.

    Attributes:
        path: The file or directory involved
        detail: Underlying OS error message
    """
    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Cannot access {path}: {detail}")


class CodecError(CliError):
    """Pack storage could not be read or written.

    Attributes:
        pack: Pack name or location
        detail: Underlying error message
    """
    def __init__(self, pack: str, detail: str) -> None:
        self.pack = pack
        self.detail = detail
        super().__init__(f"Pack '{pack}' failed: {detail}")


class CodecUnavailableError(CliError):
    """The selected pack format needs a library that is not installed."""
    def __init__(self, codec: str, requirement: str) -> None:
        self.codec = codec
        self.requirement = requirement
        super().__init__(
            f"The {codec} format requires {requirement}; "
            f"install it with: pip install 'compendium-sync[{codec}]'"
        )


class UnknownFormatError(CliError):
    """No codec is registered for the requested pack format."""
    def __init__(self, name: str, known: list[str]) -> None:
        self.name = name
        self.known = known
        super().__init__(f"Unknown pack format '{name}' (expected one of: {', '.join(known)})")


class FolderCycleError(CliError):
    """Folder parent references loop back on themselves.

    Attributes:
        cycle: Folder ids along the loop, starting and ending with the same id
    """
    def __init__(self, cycle: list[str]) -> None:
        self.cycle = cycle
        super().__init__(f"Folder parent cycle detected: {' -> '.join(cycle)}")


class ManifestError(CliError):
    """Module manifest is missing or malformed.

    Attributes:
        path: The manifest path
        detail: Explanation of the problem
    """
    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid module manifest {path}: {detail}")


class SourceRootNotFoundError(CliError):
    """The source tree root directory does not exist."""
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Source directory not found: {path}")


class PackNotFoundError(CliError):
    """A pack was requested by name but is not known.

    Attributes:
        pack_name: The requested name
        where: Where the lookup happened (source root or manifest path)
    """
    def __init__(self, pack_name: str, where: str) -> None:
        self.pack_name = pack_name
        self.where = where
        super().__init__(f"Pack '{pack_name}' not found in {where}")


# -----------------------------------------------------------------------------
# Reporting
# -----------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SkippedEntry:
    """A document that was left out of an operation.

    Attributes:
        source: File path or pack-relative description of the document
        reason: Human-readable explanation
    """
    source: str
    reason: str

    def __str__(self) -> str:
        return f"{self.source}: {self.reason}"


@dataclass
class PackReport:
    """Outcome of one pack operation.

    Invariants:
        - processed counts documents written (or rewritten)
        - skipped documents are never counted as processed
    """
    pack: str
    processed: int = 0
    skipped: list[SkippedEntry] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def skip(self, source: str, reason: str) -> None:
        """Record a skipped document."""
        self.skipped.append(SkippedEntry(source=source, reason=reason))

    def warn(self, message: str) -> None:
        """Record a non-fatal advisory."""
        self.warnings.append(message)
