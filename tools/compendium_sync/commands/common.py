"""Shared helpers for pack commands.

Every command processes packs one at a time. A pack that fails is recorded
as an Err and the remaining packs still run; the exit code reflects whether
any pack failed.
"""

from __future__ import annotations

import sys
from typing import Callable, Iterable, TypeVar

from compendium_sync.errors import (
    CliError,
    CodecUnavailableError,
    Err,
    Ok,
    PackReport,
    Result,
)

T = TypeVar("T")


def run_per_pack(
    packs: Iterable[T],
    operation: Callable[[T], PackReport],
) -> list[Result[PackReport]]:
    """Run an operation on each pack, isolating failures.

    Args:
        packs: Pack names or manifest entries, in processing order
        operation: Callable processing one pack

    Returns:
        One Ok(PackReport) or Err(CliError) per pack, in order

    Raises:
        CodecUnavailableError: Immediately, since no pack could succeed
    """
    results: list[Result[PackReport]] = []
    for pack in packs:
        try:
            results.append(Ok(operation(pack)))
        except CodecUnavailableError:
            raise
        except CliError as error:
            results.append(Err(error))
    return results


def print_report(report: PackReport, verb: str) -> None:
    """Print skipped documents, warnings and a one-line summary."""
    for entry in report.skipped:
        print(f"Skipped {entry}")
    for warning in report.warnings:
        print(f"Warning: {warning}")
    print(f"{verb} {report.processed} documents in {report.pack}")


def finish(results: list[Result[PackReport]]) -> int:
    """Print pack failures to stderr and compute the exit code.

    Returns:
        0 if every pack succeeded (skipped documents included), 1 otherwise
    """
    errors = [result.error for result in results if isinstance(result, Err)]
    for error in errors:
        print(f"Error: {error}", file=sys.stderr)
    return 1 if errors else 0
