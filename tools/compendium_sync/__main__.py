#!/usr/bin/env python3
"""Entry point for running as `python -m compendium_sync`."""

from compendium_sync.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
