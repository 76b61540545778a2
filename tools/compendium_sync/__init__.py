"""Compendium Sync - Tool for keeping compendium packs and YAML sources in sync.

This package compiles human-editable YAML source trees into packs, extracts
packs back into source trees and keeps both canonical, with clear
architectural boundaries:

- **normalization/**: Pure document transforms (entry cleanup, text, slugs)
- **models/**: Document view, folder nodes and manifest entries
- **persistence/**: YAML I/O, tree walking, folder paths, pack locations
- **storage/**: Pack codecs (LevelDB via plyvel, JSON lines)
- **commands/**: CLI command handlers orchestrating operations
- **errors**: Typed error hierarchy with explicit failure states
"""

__version__ = "1.0.0"
