"""CLI commands for compendium pack synchronization.

This module exports all command handlers:
- pack: Compile source trees into packs
- unpack: Extract packs into source trees
- clean: Canonicalize source files in place
- icons: List image paths referenced by source files
"""

from compendium_sync.commands.clean import cmd_clean
from compendium_sync.commands.icons import cmd_icons
from compendium_sync.commands.pack import cmd_pack
from compendium_sync.commands.unpack import cmd_unpack

__all__ = [
    "cmd_clean",
    "cmd_icons",
    "cmd_pack",
    "cmd_unpack",
]
