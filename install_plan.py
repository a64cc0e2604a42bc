"""
Install plans: which archive member is copied where inside the game folder.

A plan is built around an anchor file (the extension manifest or the first
Pathfinder .dll). Everything that sits in the anchor's directory, or below
it, is copied under the variant's target directory, keeping its layout
relative to the anchor's directory. Members elsewhere in the archive are
left out.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional

from install_errors import NoAnchorFile
from mod_detection import is_directory_entry, listing_separator

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CopyInstruction:
    source: str  # Member path inside the archive
    destination: str  # Path relative to the game directory
    type: Literal["copy"] = "copy"


@dataclass
class InstallPlan:
    instructions: list[CopyInstruction] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "instructions": [
                {"type": i.type, "source": i.source, "destination": i.destination}
                for i in self.instructions
            ]
        }

    def __len__(self) -> int:
        return len(self.instructions)


def install_root(anchor: str, sep: str, target_root: str, keep_target_dir: bool) -> str:
    """Directory of the archive that maps onto the install destination.

    Normally that is the anchor's own directory. With ``keep_target_dir``, an
    archive that already contains the target directory (``Mods/x/mod.dll``)
    is rooted at that directory instead, so ``x/`` survives.
    """
    dir_parts = anchor.split(sep)[:-1]
    if keep_target_dir:
        for i in range(len(dir_parts) - 1, -1, -1):
            if dir_parts[i].lower() == target_root.lower():
                return sep.join(dir_parts[: i + 1])
    return sep.join(dir_parts)


def build_install_plan(
    files: list[str],
    anchor: Optional[str],
    target_root: str,
    identity: Optional[str] = None,
) -> InstallPlan:
    """Plan the copy of every file under the anchor's root directory.

    Destinations read ``<target_root>/[<identity>/]<path below root>``, joined
    with the separator the listing uses. Instructions follow listing order.
    """
    if anchor is None or anchor not in files:
        raise NoAnchorFile(f"Anchor file {anchor!r} is not part of the archive listing")

    sep = listing_separator(files)
    root = install_root(anchor, sep, target_root, keep_target_dir=identity is None)
    prefix = root + sep if root else ""
    head = [target_root] if identity is None else [target_root, identity]

    instructions = []
    for member in files:
        if not isinstance(member, str) or is_directory_entry(member):
            continue
        if not member.startswith(prefix):
            continue
        relative = member[len(prefix):]
        if not relative:
            continue
        instructions.append(
            CopyInstruction(source=member, destination=sep.join(head + [relative]))
        )

    _log.debug(
        "Planned %d of %d member(s) from root %r into %s",
        len(instructions), len(files), root, sep.join(head),
    )
    return InstallPlan(instructions=instructions)


def apply_install_plan(plan: InstallPlan, source_dir: str | Path, game_dir: str | Path) -> list[Path]:
    """Copy an extracted archive's files into the game directory as planned.

    Returns the destination paths written. Members missing from
    ``source_dir`` and destinations that would land outside ``game_dir``
    are logged and skipped.
    """
    source_dir = Path(source_dir)
    game_dir = Path(game_dir)
    game_root = game_dir.resolve()
    written = []

    for instruction in plan.instructions:
        src = source_dir / instruction.source.replace("\\", "/")
        dst = game_dir / instruction.destination.replace("\\", "/")
        if not dst.resolve().is_relative_to(game_root):
            _log.warning("Refusing to write outside %s: %s", game_dir, instruction.destination)
            continue
        if not src.is_file():
            _log.warning("Expected file not found after extraction: %s", src)
            continue
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dst)
        written.append(dst)
        _log.info("Copied: %s -> %s", instruction.source, instruction.destination)

    return written
