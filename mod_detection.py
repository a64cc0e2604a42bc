"""
Recognition of Hacknet mod archives from their file listing.

Two mod shapes are supported:

* Hacknet Extensions, which carry an ``extensioninfo.xml`` manifest.
* Pathfinder mods, which are recognised by any ``.dll`` file.

Detection never touches the archive contents, only the member names.
"""

from __future__ import annotations

import logging
import posixpath
import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from hacknet_game import EXTENSION_INFO_FILENAME, GAME_ID, PATHFINDER_MOD_EXTENSION

_log = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[\\/]")


@dataclass
class SupportResult:
    """Answer to "can this installer handle the archive?"."""

    supported: bool
    required_files: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"supported": self.supported, "requiredFiles": list(self.required_files)}


# ── Path helpers ──────────────────────────────────────────────────────


def listing_separator(files: Iterable[str]) -> str:
    """Return the directory separator a listing uses ("/" unless it only uses "\\")."""
    saw_backslash = False
    for f in files:
        if not isinstance(f, str):
            continue
        if "/" in f:
            return "/"
        if "\\" in f:
            saw_backslash = True
    return "\\" if saw_backslash else "/"


def base_name(path: str) -> str:
    return _SEPARATORS.split(path)[-1]


def extension_of(path: str) -> str:
    return posixpath.splitext(base_name(path))[1]


def is_directory_entry(path: str) -> bool:
    return path.endswith(("/", "\\"))


# ── Anchor lookup ─────────────────────────────────────────────────────


def _is_extension_info(path) -> bool:
    return (
        isinstance(path, str)
        and not is_directory_entry(path)
        and base_name(path).lower() == EXTENSION_INFO_FILENAME
    )


def _is_pathfinder_mod(path) -> bool:
    return (
        isinstance(path, str)
        and not is_directory_entry(path)
        and extension_of(path).lower() == PATHFINDER_MOD_EXTENSION
    )


def find_extension_info(files: Iterable[str]) -> Optional[str]:
    """First extensioninfo.xml in listing order, or None."""
    return next((f for f in files if _is_extension_info(f)), None)


def find_pathfinder_mod(files: Iterable[str]) -> Optional[str]:
    """First .dll in listing order, or None."""
    return next((f for f in files if _is_pathfinder_mod(f)), None)


def check_supported(files, game_id: str = GAME_ID) -> SupportResult:
    if game_id != GAME_ID:
        return SupportResult(supported=False)
    try:
        files = list(files)
    except TypeError:
        _log.debug("Listing is not iterable: %r", files)
        return SupportResult(supported=False)

    is_extension = find_extension_info(files) is not None
    is_pathfinder_mod = find_pathfinder_mod(files) is not None
    _log.debug(
        "Detection over %d entries: extension=%s pathfinder=%s",
        len(files), is_extension, is_pathfinder_mod,
    )
    return SupportResult(supported=is_extension or is_pathfinder_mod)
