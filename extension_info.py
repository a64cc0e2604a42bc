"""
ExtensionInfo.xml handling for Hacknet Mod Installer.

Every Hacknet Extension ships an ``ExtensionInfo.xml`` next to its content.
Extensions must each live in their own folder under ``Extensions/``, so the
installer names that folder after the extension:

    <HacknetExtension>
        <Name>My Extension</Name>
        <Language>en-us</Language>
        ...
    </HacknetExtension>

Only ``HacknetExtension/Name`` is read; the rest of the document is left to
the game. The name is stripped of characters Windows does not allow in a
directory name.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ElementTree
from typing import TYPE_CHECKING

from pydantic import BaseModel, ValidationError, field_validator

from hacknet_game import EXTENSION_INFO_FILENAME
from install_errors import DetectionMiss, ManifestFieldMissing, ManifestParseError
from mod_detection import find_extension_info

if TYPE_CHECKING:
    from archive_reader import StagedFiles

ROOT_ELEMENT = "HacknetExtension"
NAME_ELEMENT = "Name"

_RESERVED_CHARS = re.compile(r'[/\\:*?"<>|]')

_log = logging.getLogger(__name__)


def sanitize_extension_name(value: str) -> str:
    """Drop reserved filename characters and surrounding whitespace.

    Windows trims trailing spaces from directory names, so a padded name
    would not round-trip to the folder the game sees.
    """
    return _RESERVED_CHARS.sub("", value).strip()


class ExtensionInfo(BaseModel):
    """The part of ExtensionInfo.xml the installer cares about."""

    name: str

    @field_validator("name")
    @classmethod
    def _sanitize(cls, v: str) -> str:
        cleaned = sanitize_extension_name(v)
        if not cleaned.strip("."):
            raise ValueError(f"Extension name {v!r} is empty once sanitized")
        return cleaned


def parse_extension_info(data: bytes | str) -> ExtensionInfo:
    """Parse raw ExtensionInfo.xml content.

    Raises ``ManifestParseError`` if the content is not well-formed XML.
    Raises ``ManifestFieldMissing`` if there is no usable
    ``HacknetExtension/Name``.
    """
    try:
        root = ElementTree.fromstring(data)
    except (ElementTree.ParseError, LookupError, ValueError) as exc:
        raise ManifestParseError(f"Failed to parse {EXTENSION_INFO_FILENAME}: {exc}") from exc

    if root.tag != ROOT_ELEMENT:
        raise ManifestFieldMissing(
            f"Root element is <{root.tag}>, expected <{ROOT_ELEMENT}>"
        )
    name_el = root.find(NAME_ELEMENT)
    if name_el is None:
        raise ManifestFieldMissing(f"Name missing in {EXTENSION_INFO_FILENAME}")
    if len(name_el):
        raise ManifestFieldMissing(
            f"<{NAME_ELEMENT}> in {EXTENSION_INFO_FILENAME} holds elements, not text"
        )

    try:
        return ExtensionInfo.model_validate({"name": name_el.text or ""})
    except ValidationError as exc:
        raise ManifestFieldMissing(f"Name missing in {EXTENSION_INFO_FILENAME}") from exc


def resolve_extension_name(files: list[str], staged: StagedFiles) -> str:
    """Find the extension's manifest in ``files``, read it once, return its name."""
    member = find_extension_info(files)
    if member is None:
        raise DetectionMiss("Not a valid Hacknet extension")

    try:
        data = staged.read_bytes(member)
    except (OSError, KeyError) as exc:
        raise ManifestParseError(f"Could not read {member}: {exc}") from exc

    info = parse_extension_info(data)
    _log.debug("Extension name from %s: %r", member, info.name)
    return info.name
