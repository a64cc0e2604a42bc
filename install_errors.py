"""
Error types raised while recognising and planning a Hacknet mod install.

Everything except ``UnrecognizedModError`` is recoverable: the installer
collects it and moves on to the next variant.
"""

from __future__ import annotations


class HacknetModError(Exception):
    """Base class for every installer error."""


class DetectionMiss(HacknetModError):
    """The listing has no anchor file of the variant being tried."""


class ManifestParseError(HacknetModError):
    """extensioninfo.xml could not be read or is not well-formed XML."""


class ManifestFieldMissing(HacknetModError):
    """extensioninfo.xml parsed, but carries no usable extension name."""


class NoAnchorFile(HacknetModError, ValueError):
    """The plan builder was asked to plan around a file not in the listing."""


class UnrecognizedModError(HacknetModError):
    """Neither variant accepted the archive.

    ``attempts`` keeps the per-variant failures, in the order they were
    tried, for diagnostics. They are not part of the message.
    """

    def __init__(self, message: str, attempts: list[tuple[str, HacknetModError]] | None = None):
        super().__init__(message)
        self.attempts = list(attempts or [])
