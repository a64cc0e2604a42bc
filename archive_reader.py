"""
Archive access for Hacknet Mod Installer.

Lists, reads and extracts .zip/.7z/.rar mod archives, and provides the
"staged files" handles the installer reads ExtensionInfo.xml through:

StagedDirectory
    An archive already extracted to a directory on disk.
ArchiveMembers
    An archive read member by member, without extracting it first.
"""

from __future__ import annotations

import logging
import sys
import tempfile
import zipfile
from pathlib import Path
from typing import Protocol

import py7zr
import rarfile
from py7zr.exceptions import Bad7zFile

_log = logging.getLogger(__name__)

# Point rarfile at a bundled UnRAR.exe when one ships with the app
if getattr(sys, "frozen", False):
    _unrar = Path(sys._MEIPASS) / "UnRAR.exe"
else:
    _unrar = Path(__file__).parent / "assets" / "UnRAR.exe"
if _unrar.exists():
    rarfile.UNRAR_TOOL = str(_unrar)

SUPPORTED_EXTENSIONS = {".zip", ".7z", ".rar"}

# What the archive libraries raise for corrupt or mislabelled archives
ARCHIVE_ERRORS = (zipfile.BadZipFile, Bad7zFile, rarfile.Error)


class StagedFiles(Protocol):
    def read_bytes(self, member: str) -> bytes: ...


def _archive_kind(filepath: Path) -> str:
    ext = filepath.suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise ValueError(f"Unsupported archive format: {ext}")
    return ext


def list_archive_names(filepath: str | Path) -> list[str]:
    """Member names in archive order, with "/" as separator.

    Directory members keep their trailing "/".
    """
    filepath = Path(filepath)
    ext = _archive_kind(filepath)
    names: list[str] = []

    if ext == ".zip":
        with zipfile.ZipFile(filepath, "r") as zf:
            names = zf.namelist()
    elif ext == ".7z":
        with py7zr.SevenZipFile(filepath, "r") as sz:
            names = [
                info.filename + "/" if info.is_directory else info.filename
                for info in sz.list()
            ]
    elif ext == ".rar":
        with rarfile.RarFile(filepath, "r") as rf:
            names = [
                info.filename + "/" if info.is_dir() and not info.filename.endswith("/")
                else info.filename
                for info in rf.infolist()
            ]

    return [n.replace("\\", "/") for n in names]


def read_archive_member(filepath: str | Path, member: str) -> bytes:
    """Read a single member from an archive into bytes."""
    filepath = Path(filepath)
    ext = _archive_kind(filepath)

    if ext == ".zip":
        with zipfile.ZipFile(filepath, "r") as zf:
            return zf.read(member)
    if ext == ".7z":
        with tempfile.TemporaryDirectory() as tmpdir:
            with py7zr.SevenZipFile(filepath, "r") as sz:
                sz.extract(path=tmpdir, targets=[member])
            out = Path(tmpdir) / member
            if not out.is_file():
                raise KeyError(f"There is no item named {member!r} in the archive")
            return out.read_bytes()
    with rarfile.RarFile(filepath, "r") as rf:
        return rf.read(member)


def extract_archive(filepath: str | Path, dest: str | Path) -> Path:
    """Extract the whole archive under ``dest`` and return ``dest``."""
    filepath = Path(filepath)
    dest = Path(dest)
    ext = _archive_kind(filepath)
    dest.mkdir(parents=True, exist_ok=True)

    if ext == ".zip":
        with zipfile.ZipFile(filepath, "r") as zf:
            zf.extractall(dest)
    elif ext == ".7z":
        with py7zr.SevenZipFile(filepath, "r") as sz:
            sz.extractall(path=dest)
    elif ext == ".rar":
        with rarfile.RarFile(filepath, "r") as rf:
            rf.extractall(dest)

    _log.debug("Extracted %s to %s", filepath.name, dest)
    return dest


class StagedDirectory:
    """Files of an archive already extracted under ``root``."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def read_bytes(self, member: str) -> bytes:
        return (self.root / member.replace("\\", "/")).read_bytes()


class ArchiveMembers:
    """Files read straight out of the archive at ``filepath``."""

    def __init__(self, filepath: str | Path):
        self.filepath = Path(filepath)

    def read_bytes(self, member: str) -> bytes:
        try:
            return read_archive_member(self.filepath, member)
        except ARCHIVE_ERRORS as exc:
            raise OSError(f"Could not read {member} from {self.filepath.name}: {exc}") from exc
