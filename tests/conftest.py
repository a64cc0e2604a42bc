"""
Shared fixtures and helpers for the Hacknet Mod Installer test suite.
"""

import logging
import zipfile
from pathlib import Path

import pytest

from installer_settings import InstallerSettings


def extension_info_xml(name: str) -> bytes:
    return (
        "<?xml version=\"1.0\" encoding=\"utf-8\"?>\n"
        "<HacknetExtension>\n"
        f"  <Name>{name}</Name>\n"
        "  <Language>en-us</Language>\n"
        "</HacknetExtension>\n"
    ).encode("utf-8")


def make_zip(path: Path, members: dict[str, bytes | str]) -> Path:
    """Write a zip with the given member name -> content mapping."""
    with zipfile.ZipFile(path, "w") as zf:
        for member, data in members.items():
            zf.writestr(member, data)
    return path


class FakeStaged:
    """In-memory stand-in for the staged archive files, counting reads."""

    def __init__(self, contents: dict[str, bytes] | None = None):
        self.contents = contents or {}
        self.reads: list[str] = []

    def read_bytes(self, member: str) -> bytes:
        self.reads.append(member)
        if member not in self.contents:
            raise FileNotFoundError(member)
        return self.contents[member]


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a Pathfinder exe that does exist."""
    exe = tmp_path / "game" / "HacknetPathfinder.exe"
    exe.parent.mkdir(parents=True)
    exe.write_bytes(b"MZ")
    return InstallerSettings(pathfinder_exe=str(exe))


@pytest.fixture
def app_data(tmp_path, monkeypatch):
    """Point APPDATA at a temp dir and drop any log handlers added meanwhile."""
    appdata = tmp_path / "appdata"
    monkeypatch.setenv("APPDATA", str(appdata))
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    yield appdata
    for handler in root.handlers[:]:
        if handler not in before:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
