"""
Hacknet game data shared by the installer.

Holds the store ids, the file names that identify each mod variant, the
target directories inside the game folder, and the tools the game ships
alongside (Hacknet Pathfinder is the default primary tool when present).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PureWindowsPath

GAME_ID = "hacknet"
GAME_NAME = "Hacknet"
STEAM_APP_ID = "365450"
GOG_APP_ID = "1439474400"

GAME_EXE = "Hacknet.exe"
GAME_REQUIRED_FILES = ("Hacknet.bmp",)

# Manifest shipped by every Hacknet Extension.
EXTENSION_INFO_FILENAME = "extensioninfo.xml"
# Pathfinder mods are plain .NET assemblies.
PATHFINDER_MOD_EXTENSION = ".dll"

EXTENSIONS_DIR = "Extensions"
MODS_DIR = "Mods"

PATHFINDER_EXE = "HacknetPathfinder.exe"
PATHFINDER_URL = "https://www.nexusmods.com/hacknet/mods/1"
DEFAULT_PATHFINDER_EXE = str(
    PureWindowsPath(r"C:\Program Files (x86)\Steam\steamapps\common\Hacknet") / PATHFINDER_EXE
)


@dataclass(frozen=True)
class SupportedTool:
    """A modding tool that lives in the game directory."""

    id: str
    name: str
    executable: str
    required_files: tuple[str, ...] = field(default_factory=tuple)
    short_name: str | None = None
    logo: str | None = None
    relative: bool = False
    default_primary: bool = False


SUPPORTED_TOOLS: tuple[SupportedTool, ...] = (
    SupportedTool(
        id="PF",
        name="Hacknet Pathfinder",
        short_name="Pathfinder",
        logo="pf.png",
        executable=PATHFINDER_EXE,
        required_files=(PATHFINDER_EXE,),
        relative=True,
        default_primary=True,
    ),
    SupportedTool(
        id="HTE",
        name="Hacknet Themes Editor",
        logo="hte.png",
        executable="Hacknet Themes Editor.exe",
        required_files=("Hacknet Themes Editor.exe",),
    ),
)


def pathfinder_exe_for(game_path: str | Path) -> Path:
    """Return where Pathfinder lives inside a discovered game directory."""
    return Path(game_path) / PATHFINDER_EXE
