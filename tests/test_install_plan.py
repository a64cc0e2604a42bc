"""
Tests for install plan construction and application.
"""

import pytest

from install_errors import NoAnchorFile
from install_plan import CopyInstruction, InstallPlan, apply_install_plan, build_install_plan


def destinations(plan):
    return [i.destination for i in plan.instructions]


# ── extensions ───────────────────────────────────────────────────────────────

def test_extension_plan_excludes_other_roots():
    files = ["Foo/extensioninfo.xml", "Foo/data.bin", "Bar/unrelated.txt"]
    plan = build_install_plan(files, "Foo/extensioninfo.xml", "Extensions", identity="X")

    assert plan.instructions == [
        CopyInstruction(source="Foo/extensioninfo.xml", destination="Extensions/X/extensioninfo.xml"),
        CopyInstruction(source="Foo/data.bin", destination="Extensions/X/data.bin"),
    ]


def test_extension_plan_keeps_nested_layout():
    files = [
        "Release/MyExt/",
        "Release/MyExt/ExtensionInfo.xml",
        "Release/MyExt/Missions/",
        "Release/MyExt/Missions/intro.xml",
        "Release/MyExt/Nodes/a/b.xml",
        "Release/readme.txt",
    ]
    plan = build_install_plan(files, "Release/MyExt/ExtensionInfo.xml", "Extensions", identity="MyExt")

    assert destinations(plan) == [
        "Extensions/MyExt/ExtensionInfo.xml",
        "Extensions/MyExt/Missions/intro.xml",
        "Extensions/MyExt/Nodes/a/b.xml",
    ]


def test_extension_at_archive_root_takes_everything():
    files = ["extensioninfo.xml", "Nodes/", "Nodes/x.xml", "Music/song.ogg"]
    plan = build_install_plan(files, "extensioninfo.xml", "Extensions", identity="Ext")

    assert destinations(plan) == [
        "Extensions/Ext/extensioninfo.xml",
        "Extensions/Ext/Nodes/x.xml",
        "Extensions/Ext/Music/song.ogg",
    ]


def test_root_must_match_whole_components():
    files = ["Foo/extensioninfo.xml", "FooBar/a.txt", "Bar/Foo/b.txt", "Foo/c.txt"]
    plan = build_install_plan(files, "Foo/extensioninfo.xml", "Extensions", identity="X")

    assert [i.source for i in plan.instructions] == ["Foo/extensioninfo.xml", "Foo/c.txt"]


def test_extension_plan_ignores_target_dir_in_archive():
    files = ["Extensions/Ext/extensioninfo.xml", "Extensions/Ext/a.xml"]
    plan = build_install_plan(files, "Extensions/Ext/extensioninfo.xml", "Extensions", identity="Ext")

    assert destinations(plan) == ["Extensions/Ext/extensioninfo.xml", "Extensions/Ext/a.xml"]


def test_backslash_listing_keeps_its_separator():
    files = ["Ext\\ExtensionInfo.xml", "Ext\\Nodes\\n.xml", "Ext\\"]
    plan = build_install_plan(files, "Ext\\ExtensionInfo.xml", "Extensions", identity="E")

    assert destinations(plan) == ["Extensions\\E\\ExtensionInfo.xml", "Extensions\\E\\Nodes\\n.xml"]


# ── pathfinder mods ──────────────────────────────────────────────────────────

def test_pathfinder_plan_under_mods_dir():
    files = ["mods/sub/plugin.dll", "mods/sub/readme.txt"]
    plan = build_install_plan(files, "mods/sub/plugin.dll", "Mods")

    assert destinations(plan) == ["Mods/sub/plugin.dll", "Mods/sub/readme.txt"]


def test_pathfinder_plan_from_plain_folder():
    files = ["MyMod/MyMod.dll", "MyMod/config/settings.json", "README.txt"]
    plan = build_install_plan(files, "MyMod/MyMod.dll", "Mods")

    assert destinations(plan) == ["Mods/MyMod.dll", "Mods/config/settings.json"]


def test_pathfinder_plan_at_archive_root():
    plan = build_install_plan(["Mod.dll", "Mod.pdb"], "Mod.dll", "Mods")
    assert destinations(plan) == ["Mods/Mod.dll", "Mods/Mod.pdb"]


# ── general ──────────────────────────────────────────────────────────────────

def test_plan_is_deterministic():
    files = ["a/extensioninfo.xml", "a/z.txt", "a/b/y.txt", "c/x.txt"]
    first = build_install_plan(files, "a/extensioninfo.xml", "Extensions", identity="A")
    second = build_install_plan(list(files), "a/extensioninfo.xml", "Extensions", identity="A")
    assert first == second
    assert first.to_dict() == second.to_dict()


def test_plan_wire_shape():
    plan = build_install_plan(["x.dll"], "x.dll", "Mods")
    assert plan.to_dict() == {
        "instructions": [{"type": "copy", "source": "x.dll", "destination": "Mods/x.dll"}]
    }
    assert len(plan) == 1


@pytest.mark.parametrize("anchor", [None, "missing.dll"])
def test_missing_anchor_raises(anchor):
    with pytest.raises(NoAnchorFile):
        build_install_plan(["a.txt"], anchor, "Mods")


def test_no_anchor_is_a_value_error():
    assert issubclass(NoAnchorFile, ValueError)


# ── applying ─────────────────────────────────────────────────────────────────

def test_apply_copies_files(tmp_path):
    src = tmp_path / "extracted"
    (src / "Ext" / "Nodes").mkdir(parents=True)
    (src / "Ext" / "extensioninfo.xml").write_text("<x/>", encoding="utf-8")
    (src / "Ext" / "Nodes" / "n.xml").write_text("node", encoding="utf-8")
    game = tmp_path / "Hacknet"

    plan = build_install_plan(
        ["Ext/extensioninfo.xml", "Ext/Nodes/n.xml", "Ext/gone.txt"],
        "Ext/extensioninfo.xml",
        "Extensions",
        identity="Ext",
    )
    written = apply_install_plan(plan, src, game)

    assert written == [
        game / "Extensions" / "Ext" / "extensioninfo.xml",
        game / "Extensions" / "Ext" / "Nodes" / "n.xml",
    ]
    assert (game / "Extensions" / "Ext" / "Nodes" / "n.xml").read_text(encoding="utf-8") == "node"
    assert not (game / "Extensions" / "Ext" / "gone.txt").exists()


def test_apply_empty_plan(tmp_path):
    assert apply_install_plan(InstallPlan(), tmp_path, tmp_path / "game") == []


def test_pathfinder_plan_rooted_at_mods_takes_sibling_folders():
    # Rooting at the archive's own Mods folder pulls in the anchor's siblings
    files = ["mods/sub/plugin.dll", "mods/other/x.txt", "extras/y.txt"]
    plan = build_install_plan(files, "mods/sub/plugin.dll", "Mods")

    assert destinations(plan) == ["Mods/sub/plugin.dll", "Mods/other/x.txt"]


def test_apply_skips_destinations_outside_game_dir(tmp_path):
    src = tmp_path / "extracted"
    (src / "Ext").mkdir(parents=True)
    (src / "Ext" / "a.txt").write_text("a", encoding="utf-8")
    (src / "Ext" / "b.txt").write_text("b", encoding="utf-8")
    game = tmp_path / "game"
    plan = InstallPlan(
        instructions=[
            CopyInstruction(source="Ext/a.txt", destination="Extensions/../../escaped.txt"),
            CopyInstruction(source="Ext/b.txt", destination="Extensions/Ext/b.txt"),
        ]
    )

    written = apply_install_plan(plan, src, game)

    assert written == [game / "Extensions" / "Ext" / "b.txt"]
    assert not (tmp_path / "escaped.txt").exists()
