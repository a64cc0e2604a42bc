import webbrowser
from unittest.mock import patch

from hacknet_game import PATHFINDER_URL
from notifications import open_link, pathfinder_missing


def test_pathfinder_missing_wire_shape():
    data = pathfinder_missing().to_dict()
    assert data["id"] == "pathfinder-missing"
    assert data["severity"] == "warning"
    assert data["message"] == "Hacknet Pathfinder is required to use Pathfinder mods"
    assert data["actions"][0]["title"] == "Get Pathfinder"
    assert callable(data["actions"][0]["invoke"])


def test_open_link_swallows_browser_errors():
    with patch("notifications.webbrowser.open", side_effect=webbrowser.Error("no browser")) as m:
        open_link(PATHFINDER_URL)
    m.assert_called_once_with(PATHFINDER_URL)


def test_open_link_without_browser():
    with patch("notifications.webbrowser.open", return_value=False) as m:
        open_link("https://example.invalid")
    m.assert_called_once()
