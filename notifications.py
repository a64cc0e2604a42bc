"""
Advisory notifications raised while installing.

Notifications never stop an install; the host decides how to show them.
"""

from __future__ import annotations

import logging
import webbrowser
from dataclasses import dataclass, field
from typing import Callable, Literal

from hacknet_game import PATHFINDER_URL

_log = logging.getLogger(__name__)

Severity = Literal["info", "warning", "error"]

PATHFINDER_MISSING_ID = "pathfinder-missing"


@dataclass
class NotificationAction:
    title: str
    invoke: Callable[[], None]


@dataclass
class Notification:
    id: str
    severity: Severity
    title: str
    message: str
    actions: list[NotificationAction] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "severity": self.severity,
            "title": self.title,
            "message": self.message,
            "actions": [{"title": a.title, "invoke": a.invoke} for a in self.actions],
        }


def open_link(url: str) -> None:
    """Open ``url`` in the user's browser. Failures are logged, not raised."""
    try:
        if not webbrowser.open(url):
            _log.warning("No browser available to open %s", url)
    except webbrowser.Error as exc:
        _log.warning("Could not open %s: %s", url, exc)


def pathfinder_missing() -> Notification:
    return Notification(
        id=PATHFINDER_MISSING_ID,
        severity="warning",
        title="Pathfinder not installed",
        message="Hacknet Pathfinder is required to use Pathfinder mods",
        actions=[
            NotificationAction(
                title="Get Pathfinder",
                invoke=lambda: open_link(PATHFINDER_URL),
            )
        ],
    )
