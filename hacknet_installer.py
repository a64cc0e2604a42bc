"""
Hacknet Mod Installer - Core Logic

Decides how a mod archive is installed into the game directory.

Workflow:
    1. test() to check whether an archive listing looks like a Hacknet mod
    2. install() to turn the listing into an InstallPlan, trying the
       Hacknet Extension layout first and the Pathfinder mod layout second
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from extension_info import resolve_extension_name
from hacknet_game import EXTENSIONS_DIR, GAME_ID, MODS_DIR
from install_errors import DetectionMiss, HacknetModError, UnrecognizedModError
from install_plan import InstallPlan, build_install_plan
from installer_settings import InstallerSettings
from mod_detection import (
    SupportResult,
    check_supported,
    find_extension_info,
    find_pathfinder_mod,
)
from notifications import Notification, pathfinder_missing

_log = logging.getLogger(__name__)

UNRECOGNIZED_MESSAGE = "Unrecognised or invalid Hacknet mod"

EXTENSION = "extension"
PATHFINDER_MOD = "pathfinder_mod"


class InstallState(Enum):
    START = "start"
    TRY_EXTENSION = "try_extension"
    TRY_PATHFINDER = "try_pathfinder"
    DONE = "done"
    FAILED = "failed"


@dataclass
class VariantOutcome:
    """Result of trying one mod layout: either a plan or the reason it failed."""

    variant: str
    plan: Optional[InstallPlan] = None
    error: Optional[HacknetModError] = None

    @property
    def ok(self) -> bool:
        return self.plan is not None


def _stat_exists(path: str) -> bool:
    os.stat(path)
    return True


class HacknetModInstaller:
    """
    Installer for Hacknet Extensions and Pathfinder mods.

    ``settings`` carries the Pathfinder location recorded at game setup.
    ``notify`` receives advisory notifications; by default they are only
    logged. ``path_exists`` checks for the Pathfinder executable and may
    raise ``OSError`` to mean "not there".
    """

    def __init__(
        self,
        settings: Optional[InstallerSettings] = None,
        notify: Optional[Callable[[Notification], None]] = None,
        path_exists: Optional[Callable[[str], bool]] = None,
    ):
        self.settings = settings or InstallerSettings()
        self._notify_cb = notify
        self._path_exists = path_exists or _stat_exists

        # Per-call state, reset by install()
        self.state = InstallState.START
        self.outcomes: list[VariantOutcome] = []
        self.last_notifications: list[Notification] = []

    # ── Detection ─────────────────────────────────────────────────────

    def test(self, files: list[str], game_id: str = GAME_ID) -> SupportResult:
        return check_supported(files, game_id)

    # ── Install ───────────────────────────────────────────────────────

    def install(self, files: list[str], staged) -> InstallPlan:
        """Build the install plan for an archive listing.

        ``staged`` gives read access to the archive's files (see
        ``archive_reader``); only ExtensionInfo.xml is ever read.
        Raises ``UnrecognizedModError`` when neither layout applies.
        """
        files = list(files)
        self.state = InstallState.START
        self.outcomes = []
        self.last_notifications = []
        plan: Optional[InstallPlan] = None

        while self.state not in (InstallState.DONE, InstallState.FAILED):
            if self.state is InstallState.START:
                self.state = InstallState.TRY_EXTENSION

            elif self.state is InstallState.TRY_EXTENSION:
                outcome = self._try_extension(files, staged)
                self.outcomes.append(outcome)
                if outcome.ok:
                    plan = outcome.plan
                    self.state = InstallState.DONE
                else:
                    _log.debug("Not a Hacknet extension: %s", outcome.error)
                    self.state = InstallState.TRY_PATHFINDER

            elif self.state is InstallState.TRY_PATHFINDER:
                outcome = self._try_pathfinder_mod(files)
                self.outcomes.append(outcome)
                if outcome.ok:
                    plan = outcome.plan
                    self.state = InstallState.DONE
                else:
                    _log.debug("Not a Pathfinder mod: %s", outcome.error)
                    self.state = InstallState.FAILED

        if self.state is InstallState.FAILED:
            _log.info("%s (%d file(s) in archive)", UNRECOGNIZED_MESSAGE, len(files))
            raise UnrecognizedModError(
                UNRECOGNIZED_MESSAGE,
                attempts=[(o.variant, o.error) for o in self.outcomes],
            )

        assert plan is not None
        _log.info("Planned %d file(s) for install", len(plan.instructions))
        return plan

    def _try_extension(self, files: list[str], staged) -> VariantOutcome:
        try:
            name = resolve_extension_name(files, staged)
            plan = build_install_plan(
                files, find_extension_info(files), EXTENSIONS_DIR, identity=name
            )
        except HacknetModError as exc:
            return VariantOutcome(EXTENSION, error=exc)
        return VariantOutcome(EXTENSION, plan=plan)

    # Note: any archive containing a .dll is taken as a Pathfinder mod.
    def _try_pathfinder_mod(self, files: list[str]) -> VariantOutcome:
        anchor = find_pathfinder_mod(files)
        if anchor is None:
            return VariantOutcome(PATHFINDER_MOD, error=DetectionMiss("Not a valid Pathfinder mod"))

        self._check_pathfinder()
        try:
            plan = build_install_plan(files, anchor, MODS_DIR)
        except HacknetModError as exc:
            return VariantOutcome(PATHFINDER_MOD, error=exc)
        return VariantOutcome(PATHFINDER_MOD, plan=plan)

    # ── Pathfinder advisory ───────────────────────────────────────────

    def _check_pathfinder(self) -> None:
        exe = self.settings.pathfinder_exe
        try:
            present = self._path_exists(exe)
        except (OSError, ValueError) as exc:
            _log.debug("Pathfinder check for %s failed: %s", exe, exc)
            present = False
        if not present:
            self._emit(pathfinder_missing())

    def _emit(self, notification: Notification) -> None:
        self.last_notifications.append(notification)
        _log.warning("%s: %s", notification.title, notification.message)
        if self._notify_cb is None:
            return
        try:
            self._notify_cb(notification)
        except Exception:
            _log.exception("Notification handler failed for %s", notification.id)
