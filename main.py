#!/usr/bin/env python3
"""Hacknet Mod Installer — Entry Point"""

import argparse
import json
import logging
import sys
import tempfile
from logging.handlers import RotatingFileHandler
from pathlib import Path

from archive_reader import ARCHIVE_ERRORS, ArchiveMembers, extract_archive, list_archive_names
from hacknet_installer import HacknetModInstaller
from install_errors import UnrecognizedModError
from install_plan import apply_install_plan
from installer_settings import InstallerSettings, app_data_dir, load_settings


def setup_logging(verbose: bool = False) -> tuple[logging.Logger, Path]:
    log_dir = app_data_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "hacknetmodinstaller.log"

    handler = RotatingFileHandler(
        log_file,
        maxBytes=1 * 1024 * 1024,  # 1 MB
        backupCount=2,
        encoding="utf-8",
    )
    formatter = logging.Formatter("%(asctime)s  %(levelname)-8s  %(message)s")
    handler.setFormatter(formatter)

    # Module loggers are not children of the app logger; attach to root
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)
    if verbose:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(formatter)
        root.addHandler(console)

    logger = logging.getLogger("hacknetmodinstaller")
    return logger, log_dir


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Hacknet Mod Installer")
    parser.add_argument("archive", help="Path to the mod archive (.zip/.7z/.rar)")
    parser.add_argument("--game-dir", help="Hacknet install directory")
    parser.add_argument("--settings", help="Settings file (default: app data directory)")
    parser.add_argument(
        "--install",
        action="store_true",
        help="Copy the planned files into --game-dir",
    )
    parser.add_argument("--json", action="store_true", help="Print the plan as JSON")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def run(args: argparse.Namespace, logger: logging.Logger) -> int:
    archive = Path(args.archive)
    if args.install and not args.game_dir:
        print("--install requires --game-dir", file=sys.stderr)
        return 2

    if args.game_dir:
        settings = InstallerSettings.for_game_path(args.game_dir)
    else:
        settings = load_settings(args.settings)

    try:
        files = list_archive_names(archive)
    except (OSError, ValueError, *ARCHIVE_ERRORS) as e:
        logger.error("Could not list %s: %s", archive, e)
        print(f"Could not read {archive.name}: {e}", file=sys.stderr)
        return 1

    installer = HacknetModInstaller(settings)
    if not installer.test(files).supported:
        print(f"{archive.name}: not a Hacknet mod", file=sys.stderr)
        return 1

    try:
        plan = installer.install(files, ArchiveMembers(archive))
    except UnrecognizedModError as e:
        logger.info("%s: %s (%s)", archive.name, e, e.attempts)
        print(f"{archive.name}: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(plan.to_dict(), indent=2))
    else:
        print(f"Archive: {archive}")
        print(f"Files to install: {len(plan.instructions)}")
        for item in plan.instructions:
            print(f"  {item.destination}  <=  {item.source}")

    for notification in installer.last_notifications:
        print(f"[{notification.severity}] {notification.title}: {notification.message}")

    if args.install:
        with tempfile.TemporaryDirectory() as tmpdir:
            try:
                extract_archive(archive, tmpdir)
                written = apply_install_plan(plan, tmpdir, args.game_dir)
            except (OSError, ValueError, *ARCHIVE_ERRORS) as e:
                logger.error("Could not install %s: %s", archive, e)
                print(f"Could not install {archive.name}: {e}", file=sys.stderr)
                return 1
        print(f"Installed {len(written)} file(s) into {args.game_dir}")
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    logger, _ = setup_logging(args.verbose)
    logger.info("Starting Hacknet Mod Installer")
    return run(args, logger)


if __name__ == "__main__":
    raise SystemExit(main())
