"""
Command line entry point: archive one Firefox bookmark folder.
"""

import argparse
import logging
import sys
from typing import List, Optional

from mebarchive.core.controller import ArchiveController, RunConfig
from mebarchive.core.errors import FatalError
from mebarchive.core.logger import get_logger, initialize_logging
from mebarchive.utils.bookmarks import load_bookmarks
from mebarchive.utils.profiles import default_firefox_dir, locate_places_db


def build_parser() -> argparse.ArgumentParser:
    defaults = RunConfig()
    parser = argparse.ArgumentParser(
        prog="meb-archive",
        description="Save every page of a Firefox bookmark folder for offline reading",
    )
    parser.add_argument("--archive", default=defaults.archive_root,
                        help="where to store saved web pages")
    parser.add_argument("--folder", default=defaults.folder,
                        help="firefox folder name to archive")
    parser.add_argument("--workers", type=int, default=defaults.workers,
                        help="number of parallel downloads")
    parser.add_argument("--profile-name", default=defaults.profile,
                        help="firefox profile section, check ~/.mozilla/firefox/profiles.ini")
    parser.add_argument("--firefox-dir", default=None,
                        help="directory holding profiles.ini (default: ~/.mozilla/firefox)")
    parser.add_argument("--wget", default=defaults.wget,
                        help="wget executable to run")
    parser.add_argument("--log-dir", default=defaults.log_dir,
                        help="directory for meb-archive's own log files")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="show debug output on the console")
    return parser


def config_from_args(args: argparse.Namespace) -> RunConfig:
    return RunConfig(
        archive_root=args.archive,
        folder=args.folder,
        workers=args.workers,
        profile=args.profile_name,
        firefox_dir=args.firefox_dir,
        wget=args.wget,
        log_dir=args.log_dir,
    )


def run(config: RunConfig) -> None:
    """Resolve the profile, read the folder and archive it. Raises FatalError."""
    logger = get_logger()
    config.validate()

    db_path = locate_places_db(config.firefox_dir or default_firefox_dir(), config.profile)
    bookmarks = load_bookmarks(db_path, config.folder)

    controller = ArchiveController(config, logger=logger)
    controller.archive(bookmarks)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = initialize_logging(args.log_dir, logging.DEBUG if args.verbose else logging.INFO)

    try:
        run(config_from_args(args))
    except FatalError as e:
        logger.error(f"fatal: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
