"""
Page Fetch Module

Runs wget once per bookmark to save the page and everything it needs for
offline viewing into the archive directory, and classifies how the run ended.
"""

from __future__ import annotations

import os
import subprocess
import logging
from dataclasses import dataclass
from typing import Dict, List

from .errors import FetchToolError
from .models import BookmarkRecord, JobOutcome
from mebarchive.utils.file_manager import FileManager


# From "man 1 wget": 8 = Server issued an error response.
# Any 404 on a page requisite (image, .css, .js) produces it even when the
# page itself was saved.
WGET_SERVER_ERROR = 8

WGET_ARGS = [
    "--verbose",
    "--page-requisites",
    "--convert-links",
    "--adjust-extension",
    "--no-parent",
]


@dataclass
class FetchResult:
    outcome: JobOutcome
    exit_code: int
    log_path: str


def classify_exit(code: int) -> JobOutcome:
    if code == 0:
        return JobOutcome.SUCCEEDED
    if code == WGET_SERVER_ERROR:
        return JobOutcome.PARTIAL
    return JobOutcome.FAILED


class WgetFetcher:
    """
    Invokes wget for a single bookmark.

    The child gets a minimal environment: ``TERM=xterm`` makes wget quote file
    names with plain ASCII quotes instead of typographic ones, and leaving out
    the locale variables keeps the log in English. Both are required by the
    log parser.
    """

    def __init__(self, files: FileManager, wget: str = "wget"):
        """
        Args:
            files: Archive layout; its root is wget's working directory
            wget: Name or path of the wget executable
        """
        self.files = files
        self.wget = wget
        self.logger = logging.getLogger(__name__)

    def build_command(self, url: str, log_path: str) -> List[str]:
        return [self.wget, *WGET_ARGS, "-o", log_path, url]

    def build_env(self) -> Dict[str, str]:
        return {
            "TERM": "xterm",
            "PATH": os.environ.get("PATH", os.defpath),
        }

    def fetch(self, record: BookmarkRecord) -> FetchResult:
        """
        Download one bookmarked page with its requisites.

        Returns:
            FetchResult with the classified outcome and the log location

        Raises:
            FetchToolError: wget could not be started at all
        """
        log_path = self.files.log_path(record.url_hash)
        cmd = self.build_command(record.url, log_path)
        self.logger.debug(f"Running: {' '.join(cmd)}")

        try:
            proc = subprocess.run(
                cmd,
                cwd=str(self.files.archive_root),
                env=self.build_env(),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError as e:
            raise FetchToolError(f"start {self.wget} for {record.short_url}: {e}") from e

        outcome = classify_exit(proc.returncode)
        if outcome is JobOutcome.PARTIAL:
            self.logger.info(f"wget reported server errors for requisites, url={record.short_url!r}")

        return FetchResult(outcome=outcome, exit_code=proc.returncode, log_path=log_path)
