"""
File Management Utilities

This module decides where everything produced by a run lives inside the
archive root: the per-bookmark wget logs, the pages wget saves, the index
page and the run manifest.
"""

import os
from pathlib import Path
import logging

from mebarchive.core.errors import ConfigError


INDEX_NAME = "index.html"
MANIFEST_NAME = "manifest.jsonl"


class FileManager:
    """
    Owns the layout of the archive directory.

    wget runs with the archive root as its working directory, so every path
    it reports in its log is relative to that root, and so are the links on
    the index page.
    """

    def __init__(self, archive_root: str):
        """
        Initialize the file manager.

        Args:
            archive_root: Directory that receives saved pages and the index
        """
        self.archive_root = Path(archive_root)
        self.logger = logging.getLogger(__name__)

    def create_directories(self):
        """Create the archive root if it does not exist yet."""
        try:
            self.archive_root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigError(f"create archive root {self.archive_root}: {e}") from e

        self.logger.info(f"Archive directory: {self.archive_root.absolute()}")

    def log_path(self, url_hash: int) -> str:
        """
        Get the wget log path for a bookmark.

        Args:
            url_hash: Stable hash of the bookmark URL

        Returns:
            Path of the log file, unique per URL
        """
        return os.path.join(str(self.archive_root), f"wget-{url_hash}.log")

    @property
    def index_path(self) -> str:
        return str(self.archive_root / INDEX_NAME)

    @property
    def manifest_path(self) -> str:
        return str(self.archive_root / MANIFEST_NAME)
