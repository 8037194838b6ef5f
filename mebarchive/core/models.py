"""
Data model for bookmarks and their archive results.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .errors import EmptyArchiveError


SHORT_URL_LIMIT = 50


class JobOutcome(str, Enum):
    SUCCEEDED = "succeeded"
    PARTIAL = "partial"   # wget exit code 8, primary page may still be saved
    FAILED = "failed"


@dataclass(frozen=True)
class ArchiveMetadata:
    saved: Tuple[str, ...] = ()     # relative paths, primary artifact first
    finished: str = ""
    downloaded: str = ""
    exec_time: float = 0.0          # seconds

    @property
    def is_empty(self) -> bool:
        return len(self.saved) == 0

    @property
    def index(self) -> str:
        """Primary artifact: the first file wget reported saving."""
        if not self.saved:
            raise EmptyArchiveError("empty archive referenced")
        return self.saved[0]


@dataclass
class BookmarkRecord:
    title: str
    url: str
    url_hash: int
    archive: Optional[ArchiveMetadata] = None
    outcome: Optional[JobOutcome] = field(default=None, compare=False)

    @property
    def short_url(self) -> str:
        if len(self.url) > SHORT_URL_LIMIT:
            return self.url[:SHORT_URL_LIMIT] + "..."
        return self.url

    @property
    def is_archived(self) -> bool:
        return self.archive is not None


def stable_url_hash(url: str) -> int:
    """
    Deterministic 48-bit hash of a URL, for sources that do not provide one.

    Firefox stores its own ``url_hash`` in moz_places; this only has to be
    stable across runs and distinct enough to name per-job log files.
    """
    digest = hashlib.sha1(url.encode("utf-8")).digest()
    return int.from_bytes(digest[:6], "big")
