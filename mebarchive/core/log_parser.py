"""
Fetch Log Parsing Module

Turns the verbose log wget writes with ``-o`` into an ``ArchiveMetadata``
value: which files were saved (the first one is the page itself), when the
run finished, and how much was downloaded.

The extraction relies on the exact English wording wget uses with
``TERM=xterm``. A translated log, different spacing, or a filename that
contains the closing quote yields a wrong filename without any error.
A ``Saving to:`` line too short to hold a name is ignored.

wget writes file names as raw bytes. The log is decoded with
``surrogateescape`` so ``os.fsencode`` recovers the name as it is on disk.
"""

from __future__ import annotations

import logging
from typing import List

from .errors import LogParseError
from .models import ArchiveMetadata


SAVING_PREFIX = "Saving to: "
FINISHED_PREFIX = "FINISHED"
DOWNLOADED_PREFIX = "Downloaded:"

# 'Saving to: "' is 12 characters; the closing quote is the last one.
SAVED_NAME_START = 12


class LogParser:
    """Interface for turning one fetch log into archive metadata."""

    def parse(self, log_path: str) -> ArchiveMetadata:
        raise NotImplementedError


class WgetLogParser(LogParser):
    """
    Single forward pass over a wget log.

    Recognised lines:
      - ``Saving to: "name"``: appends ``name`` to the saved files, in order
      - ``FINISHED --<time>--``: completion token, last one wins
      - ``Downloaded: <size> in <time> (<rate>)``: only counted once a
        FINISHED line has been seen, so a stray line earlier in the log is
        ignored
    Everything else is skipped.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def parse(self, log_path: str) -> ArchiveMetadata:
        saved: List[str] = []
        finished = ""
        downloaded = ""

        try:
            with open(log_path, "r", encoding="utf-8", errors="surrogateescape") as f:
                for raw in f:
                    line = raw.rstrip("\r\n")

                    if line.startswith(SAVING_PREFIX):
                        name = line[SAVED_NAME_START:-1]
                        if name:
                            saved.append(name)

                    if line.startswith(FINISHED_PREFIX):
                        line = line[len(FINISHED_PREFIX):].replace("--", "")
                        finished = line.strip()

                    if line.startswith(DOWNLOADED_PREFIX) and finished:
                        downloaded = line[len(DOWNLOADED_PREFIX):].strip()
        except OSError as e:
            raise LogParseError(f"read wget log at {log_path}: {e}") from e

        self.logger.debug(f"Parsed {log_path}: {len(saved)} saved, finished={finished!r}")
        return ArchiveMetadata(saved=tuple(saved), finished=finished, downloaded=downloaded)
