"""
meb-archive Orchestrator: archives a list of bookmarks with a fixed pool of
worker threads, then writes the index page and the run manifest.
"""

from __future__ import annotations

import dataclasses
import os
import queue
import threading
import time
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .errors import ConfigError, JobError
from .fetcher import WgetFetcher
from .log_parser import LogParser, WgetLogParser
from .logger import ErrorTracker
from .models import BookmarkRecord, JobOutcome
from .report import write_index
from mebarchive.utils.file_manager import FileManager
from mebarchive.utils.manifest import Manifest


@dataclass
class RunConfig:
    archive_root: str = "/tmp/archive/"
    folder: str = "archive"
    workers: int = 4
    profile: str = "Profile0"
    firefox_dir: Optional[str] = None  # None = ~/.mozilla/firefox
    wget: str = "wget"
    log_dir: str = "logs"

    def validate(self) -> None:
        if isinstance(self.workers, bool) or not isinstance(self.workers, int) or self.workers < 1:
            raise ConfigError(f"workers must be a positive integer, got {self.workers!r}")
        if not self.archive_root:
            raise ConfigError("archive root must not be empty")
        if not self.folder:
            raise ConfigError("bookmark folder name must not be empty")


# Placed once per worker after the last job; a worker that takes it exits.
_CLOSED = object()


class ArchiveController:
    def __init__(self,
                 config: RunConfig,
                 fetcher: Optional[WgetFetcher] = None,
                 parser: Optional[LogParser] = None,
                 logger: Optional[logging.Logger] = None):
        config.validate()
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.files = FileManager(config.archive_root)
        self.fetcher = fetcher or WgetFetcher(self.files, wget=config.wget)
        self.parser = parser or WgetLogParser()
        self.tracker = ErrorTracker(self.logger)
        self._fatal: Optional[Exception] = None
        self._fatal_lock = threading.Lock()

    def archive_one(self, record: BookmarkRecord) -> None:
        """Fetch one bookmark and attach its metadata when something was saved."""
        started = time.monotonic()

        result = self.fetcher.fetch(record)
        record.outcome = result.outcome
        if result.outcome is JobOutcome.FAILED:
            self.tracker.log_warning(f"wget failed with status={result.exit_code}",
                                     context="fetch", url=record.short_url)
            return

        try:
            meta = self.parser.parse(result.log_path)
        except JobError as e:
            record.outcome = JobOutcome.FAILED
            self.tracker.log_warning(str(e), context="parse", url=record.short_url)
            return

        if meta.is_empty:
            record.outcome = JobOutcome.FAILED
            self.tracker.log_warning("wget log names no saved file", context="parse",
                                     url=record.short_url)
            return

        elapsed = round(time.monotonic() - started, 3)
        record.archive = dataclasses.replace(meta, exec_time=elapsed)

    def _worker(self, n: int, jobs: "queue.Queue[object]") -> None:
        while True:
            record = jobs.get()
            if record is _CLOSED:
                break
            if self._fatal is not None:
                # Run is aborting: keep draining so the producer never blocks
                continue
            try:
                self.archive_one(record)
            except Exception as e:  # FatalError or an unexpected bug
                with self._fatal_lock:
                    if self._fatal is None:
                        self._fatal = e
                self.logger.error(f"worker_{n}: fatal error, abandoning remaining jobs: {e}")

        self.logger.info(f"worker_{n}: exiting")

    def run(self, bookmarks: Sequence[BookmarkRecord]) -> List[BookmarkRecord]:
        """
        Archive every bookmark exactly once and return them in input order.

        Blocks until all workers have exited.

        Raises:
            FatalError: a worker hit an error that ends the whole run
        """
        records = list(bookmarks)
        workers = self.config.workers
        self._fatal = None

        jobs: "queue.Queue[object]" = queue.Queue(maxsize=workers)
        threads = [
            threading.Thread(target=self._worker, args=(n, jobs), name=f"worker_{n}")
            for n in range(workers)
        ]

        self.logger.info(f"starting {workers} workers")
        for t in threads:
            t.start()

        for record in records:
            jobs.put(record)
        for _ in threads:
            jobs.put(_CLOSED)

        for t in threads:
            t.join()

        if self._fatal is not None:
            raise self._fatal
        return records

    def archive(self, bookmarks: Sequence[BookmarkRecord]) -> List[BookmarkRecord]:
        """Run the pool, then write the index page and the manifest."""
        started = time.monotonic()
        self.files.create_directories()

        records = self.run(bookmarks)

        write_index(records, self.files.index_path)
        Manifest(self.files.manifest_path).write(records)

        summary = self.tracker.get_error_summary()
        archived = sum(1 for r in records if r.is_archived)
        self.logger.info(f"done {len(records)} urls in {int(time.monotonic() - started)}s "
                         f"({archived} archived, {summary['total_warnings']} warnings)")
        self.logger.info(f"index: {os.path.abspath(self.files.index_path)}")
        return records
