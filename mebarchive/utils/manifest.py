"""
Run manifest: one JSON Lines record per bookmark describing how its job ended.
Rewritten from scratch on every run, next to the index page.
"""

import json
from dataclasses import dataclass, asdict, field
from typing import Optional, Iterable, List

from mebarchive.core.errors import ReportWriteError
from mebarchive.core.models import BookmarkRecord


@dataclass
class ManifestRecord:
    title: str
    url: str
    url_hash: int
    outcome: Optional[str]   # succeeded|partial|failed
    status: str              # OK|MISSING, as shown on the index page
    saved: List[str] = field(default_factory=list)
    finished: str = ""
    downloaded: str = ""
    exec_time: float = 0.0

    @classmethod
    def from_bookmark(cls, record: BookmarkRecord) -> "ManifestRecord":
        rec = cls(
            title=record.title,
            url=record.url,
            url_hash=record.url_hash,
            outcome=record.outcome.value if record.outcome else None,
            status="OK" if record.archive is not None else "MISSING",
        )
        if record.archive is not None:
            rec.saved = list(record.archive.saved)
            rec.finished = record.archive.finished
            rec.downloaded = record.archive.downloaded
            rec.exec_time = record.archive.exec_time
        return rec


class Manifest:
    def __init__(self, path: str):
        self.path = path

    def write(self, records: Iterable[BookmarkRecord]) -> None:
        try:
            with open(self.path, 'w', encoding='utf-8') as f:
                for record in records:
                    rec = ManifestRecord.from_bookmark(record)
                    # ASCII escapes keep undecodable file names as lone surrogates
                    f.write(json.dumps(asdict(rec)) + "\n")
        except OSError as e:
            raise ReportWriteError(f"write manifest {self.path}: {e}") from e
