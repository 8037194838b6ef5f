"""
Index page rendering.

Folds the finished bookmark list into one HTML page, in bookmark order, with a
link to each captured copy.
"""

from __future__ import annotations

import os
import logging
from typing import List, Sequence
from urllib.parse import quote

from bs4 import BeautifulSoup

from .errors import ReportWriteError
from .models import BookmarkRecord


MISSING_TARGET = "#"
STATUS_OK = "OK"
STATUS_MISSING = "MISSING"

INDEX_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>meb-archive</title>
</head>
<body>
<h1>μeb-archive</h1>
<p class="stats"></p>
<ol></ol>
</body>
</html>"""

logger = logging.getLogger(__name__)


def entry_target(record: BookmarkRecord) -> str:
    if record.archive is not None:
        return record.archive.index
    return MISSING_TARGET


def entry_href(record: BookmarkRecord) -> str:
    """
    Link to the primary artifact, percent-encoded from its on-disk bytes.

    wget names pages after their query string (``item?id=1.html``), so ``?``
    and ``#`` must not reach the browser unquoted.
    """
    target = entry_target(record)
    if target == MISSING_TARGET:
        return target
    return quote(os.fsencode(target))


def _printable(text: str) -> str:
    # Undecodable bytes from the fetch log are kept as surrogates
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def entry_status(record: BookmarkRecord) -> str:
    return STATUS_OK if record.archive is not None else STATUS_MISSING


def entry_label(record: BookmarkRecord) -> str:
    return record.title or _printable(entry_target(record))


def _details(record: BookmarkRecord) -> str:
    meta = record.archive
    parts: List[str] = [p for p in (meta.finished, meta.downloaded) if p]
    parts.append(f"{meta.exec_time:.3f}s")
    return _printable(", ".join(parts))


def render_index(records: Sequence[BookmarkRecord]) -> str:
    """Build the index page for the given records, keeping their order."""
    soup = BeautifulSoup(INDEX_TEMPLATE, "html.parser")
    entries = soup.find("ol")

    archived = 0
    for record in records:
        status = entry_status(record)

        li = soup.new_tag("li")
        link = soup.new_tag("a", href=entry_href(record))
        link.string = f"{entry_label(record)} | {status}"
        li.append(link)

        if record.archive is not None:
            archived += 1
            details = soup.new_tag("small")
            details.string = _details(record)
            li.append(" ")
            li.append(details)

        entries.append(li)

    soup.find("p", class_="stats").string = f"{archived} of {len(records)} pages archived"
    return str(soup)


def write_index(records: Sequence[BookmarkRecord], output_path: str) -> str:
    """
    Render and write the index page.

    Raises:
        ReportWriteError: the file could not be written
    """
    html = render_index(records)
    try:
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(html)
        os.chmod(output_path, 0o600)
    except OSError as e:
        raise ReportWriteError(f"write index file {output_path}: {e}") from e

    logger.info(f"Generated index file: {output_path}")
    return output_path
