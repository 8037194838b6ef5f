"""
Bookmark source backed by a Firefox ``places.sqlite`` database.

Folders and bookmarks live in ``moz_bookmarks`` (type 2 = folder, type 1 =
bookmark); the URL and its hash live in ``moz_places``, referenced by ``fk``.
"""

from __future__ import annotations

import sqlite3
import logging
from typing import List

from mebarchive.core.errors import BookmarkSourceError
from mebarchive.core.models import BookmarkRecord, stable_url_hash


TYPE_BOOKMARK = 1
TYPE_FOLDER = 2

logger = logging.getLogger(__name__)


def connect_readonly(db_path: str) -> sqlite3.Connection:
    """
    Open places.sqlite without taking locks.

    ``immutable=1`` lets the archive run while Firefox holds the database open.
    """
    try:
        return sqlite3.connect(f"file:{db_path}?mode=ro&immutable=1", uri=True)
    except sqlite3.Error as e:
        raise BookmarkSourceError(f"open database {db_path}: {e}") from e


def read_folder(conn: sqlite3.Connection, folder: str) -> List[BookmarkRecord]:
    """
    Read the bookmarks directly inside a named folder, in their display order.

    Sub-folders are not traversed.

    Raises:
        BookmarkSourceError: the folder does not exist or a query failed
    """
    try:
        row = conn.execute(
            "SELECT id FROM moz_bookmarks WHERE title = ? AND type = ?",
            (folder, TYPE_FOLDER),
        ).fetchone()
        if row is None:
            raise BookmarkSourceError(f"query moz_bookmarks table: folder {folder!r} not found")
        folder_id = row[0]
        logger.info(f"get bookmarks: got folder id = {folder_id}")

        fkeys = [
            fk for (fk,) in conn.execute(
                "SELECT fk FROM moz_bookmarks WHERE parent = ? AND type = ? ORDER BY position",
                (folder_id, TYPE_BOOKMARK),
            )
        ]
        logger.info(f"get bookmarks: got {len(fkeys)} fkeys")

        records: List[BookmarkRecord] = []
        for place_id in fkeys:
            place = conn.execute(
                "SELECT title, url_hash, url FROM moz_places WHERE id = ?",
                (place_id,),
            ).fetchone()
            if place is None:
                raise BookmarkSourceError(f"query moz_places for bookmark details: no place {place_id}")
            title, url_hash, url = place
            if url_hash is None:
                # Older profiles can leave url_hash unset
                url_hash = stable_url_hash(url)
            records.append(BookmarkRecord(title=title or "", url=url, url_hash=int(url_hash)))
    except sqlite3.Error as e:
        raise BookmarkSourceError(f"read bookmarks from folder {folder!r}: {e}") from e

    return records


def load_bookmarks(db_path: str, folder: str) -> List[BookmarkRecord]:
    logger.info(f"will read bookmarks from {db_path!r}")
    conn = connect_readonly(db_path)
    try:
        return read_folder(conn, folder)
    finally:
        conn.close()
