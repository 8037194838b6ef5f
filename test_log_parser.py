#!/usr/bin/env python3
"""
Tests for turning wget logs into archive metadata, without running wget.
"""

import os

import pytest

from mebarchive.core.errors import EmptyArchiveError, LogParseError
from mebarchive.core.log_parser import WgetLogParser
from mebarchive.core.models import ArchiveMetadata


WGET_LOG = """--2024-01-01 12:00:00--  https://example.com/
Resolving example.com (example.com)... 93.184.216.34
Connecting to example.com (example.com)|93.184.216.34|:443... connected.
HTTP request sent, awaiting response... 200 OK
Length: 1256 (1.2K) [text/html]
Saving to: 'example.com/index.html'

     0K .                                                     100% 10.5M=0s

2024-01-01 12:00:01 (10.5 MB/s) - 'example.com/index.html' saved [1256/1256]

--2024-01-01 12:00:01--  https://example.com/style.css
Reusing existing connection to example.com:443.
HTTP request sent, awaiting response... 200 OK
Length: 310 [text/css]
Saving to: 'example.com/style.css'

--2024-01-01 12:00:01--  https://example.com/logo.png
Reusing existing connection to example.com:443.
HTTP request sent, awaiting response... 404 Not Found
2024-01-01 12:00:01 ERROR 404: Not Found.

FINISHED --2024-01-01 12:00:02--
Total wall clock time: 1.2s
Downloaded: 2 files, 1.5K in 0.001s (1.41 MB/s)
Converting links in example.com/index.html... 2-1
Converted links in 1 files in 0.001 seconds.
"""


def write_log(tmp_path, text, name="wget-1.log"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_minimal_log_fields(tmp_path):
    log = write_log(tmp_path, 'Saving to: "page.html"\nFINISHED --2024-01-01--\nDownloaded: 12345 bytes\n')
    meta = WgetLogParser().parse(log)
    assert meta.saved == ("page.html",)
    assert meta.finished == "2024-01-01"
    assert meta.downloaded == "12345 bytes"
    assert meta.index == "page.html"


def test_full_wget_log(tmp_path):
    meta = WgetLogParser().parse(write_log(tmp_path, WGET_LOG))
    assert meta.saved == ("example.com/index.html", "example.com/style.css")
    assert meta.index == "example.com/index.html"
    assert meta.finished == "2024-01-01 12:00:02"
    assert meta.downloaded == "2 files, 1.5K in 0.001s (1.41 MB/s)"


def test_downloaded_without_finished_is_ignored(tmp_path):
    meta = WgetLogParser().parse(write_log(tmp_path, "Downloaded: 99 files, 1M in 1s (1 MB/s)\n"))
    assert meta.downloaded == ""
    assert meta.finished == ""
    assert meta.is_empty


def test_downloaded_before_finished_then_after(tmp_path):
    text = (
        "Saving to: 'a.html'\n"
        "Downloaded: early\n"
        "FINISHED --2024-02-02 10:00:00--\n"
        "Downloaded: 1 files, 10K in 0s (20 MB/s)\n"
    )
    meta = WgetLogParser().parse(write_log(tmp_path, text))
    assert meta.downloaded == "1 files, 10K in 0s (20 MB/s)"


def test_last_finished_wins(tmp_path):
    text = "FINISHED --first--\nFINISHED --second--\n"
    meta = WgetLogParser().parse(write_log(tmp_path, text))
    assert meta.finished == "second"


def test_parse_is_idempotent(tmp_path):
    log = write_log(tmp_path, WGET_LOG)
    parser = WgetLogParser()
    assert parser.parse(log) == parser.parse(log)


def test_crlf_line_endings(tmp_path):
    path = tmp_path / "wget-crlf.log"
    path.write_bytes(b"Saving to: 'page.html'\r\nFINISHED --2024-01-01--\r\nDownloaded: 5 bytes\r\n")
    meta = WgetLogParser().parse(str(path))
    assert meta.saved == ("page.html",)
    assert meta.downloaded == "5 bytes"


def test_undecodable_bytes_do_not_break_parsing(tmp_path):
    path = tmp_path / "wget-bytes.log"
    path.write_bytes(b"Resolving \xff\xfe host\nSaving to: 'page.html'\n")
    assert WgetLogParser().parse(str(path)).saved == ("page.html",)


def test_empty_log_has_no_primary_artifact(tmp_path):
    meta = WgetLogParser().parse(write_log(tmp_path, ""))
    assert meta.is_empty
    with pytest.raises(EmptyArchiveError):
        meta.index


def test_missing_log_raises(tmp_path):
    with pytest.raises(LogParseError):
        WgetLogParser().parse(str(tmp_path / "nope.log"))


def test_metadata_is_immutable():
    meta = ArchiveMetadata(saved=("a.html",))
    with pytest.raises(AttributeError):
        meta.saved = ()


def test_non_utf8_saved_name_keeps_raw_bytes(tmp_path):
    path = tmp_path / "wget-latin1.log"
    path.write_bytes(b"Saving to: 'site/caf\xe9.html'\nFINISHED --2024-01-01--\n")
    meta = WgetLogParser().parse(str(path))
    assert len(meta.saved) == 1
    assert os.fsencode(meta.index) == b"site/caf\xe9.html"


@pytest.mark.parametrize("line", ["Saving to: ", "Saving to: '", "Saving to: ''"])
def test_saving_line_without_name_is_ignored(tmp_path, line):
    meta = WgetLogParser().parse(write_log(tmp_path, line + "\n"))
    assert meta.saved == ()
    assert meta.is_empty
