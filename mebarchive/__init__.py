"""
meb-archive: Offline Bookmark Archiver

A utility for downloading every page bookmarked in a Firefox folder, together
with its images, scripts and stylesheets, into a local directory with wget,
then rendering an index page that links to each captured copy.
"""

__version__ = "1.0"
__author__ = "meb-archive Project"
__description__ = "Offline Bookmark Archiver"
