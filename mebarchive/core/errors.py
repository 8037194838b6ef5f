"""
Exception hierarchy for meb-archive.

Two severities exist. A ``FatalError`` aborts the whole run before any report
is written. A ``JobError`` only affects the bookmark being processed: the
worker logs a warning and continues with the next job.
"""


class ArchiveError(Exception):
    """Base class for all meb-archive errors."""


class FatalError(ArchiveError):
    """Setup, configuration or output failure that ends the run."""


class ConfigError(FatalError):
    """Invalid run configuration."""


class ProfileError(FatalError):
    """The Firefox profile could not be resolved from profiles.ini."""


class BookmarkSourceError(FatalError):
    """The bookmark database could not be read or the folder is missing."""


class FetchToolError(FatalError):
    """The fetch tool could not be launched at all."""


class ReportWriteError(FatalError):
    """The index page or run manifest could not be written."""


class JobError(ArchiveError):
    """Failure confined to a single bookmark."""


class LogParseError(JobError):
    """A fetch log could not be read."""


class EmptyArchiveError(LookupError):
    """The primary artifact of an archive with no saved files was requested."""
