class MhtmlExtractorError(Exception):
    """Base error for all user-facing extractor exceptions."""


class ConfigurationError(MhtmlExtractorError):
    """Raised when configuration is invalid or incomplete."""


class ArchiveIOError(MhtmlExtractorError, OSError):
    """Raised when an archive or output path cannot be opened, created or written."""


class HeaderError(MhtmlExtractorError):
    """Raised when the top-level MIME header is unreadable or lacks a boundary."""


class PartDecodeError(MhtmlExtractorError):
    """Raised when a single MIME part cannot be read or decoded."""


class ScriptMiningError(MhtmlExtractorError):
    """Raised when scripts cannot be mined from the primary HTML document."""


class InvalidIndexError(MhtmlExtractorError, IndexError):
    """Raised when a selected resource index is out of range."""
