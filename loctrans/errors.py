"""
Error types raised by LocTrans.

Fatal errors (everything except TranslationError) abort a run before any
output is written. TranslationError is raised by a translator for a
single string and is recovered by the batch dispatcher.
"""


class LocTransError(Exception):
    """Base class for all LocTrans errors."""


class ConfigError(LocTransError, ValueError):
    """A configuration value is missing or out of range."""


class NoFilesMatchedError(LocTransError):
    """The file selection pattern matched nothing."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        super().__init__(f"No files found matching pattern: {pattern}")


class UnsupportedFormatError(LocTransError):
    """A file extension has no known codec."""

    def __init__(self, path: str, extension: str):
        self.path = path
        self.extension = extension
        super().__init__(f"Unsupported file format '{extension or '<none>'}': {path}")


class MalformedDocumentError(LocTransError):
    """A localization file could not be parsed into a key-value tree."""


class PortUnavailableError(LocTransError):
    """The translation backend is not reachable or the model is missing."""


class TranslationError(LocTransError):
    """A single translation call failed."""
