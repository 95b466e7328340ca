"""Core topoguide exceptions."""


class TopoGuideError(Exception):
    """Base exception for topoguide package errors.

    Users should be able to use this base class to catch errors
    emitted by topoguide.
    """


class PathNotFoundError(TopoGuideError, FileNotFoundError):
    """A path could not be located in any of the places searched."""

    def __init__(self, message, *, tried=()):
        super().__init__(message)
        self.tried = tuple(tried)


class ConfigurationError(TopoGuideError):
    """Configuration file or value is invalid."""


class SourceError(TopoGuideError):
    """A source file could not be read or parsed."""

    def __init__(self, message, *, path=None, line=1, column=0):
        super().__init__(message)
        self.path = path
        self.line = line
        self.column = column
