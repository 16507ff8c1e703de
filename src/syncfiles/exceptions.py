"""Exceptions for syncfiles."""


class SyncError(Exception):
    """Base class for syncfiles errors."""


class InvalidOptionError(SyncError, ValueError):
    """Raised when a sync option has an unusable value (e.g. a negative depth)."""


class UnsupportedEntryError(SyncError):
    """Raised when a path is neither a file, a directory, nor missing.

    Sockets, FIFOs and device nodes have no mirroring semantics, so the
    walk stops instead of guessing.
    """
