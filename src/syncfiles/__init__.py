from .options import SyncOptions, DEFAULTS, resolve_options, parse_depth
from .events import (
    EventKind, SyncEvent, EventSink, CallbackSink, EventLog, as_sink,
    Copy, Remove, Error, WatchStarted, MaxDepthSkipped, DeletionSkipped,
)
from .exceptions import SyncError, InvalidOptionError, UnsupportedEntryError
from .mirror import reconcile
from .watcher import watch, ChangeHandler, WatchFilter
from ._sync import sync

__version__ = "0.4.0"

__all__ = [
    "SyncOptions", "DEFAULTS", "resolve_options", "parse_depth",
    "EventKind", "SyncEvent", "EventSink", "CallbackSink", "EventLog", "as_sink",
    "Copy", "Remove", "Error", "WatchStarted", "MaxDepthSkipped", "DeletionSkipped",
    "SyncError", "InvalidOptionError", "UnsupportedEntryError",
    "reconcile", "watch", "ChangeHandler", "WatchFilter", "sync",
]
