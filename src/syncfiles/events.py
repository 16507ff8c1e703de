"""Sync events and the sinks that receive them.

The mirror walk and the change watcher never print anything; every action
they attempt is reported as an event to a single sink.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Iterator, Protocol, Union


class EventKind(str, Enum):
    """Event kind enum.

    Members: ``ERROR``, ``COPY``, ``REMOVE``, ``WATCH``, ``MAX_DEPTH``,
    ``NO_DELETE``.
    """
    ERROR = "error"
    COPY = "copy"
    REMOVE = "remove"
    WATCH = "watch"
    MAX_DEPTH = "max-depth"
    NO_DELETE = "no-delete"

    def __str__(self) -> str:          # noqa: D105
        return self.value


@dataclass(frozen=True)
class Copy:
    """A copy of *source* onto *target* was attempted."""
    kind: ClassVar[EventKind] = EventKind.COPY
    source: str
    target: str

    @property
    def payload(self) -> tuple[str, str]:
        return (self.source, self.target)


@dataclass(frozen=True)
class Remove:
    """A deletion of *path* was attempted."""
    kind: ClassVar[EventKind] = EventKind.REMOVE
    path: str

    @property
    def payload(self) -> str:
        return self.path


@dataclass(frozen=True)
class Error:
    """An operation failed.

    Attributes:
        message: Human-readable error message.
        code: Optional exit code suggestion for the front end.
    """
    kind: ClassVar[EventKind] = EventKind.ERROR
    message: str
    code: int | None = None

    @property
    def payload(self) -> tuple[str, int | None]:
        return (self.message, self.code)


@dataclass(frozen=True)
class WatchStarted:
    """The watcher is ready and listening under *path*."""
    kind: ClassVar[EventKind] = EventKind.WATCH
    path: str

    @property
    def payload(self) -> str:
        return self.path


@dataclass(frozen=True)
class MaxDepthSkipped:
    """Recursion stopped at the depth limit for directory *path*."""
    kind: ClassVar[EventKind] = EventKind.MAX_DEPTH
    path: str

    @property
    def payload(self) -> str:
        return self.path


@dataclass(frozen=True)
class DeletionSkipped:
    """Extraneous *path* was left in place because deletion is disabled."""
    kind: ClassVar[EventKind] = EventKind.NO_DELETE
    path: str

    @property
    def payload(self) -> str:
        return self.path


SyncEvent = Union[Copy, Remove, Error, WatchStarted, MaxDepthSkipped, DeletionSkipped]


# ---------------------------------------------------------------------------
# Sinks
# ---------------------------------------------------------------------------

class EventSink(Protocol):
    def emit(self, event: SyncEvent) -> None: ...


class CallbackSink:
    """Adapt a ``callback(kind, payload)`` function to :class:`EventSink`."""

    def __init__(self, callback: Callable[[str, Any], None]) -> None:
        self._callback = callback

    def emit(self, event: SyncEvent) -> None:
        self._callback(event.kind.value, event.payload)


class EventLog:
    """Sink that records every event in emission order."""

    def __init__(self) -> None:
        self.events: list[SyncEvent] = []

    def emit(self, event: SyncEvent) -> None:
        self.events.append(event)

    def __iter__(self) -> Iterator[SyncEvent]:
        return iter(self.events)

    def __len__(self) -> int:
        return len(self.events)

    def kinds(self) -> list[EventKind]:
        return [e.kind for e in self.events]

    def of_kind(self, kind: EventKind | str) -> list[SyncEvent]:
        kind = EventKind(kind)
        return [e for e in self.events if e.kind == kind]

    def clear(self) -> None:
        self.events.clear()


class _NullSink:
    def emit(self, event: SyncEvent) -> None:
        pass


def as_sink(obj) -> EventSink:
    """Return an :class:`EventSink` for *obj*.

    *obj* may already be a sink (anything with ``emit``), a
    ``callback(kind, payload)`` function, or ``None`` to discard events.
    """
    if obj is None:
        return _NullSink()
    if hasattr(obj, "emit"):
        return obj
    if callable(obj):
        return CallbackSink(obj)
    raise TypeError(f"Expected an event sink or callback, got {type(obj).__name__}")
