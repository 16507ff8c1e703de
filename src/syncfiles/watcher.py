"""Watch mode: keep a mirrored target in sync as the source changes."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Iterable

import watchfiles
from watchfiles import Change

from ._exclude import ExcludeFilter
from ._fsops import copy_path, delete_extra
from .events import Error, WatchStarted

if TYPE_CHECKING:
    import threading

    from .events import EventSink
    from .options import SyncOptions

DEFAULT_DEBOUNCE = 1600
# Upper bound in ms on the wait before WatchStarted is reported
READY_TIMEOUT = 500


class WatchFilter:
    """First-line filter handed to :func:`watchfiles.watch`.

    Drops changes deeper than ``options.depth`` levels of subdirectories
    below *source* and changes whose absolute path, or one of its parent
    directories up to *source*, matches an exclusion pattern.
    """

    def __init__(self, source: str, options: SyncOptions) -> None:
        self.source = os.path.abspath(source)
        self.depth = options.depth
        self.exclude = ExcludeFilter(patterns=options.exclude)

    def __call__(self, change: Change, path: str) -> bool:
        if self.depth is not None:
            rel = os.path.relpath(path, self.source)
            if rel.count(os.sep) > self.depth:
                return False
        return not self.exclude.is_excluded_below(self.source, path)


class ChangeHandler:
    """Apply change notifications under *source* to *target*.

    What happens to a path depends on the source as it is when the change
    is handled, not on the reported change kind: a path that exists is
    copied over, a path that is gone goes through the deletion policy.
    Exclusion is tested on the source-relative path only.
    """

    def __init__(self, source: str, target: str, options: SyncOptions,
                 sink: EventSink) -> None:
        self.source = os.path.abspath(source)
        self.target = os.path.abspath(target)
        self.options = options
        self.sink = sink
        self.exclude = ExcludeFilter(patterns=options.exclude)

    def _ignore(self, directory: str, names: list[str]) -> set[str]:
        if not self.exclude.active:
            return set()
        return {
            n for n in names
            if self.exclude.is_excluded(
                os.path.relpath(os.path.join(directory, n), self.source))
        }

    def handle(self, change: Change, path: str) -> bool | None:
        """Apply one change; returns the primitive's result, ``None`` if skipped."""
        relative = os.path.relpath(path, self.source)
        if relative == os.curdir or relative.startswith(os.pardir + os.sep):
            return None
        if self.exclude.is_excluded(relative):
            return None
        dest = os.path.join(self.target, relative)
        if not os.path.lexists(path):
            return delete_extra(dest, self.options, self.sink)
        return copy_path(path, dest, self.sink, ignore=self._ignore)

    def handle_batch(self, changes: Iterable[tuple[Change, str]]) -> None:
        """Apply a batch one path at a time, in path order.

        Several records for the same path collapse into a single action.
        """
        latest: dict[str, Change] = {}
        for change, path in changes:
            latest[path] = change
        for path in sorted(latest):
            self.handle(latest[path], path)


def watch(source: str, target: str, options: SyncOptions, sink: EventSink, *,
          debounce: int = DEFAULT_DEBOUNCE,
          stop_event: threading.Event | None = None) -> bool:
    """Watch *source* and mirror every change into *target*.

    Call only after a successful :func:`~syncfiles.mirror.reconcile` of the
    same pair.  Emits ``WatchStarted(source)`` once the watcher has
    subscribed (its first timeout or batch).  Runs until *stop_event* is set
    or the process is interrupted.

    Returns ``True`` when watching ends normally, ``False`` after a failure
    of the notification channel, which is also reported as an ``Error``
    event.
    """
    handler = ChangeHandler(source, target, options, sink)
    watch_filter = WatchFilter(source, options)
    ready = False
    try:
        for changes in watchfiles.watch(source, watch_filter=watch_filter,
                                        debounce=debounce, stop_event=stop_event,
                                        rust_timeout=READY_TIMEOUT,
                                        yield_on_timeout=True):
            if not ready:
                ready = True
                sink.emit(WatchStarted(source))
            if changes:
                handler.handle_batch(changes)
    except (OSError, RuntimeError) as exc:
        sink.emit(Error(str(exc)))
        return False
    return True
