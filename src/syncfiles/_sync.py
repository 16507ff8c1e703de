"""One-way sync: an initial mirror, then optional watching.

Mirror a source path onto a target path (``sync``), and keep it mirrored
as the source changes when ``watch`` is set.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any, Mapping

from .events import Error, as_sink
from .exceptions import InvalidOptionError
from .mirror import reconcile
from .options import SyncOptions, resolve_options
from .watcher import DEFAULT_DEBOUNCE, watch

if TYPE_CHECKING:
    import threading


def sync(source: str | os.PathLike, target: str | os.PathLike,
         options: SyncOptions | Mapping[str, Any] | None = None,
         sink=None, *, debounce: int = DEFAULT_DEBOUNCE,
         stop_event: threading.Event | None = None) -> bool:
    """Make *target* identical to *source*.

    Args:
        source: File or directory to mirror from.
        target: Path to mirror onto; created if missing.
        options: :class:`SyncOptions` or a mapping of overrides for
            :data:`~syncfiles.options.DEFAULTS`.
        sink: :class:`~syncfiles.events.EventSink` or ``callback(kind, payload)``
            receiving every event.  ``None`` discards them.
        debounce: Watch-mode debounce in milliseconds.
        stop_event: Ends watch mode when set.

    Returns:
        ``True`` if the initial mirror fully succeeded (and, in watch mode,
        once watching ends normally).  ``False`` on invalid options or a
        failed mirror, in which case the watcher is never started, or when
        the watch ended on a notification channel failure.
    """
    sink = as_sink(sink)
    try:
        opts = resolve_options(options)
    except InvalidOptionError as exc:
        sink.emit(Error(str(exc)))
        return False

    source = os.path.abspath(source)
    target = os.path.abspath(target)

    if not reconcile(source, source, target, opts, sink):
        return False

    if opts.watch:
        return watch(source, target, opts, sink,
                     debounce=debounce, stop_event=stop_event)
    return True
