"""Filesystem primitives shared by the mirror walk and the watcher.

Each primitive reports its intent as an event *before* touching the disk,
then turns any ``OSError`` into an :class:`~syncfiles.events.Error` event
and a ``False`` result.
"""

from __future__ import annotations

import errno
import os
import shutil
import stat
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

from .events import Copy, DeletionSkipped, Error, Remove

if TYPE_CHECKING:
    from .events import EventSink
    from .options import SyncOptions


class EntryKind(str, Enum):
    """What a path currently is on disk."""
    MISSING = "missing"
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"

    def __str__(self) -> str:          # noqa: D105
        return self.value


@dataclass(frozen=True)
class FileSystemEntry:
    """A path plus its kind, read fresh from disk.

    Attributes:
        path: The path that was stat'ed.
        kind: :class:`EntryKind` of the path.
        mtime_ns: Modification time in nanoseconds (``None`` unless a file).
    """
    path: str
    kind: EntryKind
    mtime_ns: int | None = None

    @property
    def exists(self) -> bool:
        return self.kind is not EntryKind.MISSING


def stat_entry(path: str) -> FileSystemEntry:
    """Classify *path*; a path that does not exist is ``MISSING``, not an error.

    Symlinks are followed, so a dangling link reads as missing.  Other
    ``OSError`` (e.g. permission denied) propagates.
    """
    try:
        st = os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return FileSystemEntry(path, EntryKind.MISSING)
    if stat.S_ISDIR(st.st_mode):
        return FileSystemEntry(path, EntryKind.DIRECTORY)
    if stat.S_ISREG(st.st_mode):
        return FileSystemEntry(path, EntryKind.FILE, st.st_mtime_ns)
    return FileSystemEntry(path, EntryKind.OTHER)


def _error_message(exc: OSError) -> str:
    if isinstance(exc, shutil.Error) and exc.args and isinstance(exc.args[0], list):
        # copytree collects (src, dst, why) triples
        return "; ".join(str(why) for _src, _dst, why in exc.args[0])
    return str(exc)


# ---------------------------------------------------------------------------
# Copy
# ---------------------------------------------------------------------------

def _copy_tree(source: str, target: str, sink: EventSink,
               ignore: Callable[[str, list[str]], set[str]] | None) -> None:
    def _copy_file(src, dst, *, follow_symlinks=True):
        sink.emit(Copy(src, dst))
        return shutil.copy2(src, dst, follow_symlinks=follow_symlinks)

    shutil.copytree(source, target, ignore=ignore,
                    copy_function=_copy_file, dirs_exist_ok=True)


def copy_path(source: str, target: str, sink: EventSink, *,
              ignore: Callable[[str, list[str]], set[str]] | None = None) -> bool:
    """Copy *source* (file or directory tree) onto *target*, overwriting.

    Emits ``Copy(source, target)`` first.  Directory copies also report
    each file copied beneath them.  *ignore* is passed to
    :func:`shutil.copytree` to leave excluded entries out.
    Returns ``False`` (after an ``Error`` event) on failure.
    """
    sink.emit(Copy(source, target))
    try:
        parent = os.path.dirname(target)
        if parent:
            os.makedirs(parent, exist_ok=True)
        if os.path.isdir(source):
            _copy_tree(source, target, sink, ignore)
        else:
            if os.path.isdir(target):
                raise IsADirectoryError(
                    errno.EISDIR, "Cannot overwrite directory with file", target,
                )
            shutil.copy2(source, target)
        return True
    except OSError as exc:
        sink.emit(Error(_error_message(exc)))
        return False


# ---------------------------------------------------------------------------
# Remove
# ---------------------------------------------------------------------------

def destroy_path(path: str, sink: EventSink) -> bool:
    """Remove *path* whether it is a file, a symlink or a directory tree.

    Emits ``Remove(path)`` first.  A path that is already gone counts as
    removed.  Returns ``False`` (after an ``Error`` event) on failure.
    """
    sink.emit(Remove(path))
    try:
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.unlink(path)
        return True
    except FileNotFoundError:
        return True
    except OSError as exc:
        sink.emit(Error(_error_message(exc)))
        return False


def delete_extra(path: str, options: SyncOptions, sink: EventSink) -> bool:
    """Deletion policy for a target entry with no source counterpart.

    With ``delete`` enabled the entry is destroyed; otherwise it is left in
    place, reported as ``DeletionSkipped``, and counts as success.
    """
    if options.delete:
        return destroy_path(path, sink)
    sink.emit(DeletionSkipped(path))
    return True
