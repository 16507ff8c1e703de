"""Mirror walk: make a target tree match a source tree.

The walk compares source and target path by path, copies what is missing
or stale, and applies the deletion policy to what the source no longer
has.  Recursion is driven by an explicit stack of generator frames so
deep trees do not hit the interpreter's recursion limit, while events and
the short-circuit folds keep the order of a plain recursive walk.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Generator, Union

from ._exclude import ExcludeFilter
from ._fsops import EntryKind, copy_path, delete_extra, destroy_path, stat_entry
from .events import Error, MaxDepthSkipped
from .exceptions import UnsupportedEntryError

if TYPE_CHECKING:
    from .events import EventSink
    from .options import SyncOptions

# A directory frame yields (source, target, depth) children and is sent back
# each child's result; its return value is the directory's result.
_Frame = Generator[tuple[str, str, int], bool, bool]
_Step = Union[bool, _Frame]


class _Walker:
    def __init__(self, root: str, options: SyncOptions, sink: EventSink) -> None:
        self.root = root
        self.options = options
        self.sink = sink
        self.exclude = ExcludeFilter(patterns=options.exclude)

    # ------------------------------------------------------------------
    def is_excluded(self, source: str) -> bool:
        """Absolute path first, then the path relative to the walk root."""
        if not self.exclude.active:
            return False
        if self.exclude.matches(source):
            return True
        if source != self.root:
            return self.exclude.is_excluded(os.path.relpath(source, self.root))
        return False

    def copy_ignore(self, directory: str, names: list[str]) -> set[str]:
        """``shutil.copytree`` ignore hook applying the exclusion filter."""
        if not self.exclude.active:
            return set()
        return {n for n in names if self.is_excluded(os.path.join(directory, n))}

    def _copy(self, source: str, target: str) -> bool:
        return copy_path(source, target, self.sink, ignore=self.copy_ignore)

    def _listdir(self, path: str) -> list[str] | None:
        try:
            return sorted(os.listdir(path))
        except OSError as exc:
            self.sink.emit(Error(str(exc)))
            return None

    # ------------------------------------------------------------------
    def step(self, source: str, target: str, depth: int) -> _Step:
        """Reconcile one pair, or return a frame if it needs to descend."""
        if self.is_excluded(source):
            return True

        try:
            src = stat_entry(source)
            dst = stat_entry(target)
        except OSError as exc:
            self.sink.emit(Error(str(exc)))
            return False

        if src.kind is EntryKind.MISSING:
            if dst.kind is EntryKind.MISSING:
                return True
            # Source is gone: the target entry is extraneous
            return delete_extra(target, self.options, self.sink)

        if src.kind is EntryKind.OTHER or dst.kind is EntryKind.OTHER:
            odd = source if src.kind is EntryKind.OTHER else target
            raise UnsupportedEntryError(
                f"Cannot mirror '{odd}': not a regular file or directory"
            )

        if dst.kind is EntryKind.MISSING:
            return self._copy(source, target)

        if src.kind is EntryKind.DIRECTORY and dst.kind is EntryKind.DIRECTORY:
            if depth == self.options.depth:
                self.sink.emit(MaxDepthSkipped(source))
                return True
            return self._directory(source, target, depth)

        if src.kind is EntryKind.FILE and dst.kind is EntryKind.FILE:
            if src.mtime_ns > dst.mtime_ns:
                return self._copy(source, target)
            return True

        # Incompatible kinds
        if self.options.delete:
            return destroy_path(target, self.sink) and self._copy(source, target)
        if src.kind is EntryKind.FILE:
            self.sink.emit(Error(
                f"Cannot copy file '{source}' to '{target}' as existing folder"
            ))
        else:
            self.sink.emit(Error(
                f"Cannot copy folder '{source}' to '{target}' as existing file"
            ))
        return False

    def _directory(self, source: str, target: str, depth: int) -> _Frame:
        names = self._listdir(source)
        copied = names is not None
        for name in names or ():
            copied = yield (os.path.join(source, name),
                            os.path.join(target, name), depth + 1)
            if not copied:
                break

        # Extraneous entries are checked even when copying failed
        extra = self._listdir(target)
        deleted = extra is not None
        for name in extra or ():
            counterpart = os.path.join(source, name)
            if os.path.lexists(counterpart) or self.is_excluded(counterpart):
                continue
            deleted = delete_extra(os.path.join(target, name), self.options, self.sink)
            if not deleted:
                break

        return copied and deleted

    # ------------------------------------------------------------------
    def run(self, source: str, target: str, depth: int) -> bool:
        first = self.step(source, target, depth)
        if isinstance(first, bool):
            return first
        stack: list[_Frame] = [first]
        value: bool | None = None
        while stack:
            try:
                child = stack[-1].send(value)
            except StopIteration as done:
                stack.pop()
                value = done.value
                continue
            outcome = self.step(*child)
            if isinstance(outcome, bool):
                value = outcome
            else:
                stack.append(outcome)
                value = None
        return bool(value)


def reconcile(root: str, source: str, target: str, options: SyncOptions,
              sink: EventSink, depth: int = 0) -> bool:
    """Make *target* mirror *source* and report whether it fully succeeded.

    *root* is the top of the sync and only serves to compute root-relative
    paths for exclusion.  *options* must already be resolved (see
    :func:`syncfiles.options.resolve_options`).

    Within a directory, children are processed in name order and processing
    stops at the first child that fails; extraneous target entries are then
    handled the same way.  I/O failures are reported to *sink* and folded
    into the result; only :class:`~syncfiles.exceptions.UnsupportedEntryError`
    is raised.
    """
    return _Walker(root, options, sink).run(source, target, depth)
