"""Exclude-filter support for mirror and watch operations.

Combines ``--exclude`` patterns and ``--exclude-from`` files into a single
predicate used by the mirror walk and the change watcher.

Pattern syntax is glob-style (see :mod:`syncfiles._glob`).  Empty patterns
are dropped, so an unset ``--exclude`` never matches anything.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from ._glob import glob_match_path


def _to_posix(path: str) -> str:
    return path.replace(os.sep, "/") if os.sep != "/" else path


class ExcludeFilter:
    """Combines --exclude patterns and --exclude-from files."""

    def __init__(
        self,
        *,
        patterns: Iterable[str | None] | None = None,
        exclude_from: str | os.PathLike | None = None,
    ) -> None:
        lines: list[str] = [p for p in patterns or () if p]
        if exclude_from is not None:
            for raw in Path(exclude_from).read_text(encoding="utf-8").splitlines():
                line = raw.strip()
                if line and not line.startswith("#"):
                    lines.append(line)
        self._patterns: tuple[str, ...] = tuple(lines)

    def __repr__(self) -> str:
        return f"ExcludeFilter(patterns={list(self._patterns)!r})"

    # ------------------------------------------------------------------
    @property
    def active(self) -> bool:
        """True if any pattern is configured."""
        return bool(self._patterns)

    @property
    def patterns(self) -> tuple[str, ...]:
        return self._patterns

    # ------------------------------------------------------------------
    def matches(self, path: str) -> bool:
        """Check *path* itself (absolute or relative) against every pattern."""
        if not self._patterns:
            return False
        check = _to_posix(path)
        return any(glob_match_path(p, check) for p in self._patterns)

    # ------------------------------------------------------------------
    def is_excluded(self, rel_path: str) -> bool:
        """Check a root-relative path and each of its ancestor directories.

        ``build/out/app.js`` is excluded by ``build`` because its parent
        directory is.
        """
        if not self._patterns:
            return False
        parts = [p for p in _to_posix(rel_path).split("/") if p and p != "."]
        for end in range(1, len(parts) + 1):
            if self.matches("/".join(parts[:end])):
                return True
        return False

    # ------------------------------------------------------------------
    def is_excluded_below(self, root: str, path: str) -> bool:
        """Check absolute *path* and each parent directory up to *root*.

        A change at ``<root>/secret/x.txt`` is excluded by the absolute
        pattern ``<root>/secret``.
        """
        if not self._patterns:
            return False
        root = os.path.abspath(root)
        current = os.path.abspath(path)
        while True:
            if self.matches(current):
                return True
            if current == root:
                return False
            parent = os.path.dirname(current)
            if parent == current:
                return False
            current = parent
