"""Dotfile-aware glob matching for exclusion patterns."""

from __future__ import annotations

from fnmatch import fnmatchcase as _fnmatch


def _glob_match(pattern: str, name: str) -> bool:
    """Match *name* against a glob *pattern* segment.

    ``*`` and ``?`` do not match a leading ``.`` unless the pattern itself
    starts with ``.`` (Unix/rsync convention).
    """
    if not pattern.startswith(".") and name.startswith("."):
        return False
    return _fnmatch(name, pattern)


def _match_segments(pat: list[str], parts: list[str]) -> bool:
    """Match path *parts* against pattern segments *pat*; ``**`` spans levels."""
    # Memoised on (pattern index, path index) so runs of ** stay linear.
    seen: set[tuple[int, int]] = set()
    stack = [(0, 0)]
    while stack:
        i, j = stack.pop()
        if (i, j) in seen:
            continue
        seen.add((i, j))
        if i == len(pat):
            if j == len(parts):
                return True
            continue
        seg = pat[i]
        if seg == "**":
            # Zero levels, or swallow one non-dot level and keep **
            stack.append((i + 1, j))
            if j < len(parts) and not parts[j].startswith("."):
                stack.append((i, j + 1))
            continue
        if j < len(parts):
            if seg == parts[j] or _glob_match(seg, parts[j]):
                stack.append((i + 1, j + 1))
    return False


def glob_match_path(pattern: str, path: str) -> bool:
    """Match a whole ``/``-separated *path* against *pattern*.

    Patterns are matched against the full path, not its basename:
    ``*.log`` matches ``a.log`` but not ``sub/a.log`` (use ``**/*.log``).
    Absolute paths keep their leading empty segment, so ``/tmp/*`` only
    matches absolute paths.
    """
    if not pattern:
        return False
    return _match_segments(pattern.split("/"), path.split("/"))
