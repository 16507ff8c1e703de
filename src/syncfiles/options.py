"""Sync options and the one place where defaults are merged in."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from .exceptions import InvalidOptionError

_DEPTH_MESSAGE = "Expected valid number for option 'depth'"


@dataclass(frozen=True)
class SyncOptions:
    """Policy for one sync invocation.

    Attributes:
        watch: Keep the target in sync after the initial mirror.
        delete: Allow removing extraneous and type-conflicting target entries.
        depth: Maximum recursion depth (inclusive), ``None`` for unbounded.
        exclude: Glob patterns exempting paths from every action.
    """
    watch: bool = False
    delete: bool = False
    depth: int | None = None
    exclude: tuple[str, ...] = ()

    @property
    def unbounded(self) -> bool:
        return self.depth is None


DEFAULTS: Mapping[str, Any] = {
    "watch": False,
    "delete": False,
    "depth": None,
    "exclude": (),
}


def parse_depth(value) -> int | None:
    """Convert a depth setting to an ``int`` or ``None`` (unbounded).

    Accepts non-negative integers, integral floats, ``math.inf`` and their
    string forms (``"3"``, ``"inf"``, ``"Infinity"``).
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidOptionError(_DEPTH_MESSAGE)
    if isinstance(value, int):
        number = float(value)
    elif isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise InvalidOptionError(_DEPTH_MESSAGE) from None
    else:
        raise InvalidOptionError(_DEPTH_MESSAGE)
    if math.isnan(number) or number < 0:
        raise InvalidOptionError(_DEPTH_MESSAGE)
    if math.isinf(number):
        return None
    if not number.is_integer():
        raise InvalidOptionError(_DEPTH_MESSAGE)
    return int(number)


def _normalize_exclude(value) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(value)


def resolve_options(options: SyncOptions | Mapping[str, Any] | None = None) -> SyncOptions:
    """Merge *options* with :data:`DEFAULTS` and validate the result.

    Raises:
        InvalidOptionError: unknown key or unusable ``depth``.
    """
    if isinstance(options, SyncOptions):
        return replace(
            options,
            depth=parse_depth(options.depth),
            exclude=_normalize_exclude(options.exclude),
        )
    overrides = dict(options or {})
    known = {f.name for f in fields(SyncOptions)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise InvalidOptionError(f"Unknown option(s): {', '.join(unknown)}")
    merged = {**DEFAULTS, **{k: v for k, v in overrides.items() if v is not None}}
    return SyncOptions(
        watch=bool(merged["watch"]),
        delete=bool(merged["delete"]),
        depth=parse_depth(merged["depth"]),
        exclude=_normalize_exclude(merged["exclude"]),
    )
