"""Terminal rendering of sync events."""

from __future__ import annotations

import datetime
import os

import click

from ..events import EventKind

PRIORITY = {
    EventKind.ERROR: "high",
    EventKind.COPY: "normal",
    EventKind.REMOVE: "normal",
    EventKind.WATCH: "normal",
    EventKind.MAX_DEPTH: "low",
    EventKind.NO_DELETE: "low",
}

DEFAULT_ERROR_CODE = 2


def _rel(path: str, root: str) -> str:
    """Path relative to *root* for display, absolute if on another drive."""
    try:
        return os.path.relpath(path, root)
    except ValueError:
        return path


class ConsoleSink:
    """Event sink that prints to the terminal and exits on the first error.

    Low-priority events (``max-depth``, ``no-delete``) are only shown when
    *verbose* is set.  Paths are shown relative to *root* (the working
    directory by default).  Once *timestamps* is on, each line is prefixed
    with the wall-clock time, as used in watch mode.
    """

    def __init__(self, *, verbose: bool = False, root: str | None = None) -> None:
        self.verbose = verbose
        self.root = root or os.getcwd()
        self.timestamps = False

    def _echo(self, msg: str, *, err: bool = False) -> None:
        if self.timestamps:
            now = datetime.datetime.now().strftime("%H:%M:%S")
            msg = f"[{now}] {msg}"
        click.echo(msg, err=err)

    def _path(self, path: str) -> str:
        return click.style(_rel(path, self.root), fg="yellow")

    def emit(self, event) -> None:
        if PRIORITY.get(event.kind, "low") == "low" and not self.verbose:
            return

        if event.kind is EventKind.ERROR:
            self._echo(click.style(event.message, fg="red", bold=True), err=True)
            raise SystemExit(event.code or DEFAULT_ERROR_CODE)
        if event.kind is EventKind.COPY:
            self._echo(f"{click.style('COPY', bold=True)} "
                       f"{self._path(event.source)} to {self._path(event.target)}")
        elif event.kind is EventKind.REMOVE:
            self._echo(f"{click.style('DELETE', bold=True)} {self._path(event.path)}")
        elif event.kind is EventKind.WATCH:
            self.timestamps = True
            click.echo(f"{click.style('WATCHING', bold=True)} {self._path(event.path)}")
        elif event.kind is EventKind.MAX_DEPTH:
            self._echo(f"{click.style('MAX-DEPTH', bold=True, dim=True)}: "
                       f"{self._path(event.path)} too deep", err=True)
        elif event.kind is EventKind.NO_DELETE:
            self._echo(f"{click.style('IGNORED', bold=True, dim=True)}: "
                       f"{self._path(event.path)} extraneous but not deleted "
                       f"(drop {click.style('--no-delete', fg='blue')})", err=True)
