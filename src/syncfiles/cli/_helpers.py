"""Option parsing and the main CLI command."""

from __future__ import annotations

import os

import click

from .. import __version__
from .._exclude import ExcludeFilter
from .._sync import sync
from ..exceptions import InvalidOptionError, UnsupportedEntryError
from ..options import parse_depth, resolve_options
from ._output import ConsoleSink

EXIT_FAILURE = 1


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _status(ctx, msg):
    """Emit a status message to stderr when verbose mode (-v) is on."""
    if ctx.obj.get("verbose"):
        click.echo(msg, err=True)


def _parse_depth_option(ctx, param, value):
    """Click callback: validate --depth (a non-negative number or 'inf')."""
    try:
        return parse_depth(value)
    except InvalidOptionError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param)


def _collect_excludes(exclude, exclude_from) -> tuple[str, ...]:
    """Combine --exclude values and --exclude-from lines into one tuple."""
    try:
        return ExcludeFilter(patterns=exclude, exclude_from=exclude_from).patterns
    except OSError as exc:
        raise click.ClickException(f"Cannot read exclude file: {exc}")


# ---------------------------------------------------------------------------
# Main command
# ---------------------------------------------------------------------------

@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("source", type=click.Path())
@click.argument("target", type=click.Path())
@click.option("--watch", "-w", is_flag=True, default=False,
              help="Watch changes in source and keep target in sync.")
@click.option("--no-delete", "no_delete", is_flag=True, default=False,
              help="Prevent deleting extraneous files from target.")
@click.option("--depth", "-d", default=None, envvar="SYNCFILES_DEPTH",
              callback=_parse_depth_option, metavar="N",
              help="Maximum depth if you have performance issues (default: unbounded).")
@click.option("--exclude", "-e", multiple=True, metavar="PATTERN",
              help="Exclude files or folders matching a glob pattern (repeatable).")
@click.option("--exclude-from", "exclude_from", type=click.Path(exists=True, dir_okay=False),
              envvar="SYNCFILES_EXCLUDE_FROM",
              help="Read exclude patterns from file (or set SYNCFILES_EXCLUDE_FROM).")
@click.option("--debounce", type=int, default=1600,
              help="Debounce delay in ms for --watch (default: 1600).")
@click.option("-v", "--verbose", is_flag=True, help="More output.")
@click.version_option(__version__, prog_name="syncfiles")
@click.pass_context
def main(ctx, source, target, watch, no_delete, depth, exclude, exclude_from,
         debounce, verbose):
    """Mirror SOURCE onto TARGET.

    SOURCE is a file or folder whose content will be mirrored to TARGET.
    Newer files (by modification time) are copied, extraneous entries in
    TARGET are deleted unless --no-delete is given.

    \b
    Examples:
      syncfiles ./src ./backup
      syncfiles --no-delete -e "**/*.tmp" ./src ./backup
      syncfiles --watch ./assets ./public/assets
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    if watch and debounce < 100:
        raise click.ClickException("--debounce must be at least 100 ms")

    options = resolve_options({
        "watch": watch,
        "delete": not no_delete,
        "depth": depth,
        "exclude": _collect_excludes(exclude, exclude_from),
    })
    source = os.path.abspath(source)
    target = os.path.abspath(target)
    shown_depth = "unbounded" if options.depth is None else options.depth
    _status(ctx, f"Mirroring {source} -> {target} "
                 f"(delete={options.delete}, depth={shown_depth})")

    sink = ConsoleSink(verbose=verbose)
    try:
        ok = sync(source, target, options, sink, debounce=debounce)
    except KeyboardInterrupt:
        click.echo("\nStopped watching.")
        return
    except UnsupportedEntryError as exc:
        raise click.ClickException(str(exc))
    if not ok:
        ctx.exit(EXIT_FAILURE)

