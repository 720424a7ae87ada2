"""linehist CLI entry point."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from linehist import __version__
from linehist.codec import escape

logger = logging.getLogger(__name__)


def _history_file(ctx: click.Context):
    from linehist.history_file import HistoryFile

    return HistoryFile(ctx.obj["file"], ctx.obj["config"])


def _fail(ctx: click.Context, action: str, error: OSError) -> None:
    click.echo(f"Warning: history could not be {action}: {error}", err=True)
    ctx.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(), default=None, help="Config file path")
@click.option("--file", "-f", "file_", type=click.Path(), default=None, help="History file path")
@click.option("--log-level", default=None, help="Log level (default: log_level from the config)")
@click.option("--json-logs", is_flag=True, help="JSON log output")
@click.pass_context
def main(
    ctx: click.Context,
    config: str | None,
    file_: str | None,
    log_level: str | None,
    json_logs: bool,
) -> None:
    """linehist - bounded, shareable line-editor history."""
    from linehist.config.loader import load_config
    from linehist.logging_config import setup_logging

    history_config = load_config(Path(config) if config else None)
    setup_logging(level=log_level or history_config.log_level, json_output=json_logs)
    ctx.ensure_object(dict)
    ctx.obj["config"] = history_config
    ctx.obj["file"] = Path(file_) if file_ else None


@main.command()
@click.option("--limit", "-n", type=int, default=None, help="Show only the last N entries")
@click.option("--raw", is_flag=True, help="Print entries escaped, as stored in the file")
@click.pass_context
def show(ctx: click.Context, limit: int | None, raw: bool) -> None:
    """Print the history, oldest first."""
    hf = _history_file(ctx)
    try:
        hf.load()
    except OSError as e:
        _fail(ctx, "loaded", e)
    entries = hf.contents()
    if limit is not None:
        entries = entries[-limit:] if limit > 0 else []
    for entry in entries:
        click.echo(escape(entry) if raw else entry)


@main.command()
@click.argument("entries", nargs=-1, required=True)
@click.pass_context
def add(ctx: click.Context, entries: tuple[str, ...]) -> None:
    """Add entries and merge them into the history file."""
    hf = _history_file(ctx)
    try:
        hf.load()
        for entry in entries:
            hf.add(entry)
        hf.save()
    except OSError as e:
        _fail(ctx, "saved", e)
    logger.info("Added %d entries to %s", len(entries), hf.path)


@main.command()
@click.pass_context
def stats(ctx: click.Context) -> None:
    """Show entry count, encoded size and limits."""
    hf = _history_file(ctx)
    try:
        hf.load()
    except OSError as e:
        _fail(ctx, "loaded", e)
    history = hf.history
    click.echo(f"File:        {hf.path}")
    click.echo(f"Entries:     {history.length}")
    click.echo(f"Size:        {history.size} bytes")
    click.echo(f"Max entries: {'unbounded' if hf.config.max_entries is None else history.max_entries}")
    click.echo(f"Max size:    {'unbounded' if hf.config.max_size is None else history.max_size}")


@main.command()
@click.pass_context
def compact(ctx: click.Context) -> None:
    """Rewrite the history file under the configured limits."""
    hf = _history_file(ctx)
    try:
        hf.load()
        # Rewrite everything that was loaded, not just new entries
        hf.history.old_count = 0
        hf.save(append=False)
    except OSError as e:
        _fail(ctx, "saved", e)
    click.echo(f"Compacted {hf.path}: {hf.history.length} entries, {hf.history.size} bytes")


if __name__ == "__main__":
    main()
