"""Command-line helpers for checking classification and summaries."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from .classifier import is_tracking_file
from .config import ConfigError, PreviewSettings
from .paths import get_config_path
from .reporting import MarkdownDaySummary

app = typer.Typer(help="Time tracking preview helpers for Neovim.")


@app.callback(no_args_is_help=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs."),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        path_type=Path,
        help="Location of the TOML config file.",
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    ctx.obj = config_path


def _load_settings(ctx: typer.Context) -> PreviewSettings:
    try:
        return PreviewSettings.from_file(ctx.obj)
    except ConfigError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2) from exc


@app.command()
def classify(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="File to check."),
    data_dir: Optional[Path] = typer.Option(
        None,
        "--data-dir",
        path_type=Path,
        help="Tracking directory (defaults to the configured data_directory).",
    ),
) -> None:
    """Report whether PATH counts as a time tracking file."""
    settings = _load_settings(ctx).with_data_directory(data_dir)
    if is_tracking_file(path, settings.data_directory):
        typer.echo("tracked")
        return
    typer.echo("not tracked")
    raise typer.Exit(code=1)


@app.command()
def summary(
    ctx: typer.Context,
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Day file."),
) -> None:
    """Print the day summary that the preview window would show."""
    settings = _load_settings(ctx)
    content = path.read_text(encoding="utf-8")
    formatter = MarkdownDaySummary()
    typer.echo(formatter.day_summary(content, "", settings.prefix, settings.suffix))


@app.command("config")
def show_config(ctx: typer.Context) -> None:
    """Print the resolved settings."""
    settings = _load_settings(ctx)
    typer.echo(f"config_file = {ctx.obj or get_config_path()}")
    for key, value in settings.as_config_dict().items():
        typer.echo(f"{key} = {value}")
