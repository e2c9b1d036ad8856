"""
CLI interface for streamtune.

This module provides the command-line interface using Typer and Rich.
Machine-readable results (seconds, time strings, FFmpeg commands) are
written as plain text; everything else is rendered with Rich.
"""

import sys
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..config import AppConfig, ConfigManager, get_config
from ..presets import (
    build_ffmpeg_command,
    detect_video_source,
    get_performance_filters,
    resolve_stream_options,
)
from ..utils import (
    StreamTuneError,
    TimeCodecError,
    format_bitrate,
    format_time_string,
    get_logger,
    is_valid_time_string,
    join_command,
    parse_time_string,
    setup_logger,
)

# Initialize Typer app
app = typer.Typer(
    name="streamtune",
    help="Quality presets and FFmpeg arguments for stutter-free streaming",
    add_completion=False,
)

# Console for rich output
console = Console()

# Logger
logger = get_logger(__name__)


def _validate_time_option(value: Optional[str]) -> Optional[str]:
    if value is not None and not is_valid_time_string(value):
        raise typer.BadParameter(f"'{value}' is not HH:MM:SS, HH:MM or SS")
    return value


def _fail(message: str) -> NoReturn:
    console.print(f"[bold red]✗ Error:[/bold red] {escape(message)}")
    sys.exit(1)


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """Load the config from an explicit file or the default locations."""
    try:
        if config_file:
            return ConfigManager(config_file).load()
        return get_config()
    except StreamTuneError as e:
        _fail(str(e))


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log",
        help="Log file path",
    ),
) -> None:
    """
    Quality presets and FFmpeg arguments for stutter-free streaming.
    """
    setup_logger(
        name="streamtune",
        level="DEBUG" if verbose else "WARNING",
        log_file=log_file,
        verbose=verbose,
    )


@app.command("parse-time", context_settings={"ignore_unknown_options": True})
def parse_time_command(
    text: str = typer.Argument(..., help="Time string: HH:MM:SS, HH:MM or SS"),
) -> None:
    """
    Convert a time string to seconds.
    """
    try:
        seconds = parse_time_string(text)
    except TimeCodecError as e:
        _fail(str(e))

    logger.debug(f"Parsed {text!r} as {seconds}s")
    typer.echo(seconds)


@app.command("format-time", context_settings={"ignore_unknown_options": True})
def format_time_command(
    seconds: int = typer.Argument(..., help="Duration in whole seconds"),
) -> None:
    """
    Convert seconds to MM:SS or HH:MM:SS.
    """
    try:
        typer.echo(format_time_string(seconds))
    except TimeCodecError as e:
        _fail(str(e))


@app.command("presets")
def presets_command(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        help="Custom configuration file",
    ),
) -> None:
    """
    Display quality tiers and per-source settings.
    """
    config = _load_config(config_file)

    console.print()
    console.print(Panel("[bold cyan]Quality Presets[/bold cyan]", border_style="cyan"))
    console.print()

    table = Table(title="Quality Tiers", show_header=True)
    table.add_column("Tier", style="cyan")
    table.add_column("FPS", justify="right")
    table.add_column("Bitrate", justify="right")
    table.add_column("Low Latency")
    table.add_column("Description", style="dim")
    for name, preset in config.performance.presets.items():
        table.add_row(
            name,
            str(preset.frame_rate),
            format_bitrate(preset.bitrate_video * 1000),
            "yes" if preset.minimize_latency else "no",
            preset.description,
        )
    console.print(table)
    console.print()

    table = Table(title="Source Settings", show_header=True)
    table.add_column("Source", style="cyan")
    table.add_column("FPS", justify="right")
    table.add_column("Bitrate", justify="right")
    table.add_column("Low Latency")
    table.add_column("Reason", style="dim")
    for name, settings in config.performance.source_settings.items():
        table.add_row(
            name,
            str(settings.frame_rate),
            format_bitrate(settings.bitrate_video * 1000),
            "yes" if settings.minimize_latency else "no",
            settings.reason,
        )
    console.print(table)
    console.print()


@app.command("options")
def options_command(
    source: str = typer.Argument(..., help="Video URL or local file path"),
    quality: Optional[str] = typer.Option(
        None,
        "--quality",
        "-q",
        help="Quality tier: low, medium, high",
    ),
    emergency: bool = typer.Option(
        False,
        "--emergency",
        help="Use ultra-low settings for severe stuttering",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        help="Custom configuration file",
    ),
) -> None:
    """
    Show the stream options resolved for a video.
    """
    config = _load_config(config_file)

    try:
        options = resolve_stream_options(
            source,
            quality=quality,
            emergency=emergency,
            settings=config.stream,
            performance=config.performance,
        )
    except StreamTuneError as e:
        _fail(str(e))

    video_source = detect_video_source(source)
    title = "Emergency Options" if emergency else f"Stream Options ({video_source.value})"

    table = Table(title=title, show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")
    for key, value in options.to_dict().items():
        table.add_row(key, str(value))
    console.print(table)


@app.command("command")
def command_command(
    source: str = typer.Argument(..., help="Video URL or local file path"),
    seek: Optional[str] = typer.Option(
        None,
        "--seek",
        "-s",
        help="Start offset: HH:MM:SS, HH:MM or SS",
        callback=_validate_time_option,
    ),
    emergency: bool = typer.Option(
        False,
        "--emergency",
        help="Use ultra-low settings for severe stuttering",
    ),
    filters: bool = typer.Option(
        False,
        "--filters",
        help="Also print the performance filter chain",
    ),
) -> None:
    """
    Print the FFmpeg command for streaming a video.
    """
    try:
        seek_time = parse_time_string(seek) if seek else 0
        command = build_ffmpeg_command(source, seek_time=seek_time, emergency=emergency)
    except StreamTuneError as e:
        _fail(str(e))

    typer.echo(join_command(command))
    if filters:
        typer.echo(get_performance_filters())


@app.command("config")
def config_command(
    action: str = typer.Argument(..., help="Action: init, show"),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="File to create for 'init', file to read for 'show'",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing file for 'init' action",
    ),
) -> None:
    """
    Manage configuration files.

    Actions:
    - init: Create a default configuration file
    - show: Display current configuration
    """
    if action == "init":
        output_path = output or Path(".streamtune.yaml")

        try:
            ConfigManager().init_default_config(output_path, force=force)
        except StreamTuneError as e:
            _fail(str(e))
        console.print(f"[green]✓[/green] Created config file: {escape(str(output_path))}")

    elif action == "show":
        config = _load_config(output)

        console.print()
        console.print(Panel("[bold cyan]Current Configuration[/bold cyan]", border_style="cyan"))
        console.print()

        table = Table(title="Stream Settings", show_header=True)
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="white")
        for key, value in config.stream.model_dump().items():
            table.add_row(key, str(value))
        console.print(table)
        console.print()

        table = Table(title="Performance Settings", show_header=True)
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="white")
        for key, value in config.performance.model_dump(
            exclude={"presets", "source_settings"}
        ).items():
            table.add_row(key, str(value))
        console.print(table)
        console.print()

        console.print("[bold]Quality Tiers:[/bold]")
        for name in config.performance.presets:
            console.print(f"  • {name}")
        console.print()

    else:
        console.print(f"[red]✗ Unknown action:[/red] {escape(action)}")
        console.print("Valid actions: init, show")
        sys.exit(1)


@app.command("version")
def version_command() -> None:
    """
    Display version information.
    """
    from .. import __version__

    console.print(
        Panel.fit(
            f"[bold cyan]streamtune[/bold cyan]\n[dim]Version {__version__}[/dim]",
            border_style="cyan",
        )
    )


def main() -> None:
    """
    Main entry point for CLI.
    """
    app()


if __name__ == "__main__":
    main()
