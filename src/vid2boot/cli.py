"""CLI entry point for vid2boot.

Usage:
    vid2boot build -i video.mp4 -r 1080x2400 -f 30          # standard desc.txt
    vid2boot build -i video.mp4 -r 1080x2400 -f 30 -oos --offset 10 20
    vid2boot inspect bootanimation.zip                         # show desc.txt and parts
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

import typer
import yaml
from click.core import ParameterSource
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from vid2boot.core.contracts import MAX_FRAMES_PER_PART, BuildOptions, DescriptorVariant
from vid2boot.core.logging import setup_logging

app = typer.Typer(
    name="vid2boot",
    help="Convert a video into a boot-animation zip",
    context_settings={"help_option_names": ["-h", "--help"]},
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def _merge_options(ctx: typer.Context, config: Optional[Path]) -> BuildOptions:
    """YAML file values first, then any option given explicitly on the command line."""
    from vid2boot.core.pipeline_runner import load_build_options

    base = load_build_options(config).model_dump() if config else {}
    for field in BuildOptions.model_fields:
        source = ctx.get_parameter_source(field)
        if field not in base or source is ParameterSource.COMMANDLINE:
            base[field] = ctx.params[field]
    return BuildOptions(**base)


@app.command()
def build(
    ctx: typer.Context,
    input_path: str = typer.Option("", "-i", "--input", help="Input video path"),
    output_path: str = typer.Option(
        "", "-o", "--output", help="Output bootanimation.zip path (or directory)"
    ),
    resolution: str = typer.Option("", "-r", "--resolution", help="<width>x<height>, e.g. 1080x2400"),
    fps: Optional[str] = typer.Option(None, "-f", "--fps", help="Frames per second"),
    oos: bool = typer.Option(False, "-oos", "--oos", help="Write the offset-annotated ('g') header"),
    offset: Tuple[int, int] = typer.Option((0, 0), "--offset", help="Offset <x> <y> (only with -oos)"),
    ffmpeg_path: str = typer.Option("ffmpeg", "--ffmpeg", help="Custom ffmpeg binary path"),
    zip_path: str = typer.Option("zip", "--zip", help="Custom zip binary path"),
    frame_format: str = typer.Option("jpg", "--frames", help="Frame format: jpg or png"),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Quiet the output"),
    loop_mode: str = typer.Option(
        "play-full", "--loop-mode", help="Part directive: play-full | stop-on-boot | loop"
    ),
    background: Optional[str] = typer.Option(None, "--background", help="Background colour #RRGGBB"),
    max_frames_per_part: int = typer.Option(
        MAX_FRAMES_PER_PART, "--max-frames", help="Maximum frames per part directory"
    ),
    with_audio: bool = typer.Option(
        False, "--with-audio", help="Add the matching audio.wav clip to every part"
    ),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML file with build options"),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level"),
) -> None:
    """Build a boot-animation archive from a video."""
    setup_logging("WARNING" if quiet else log_level)
    from vid2boot.core.pipeline_runner import run_pipeline

    try:
        options = _merge_options(ctx, config)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        err_console.print(f"[red]Error:[/red] could not load config: {escape(str(exc))}")
        typer.echo(ctx.get_usage(), err=True)
        raise typer.Exit(1)

    result = run_pipeline(options)
    if result.cleanup_error:
        err_console.print(f"[yellow]Warning:[/yellow] {escape(result.cleanup_error)}")
    if not result.ok:
        err_console.print(f"[red]Error:[/red] {escape(str(result.error))}")
        typer.echo(ctx.get_usage(), err=True)
        raise typer.Exit(1)

    if options.with_audio and result.audio_parts < result.part_count:
        err_console.print(
            f"[yellow]Warning:[/yellow] audio attached to {result.audio_parts} of {result.part_count} parts"
        )
    console.print(f"[green]Bootanimation created successfully at:[/green] {result.output_path}")


@app.command()
def inspect(archive: Path = typer.Argument(..., help="bootanimation.zip to inspect")) -> None:
    """Show the descriptor and part sizes of an existing archive."""
    import zipfile

    from vid2boot.steps.s03_write_descriptor._desc_format import parse_descriptor

    try:
        with zipfile.ZipFile(archive) as zf:
            infos = zf.infolist()
            desc = parse_descriptor(zf.read("desc.txt").decode("ascii"))
    except (OSError, KeyError, ValueError, zipfile.BadZipFile) as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1)

    stored = all(i.compress_type == zipfile.ZIP_STORED for i in infos)
    header = f"{desc.width}x{desc.height} @ {desc.fps}fps"
    if desc.variant is DescriptorVariant.OFFSET:
        header += f", offset {desc.offset[0]},{desc.offset[1]}"

    table = Table(title=f"{archive.name}: {header}")
    table.add_column("#", style="dim")
    table.add_column("Part", style="cyan")
    table.add_column("Directive", style="green")
    table.add_column("Frames", style="yellow")
    table.add_column("Audio")

    names = {info.filename for info in infos if not info.is_dir()}
    for i, d in enumerate(desc.directives):
        audio = f"{d.part}/audio.wav"
        frames = sum(1 for n in names if n.startswith(f"{d.part}/") and n != audio)
        has_audio = "yes" if audio in names else "-"
        table.add_row(str(i), d.part, f"{d.kind} {d.count} {d.pause}", str(frames), has_audio)
    console.print(table)
    if not stored:
        console.print("[yellow]Archive has compressed entries; renderers expect stored (-0)[/yellow]")


if __name__ == "__main__":
    app()
