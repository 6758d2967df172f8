"""CLI entry point for standalone frame extraction.

Usage:
    framesampler -i input.mp4                     # every frame into ./frames
    framesampler -i input.mp4 -p 10 -m 50         # every 10th frame, at most 50
    framesampler -i input.mp4 -o out/ --percentage 25
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from framesampler.application.dto.extraction_job import ExtractionJob, ExtractionProfile
from framesampler.core.exceptions import FrameSamplerError
from framesampler.infrastructure.config import get_settings
from framesampler.infrastructure.container import ApplicationContainer
from framesampler.infrastructure.logging_config import setup_logging

app = typer.Typer(name="framesampler", help="Extract video frames as JPEG images", add_completion=False)
console = Console()


def _check_percentage(value: float) -> float:
    if not 0 < value <= 100:
        raise typer.BadParameter("percentage must be in (0, 100]")
    return value


@app.command()
def extract(
    input_path: Path = typer.Option(
        ..., "--input", "-i", exists=True, dir_okay=False, readable=True,
        help="Input video file path",
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output directory for frames [default: ./frames]"),
    percentage: float = typer.Option(
        100, "--percentage", "-p", callback=_check_percentage,
        help="Percentage of frames to extract (1-100)",
    ),
    max_frames: Optional[int] = typer.Option(
        None, "--maxFrames", "--max-frames", "-m", min=1,
        help="Maximum number of frames to extract",
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level for ffmpeg diagnostics"),
) -> None:
    """Sample frames from a video with ffmpeg."""
    setup_logging(log_level)
    settings = get_settings()
    container = ApplicationContainer(settings)
    job = ExtractionJob(
        input_path=str(input_path),
        output_dir=output or Path(settings.extraction.cli_default_output),
        profile=ExtractionProfile.cli(percentage, max_frames),
    )

    try:
        summary = asyncio.run(container.extraction_service().run(job))
    except FrameSamplerError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)

    table = Table(title="Frame extraction")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Input file", summary.input_path)
    table.add_row("Output directory", summary.output_dir)
    table.add_row("Total frames in video", str(summary.total_frames))
    table.add_row("Frame interval", f"every {summary.frame_interval} ({percentage}%)")
    table.add_row("Maximum frames to extract", str(summary.effective_max_frames))
    table.add_row("Frames written", str(summary.frame_count))
    console.print(table)
    console.print("[green]Frame extraction completed successfully![/green]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
