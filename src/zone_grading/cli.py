"""
Command-line interface for zone grading.

Usage:
  zone-grading --help
  zone-grading grade input.jpg output.jpg --preset vintage_film
  zone-grading grade input.png output.png --zones my_look.json --max-width 1200
  zone-grading curve --preset cyberpunk --steps 16
  zone-grading curve --zones my_look.json --output curve.csv
  zone-grading zones --preset neutral
  zone-grading presets
"""

from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from zone_grading.core.logging import setup_logging
from zone_grading.core.models import ZoneSet
from zone_grading.curves.export import save_curve
from zone_grading.curves.generator import CurveGenerator
from zone_grading.imaging.processor import ImageProcessor
from zone_grading.zones.presets import get_preset, list_presets, load_zones

app = typer.Typer(help="Zone-based exposure and saturation grading.", no_args_is_help=True)
console = Console()

ZonesOption = typer.Option(
    None,
    "--zones",
    "-z",
    help="JSON preset file with the six zone records.",
    exists=True,
    file_okay=True,
    dir_okay=False,
    readable=True,
)
PresetOption = typer.Option(None, "--preset", "-p", help="Built-in preset name.")


def _resolve_zones(zones_file: Optional[Path], preset: Optional[str]) -> ZoneSet:
    """Zones from a file, a built-in preset, or the factory layout."""
    if zones_file is not None and preset is not None:
        raise ValueError("Use either --zones or --preset, not both")
    if zones_file is not None:
        return load_zones(zones_file)
    if preset is not None:
        return get_preset(preset)
    return ZoneSet.default()


def _fail(error: Exception) -> NoReturn:
    message = error.args[0] if isinstance(error, KeyError) and error.args else error
    console.print(f"[bold red]Error:[/bold red] {message}")
    raise typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    """Zone-based exposure and saturation grading."""
    if verbose:
        setup_logging(level="DEBUG")


@app.command()
def grade(
    input_path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    output_path: Path = typer.Argument(...),
    zones_file: Optional[Path] = ZonesOption,
    preset: Optional[str] = PresetOption,
    max_width: Optional[int] = typer.Option(
        None, "--max-width", min=1, help="Fit the image to this width before grading."
    ),
    quality: Optional[int] = typer.Option(
        None, "--quality", min=1, max=100, help="JPEG quality."
    ),
):
    """
    Grade an image file and write the result.
    """
    try:
        zones = _resolve_zones(zones_file, preset)
        processor = ImageProcessor()
        loaded = processor.load_image(input_path, max_width=max_width)
        graded = processor.grade(loaded, zones)
        written = processor.export(graded, output_path, jpeg_quality=quality)
    except (ValueError, KeyError, OSError) as e:
        _fail(e)

    width, height = graded.size
    console.print(f"[bold green]Graded[/bold green] {input_path} -> [green]{written}[/] ({width}x{height})")
    for note in graded.processing_notes:
        console.print(f"  [dim]{note}[/dim]")


@app.command()
def curve(
    zones_file: Optional[Path] = ZonesOption,
    preset: Optional[str] = PresetOption,
    steps: Optional[int] = typer.Option(None, "--steps", "-n", min=1, help="Sample intervals."),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the curve to a .json or .csv file."
    ),
):
    """
    Sample the combined tone curve (input stop -> output stop).
    """
    try:
        zones = _resolve_zones(zones_file, preset)
        points = CurveGenerator().generate(zones, steps=steps)
        if output is not None:
            save_curve(points, output)
    except (ValueError, KeyError, OSError) as e:
        _fail(e)

    if output is not None:
        console.print(f"Wrote {len(points)} points to [green]{output}[/]")
        return

    table = Table(title="Tone curve")
    table.add_column("Input EV", justify="right")
    table.add_column("Output EV", justify="right")
    for zone in zones:
        table.add_column(zone.id.value, justify="right")

    for p in points:
        table.add_row(
            f"{p.input_stop:+.2f}",
            f"{p.output_stop:+.2f}",
            *[f"{p.weights[z.id]:.2f}" for z in zones],
        )
    console.print(table)


@app.command()
def zones(
    zones_file: Optional[Path] = ZonesOption,
    preset: Optional[str] = PresetOption,
):
    """
    Show zone placement and grading values.
    """
    try:
        zone_set = _resolve_zones(zones_file, preset)
    except (ValueError, KeyError, OSError) as e:
        _fail(e)

    table = Table(title="Zones")
    for column in ("Zone", "Direction", "Cutoff", "Falloff", "Exposure", "Saturation", "Enabled"):
        table.add_column(column)

    for zone in zone_set:
        table.add_row(
            f"[{zone.color}]{zone.label or zone.id.value}[/]",
            zone.direction.value,
            f"{zone.range_end:+.2f}",
            f"{zone.falloff:.2f}",
            f"{zone.exposure:+.2f}",
            f"{zone.saturation:.2f}",
            "yes" if zone.is_enabled else "no",
        )
    console.print(table)


@app.command()
def presets():
    """List built-in presets."""
    for name in list_presets():
        console.print(name)


if __name__ == "__main__":
    app()
