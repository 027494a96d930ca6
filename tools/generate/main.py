"""
Barcode generation CLI tool.

Renders single barcodes or whole batch files into a local directory.

Usage:
    generate single 4006381333931 --symbology EAN13 --format svg
    generate batch ./codes.csv --symbology CODE39 --prefix IT_ --suffix _v1
    generate validate "ABC-123" --symbology CODE39
"""

from pathlib import Path

import click
import structlog

from src.barcode import (
    BarcodeRenderer,
    InvalidBarcodeError,
    RenderError,
    generate_single,
    list_symbologies,
    validate,
)
from src.batch import BatchController, read_rows
from src.config import configure_logging, get_settings
from src.export import DirectoryExporter
from src.models import ExportSettings, OutputFormat, RenderSettings, RowStatus, Symbology

logger = structlog.get_logger(__name__)

SYMBOLOGY_CHOICES = [s.value for s in Symbology]
FORMAT_CHOICES = [f.value for f in OutputFormat]


def render_options(func):
    """Attach the rendering settings options to a command."""
    options = [
        click.option(
            "--symbology",
            type=click.Choice(SYMBOLOGY_CHOICES, case_sensitive=False),
            default=None,
            help="Barcode format (default: DEFAULT_SYMBOLOGY setting)",
        ),
        click.option("--module-width", type=float, default=2.0, show_default=True, help="Narrowest bar width (px)"),
        click.option("--bar-height", type=float, default=100.0, show_default=True, help="Bar height (px)"),
        click.option("--show-label/--hide-label", default=True, help="Print the label under the bars"),
        click.option("--font", default=None, help="TrueType font file for the label (raster only)"),
        click.option("--font-size", type=float, default=20.0, show_default=True, help="Label size (px)"),
        click.option("--background", default="#ffffff", show_default=True, help="Background color"),
        click.option("--bar-color", default="#000000", show_default=True, help="Bar color"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def export_options(func):
    """Attach the export settings options to a command."""
    options = [
        click.option(
            "--format",
            "output_format",
            type=click.Choice(FORMAT_CHOICES, case_sensitive=False),
            default="png",
            show_default=True,
            help="Output format",
        ),
        click.option(
            "--resolution",
            type=click.IntRange(100, 2000),
            default=500,
            show_default=True,
            help="Raster resolution (ignored for svg)",
        ),
        click.option("--prefix", default="", help="Filename prefix"),
        click.option("--suffix", default="", help="Filename suffix"),
        click.option(
            "--output-dir",
            type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
            default=None,
            help="Directory to write files to (default: OUTPUT_DIR setting)",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_render_settings(symbology: str | None, **kwargs) -> RenderSettings:
    """Build RenderSettings from CLI values, reporting invalid values as usage errors."""
    settings = get_settings()
    try:
        return RenderSettings(
            symbology=(symbology or settings.default_symbology).upper(),
            module_width=kwargs["module_width"],
            bar_height=kwargs["bar_height"],
            show_label=kwargs["show_label"],
            font=kwargs["font"],
            font_size=kwargs["font_size"],
            background_color=kwargs["background"],
            bar_color=kwargs["bar_color"],
        )
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def build_export_settings(output_format: str, resolution: int, prefix: str, suffix: str) -> ExportSettings:
    return ExportSettings(
        format=output_format.lower(),
        resolution=resolution,
        prefix=prefix,
        suffix=suffix,
    )


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL")
def cli(log_level: str | None):
    """Generate barcode images from text or batch files."""
    settings = get_settings()
    if log_level:
        settings = settings.model_copy(update={"log_level": log_level})
    configure_logging(settings)


@cli.command("formats")
def list_formats():
    """List supported barcode formats."""
    for rule in list_symbologies():
        click.echo(f"{rule.identifier.value:<8} {rule.label}")


@cli.command("validate")
@click.argument("code")
@click.option(
    "--symbology",
    type=click.Choice(SYMBOLOGY_CHOICES, case_sensitive=False),
    default=None,
    help="Barcode format (default: DEFAULT_SYMBOLOGY setting)",
)
def validate_code(code: str, symbology: str | None):
    """Check CODE against a barcode format."""
    symbology = (symbology or get_settings().default_symbology).upper()
    outcome = validate(code, symbology)
    if outcome.admitted:
        click.echo(f"OK: {code!r} is valid {symbology}")
        return
    click.echo(f"Invalid format for {symbology}: {outcome.reason}", err=True)
    raise SystemExit(1)


@cli.command("single")
@click.argument("code")
@render_options
@export_options
def single(
    code: str,
    symbology: str | None,
    output_format: str,
    resolution: int,
    prefix: str,
    suffix: str,
    output_dir: Path | None,
    **render_kwargs,
):
    """Render CODE to one image file."""
    settings = get_settings()
    render_settings = build_render_settings(symbology, **render_kwargs)
    export_settings = build_export_settings(output_format, resolution, prefix, suffix)
    exporter = DirectoryExporter(output_dir or settings.output_dir)
    renderer = BarcodeRenderer(jpeg_quality=settings.jpeg_quality)

    try:
        artifact = generate_single(code, render_settings, export_settings, renderer=renderer)
    except InvalidBarcodeError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    except RenderError as e:
        logger.error("Could not render barcode", code=code, error=str(e))
        click.echo("Error: Could not render barcode", err=True)
        raise SystemExit(1)

    name = exporter.export(artifact)
    click.echo(f"✓ Barcode saved: {exporter.output_dir / name}")


@cli.command("batch")
@click.argument(
    "source",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path),
)
@render_options
@export_options
@click.option(
    "--delay-ms",
    type=click.IntRange(min=0),
    default=None,
    help="Pause between rows (default: BATCH_ROW_DELAY_MS setting)",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show what would be generated without writing files",
)
def batch(
    source: Path,
    symbology: str | None,
    output_format: str,
    resolution: int,
    prefix: str,
    suffix: str,
    output_dir: Path | None,
    delay_ms: int | None,
    dry_run: bool,
    **render_kwargs,
):
    """Render every row of SOURCE (.txt: one code per line, .csv: barcode,text columns)."""
    settings = get_settings()
    render_settings = build_render_settings(symbology, **render_kwargs)
    export_settings = build_export_settings(output_format, resolution, prefix, suffix)

    rows = read_rows(source)
    if not rows:
        click.echo("No rows found in the specified file.")
        return

    click.echo(f"Found {len(rows)} rows")

    if dry_run:
        click.echo("\n[DRY RUN] Would generate:")
        for row in rows[:10]:
            status = validate(row.code, render_settings.symbology)
            marker = "" if status.admitted else f"  (skipped: {status.reason})"
            label = f" -> {row.label}" if row.label != row.code else ""
            click.echo(f"  - {row.code}{label}{marker}")
        if len(rows) > 10:
            click.echo(f"  ... and {len(rows) - 10} more")
        return

    delay = settings.batch_row_delay_seconds if delay_ms is None else delay_ms / 1000
    controller = BatchController(
        renderer=BarcodeRenderer(jpeg_quality=settings.jpeg_quality),
        row_delay=delay,
    )
    exporter = DirectoryExporter(output_dir or settings.output_dir)

    with click.progressbar(length=len(rows), label="Generating barcodes") as progress:
        result = controller.run(
            rows,
            render_settings,
            export_settings,
            exporter,
            on_row=lambda _outcome: progress.update(1),
        )

    click.echo("")
    click.echo(f"Exported: {result.exported}")
    click.echo(f"Skipped: {result.skipped}")
    click.echo(f"Failed: {result.failed}")

    for outcome in result.outcomes:
        if outcome.status is not RowStatus.EXPORTED:
            click.echo(f"  {outcome.status.value}: {outcome.code!r} ({outcome.reason})", err=True)


main = cli


if __name__ == "__main__":
    cli()
