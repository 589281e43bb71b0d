"""Cabinetry CLI for building and inspecting cabinet skeletons.

Provides command-line access to box skeleton construction, STEP export
and skeleton manifests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import structlog
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from kernel.geometry import BoundingBox, GeometryKernelError, shape_bounding_box
from kernel.occt_io import StepExportError, StepImportError, get_occt_info, load_step, write_step
from skeleton import PROFILE_SLOTS, CabinetSkeleton, ConversionShape, dump_json

from .components import CabinetBoxSkeleton
from .logging_setup import CONFIGS, configure_for

logger = structlog.get_logger(__name__)

app = typer.Typer(
    name="cabinetry",
    help="Cabinetry CLI for cabinet skeleton construction",
    add_completion=False,
)

console = Console()


def _display_error(message: str, error: Optional[Exception] = None) -> None:
    """Display error message with styling."""
    error_text = Text(f"❌ {message}", style="bold red")
    if error:
        error_text.append(f"\n   {error}", style="red")
    console.print(Panel(error_text, title="Error", border_style="red"))


def _display_success(message: str) -> None:
    """Display success message with styling."""
    console.print(Panel(Text(f"✅ {message}", style="bold green"), title="Success", border_style="green"))


def _display_warning(message: str) -> None:
    """Display warning message with styling."""
    console.print(Panel(Text(f"⚠️  {message}", style="bold yellow"), title="Warning", border_style="yellow"))


def _format_box(bbox: BoundingBox) -> str:
    if not bbox.is_set:
        return "unset"
    return (f"({bbox.min_x:.3f}, {bbox.min_y:.3f}, {bbox.min_z:.3f}) → "
            f"({bbox.max_x:.3f}, {bbox.max_y:.3f}, {bbox.max_z:.3f})")


def _setup_logging(log_env: str, verbose: bool) -> None:
    if log_env not in CONFIGS:
        raise typer.BadParameter(f"Unknown log environment: {log_env}", param_hint="--log-env")
    configure_for("development" if verbose else log_env)


def _display_skeleton(skeleton: CabinetSkeleton) -> None:
    """Display dimensions, parts and profile slots."""
    dims_table = Table(title="Dimensions")
    dims_table.add_column("Property", style="cyan")
    dims_table.add_column("Value", style="white")
    dims_table.add_row("Width", f"{skeleton.width:g}")
    dims_table.add_row("Depth", f"{skeleton.depth:g}")
    dims_table.add_row("Height", f"{skeleton.height:g}")
    dims_table.add_row("Thickness", f"{skeleton.thickness:g}")
    dims_table.add_row("Bounding Box", _format_box(skeleton.bounding_box()))
    console.print(dims_table)

    parts_table = Table(title="Parts")
    parts_table.add_column("#", style="yellow")
    parts_table.add_column("Name", style="cyan")
    parts_table.add_column("Bounding Box", style="white")
    for index, (part, name) in enumerate(skeleton.named_parts()):
        parts_table.add_row(str(index), name, _format_box(shape_bounding_box(part)))
    console.print(parts_table)

    profiles_table = Table(title="Profiles")
    profiles_table.add_column("Slot", style="cyan")
    profiles_table.add_column("Present", style="green")
    for slot in PROFILE_SLOTS:
        profiles_table.add_row(slot, "✅" if skeleton.profile(slot) is not None else "❌")
    console.print(profiles_table)


@app.command()
def info() -> None:
    """Display tool information and OCCT binding status."""
    console.print(Panel(
        "Cabinetry\nCabinet skeleton construction on Open CASCADE",
        title="Cabinetry",
        border_style="blue",
    ))

    occt_info = get_occt_info()
    table = Table(title="Geometry Kernel")
    table.add_column("Binding", style="cyan")
    table.add_column("Version", style="yellow")
    table.add_row(occt_info["binding"], str(occt_info["occt_version"]))
    console.print(table)

    component = CabinetBoxSkeleton()
    inputs_table = Table(title=f"{component.name} inputs")
    inputs_table.add_column("Name", style="cyan")
    inputs_table.add_column("Nickname", style="yellow")
    inputs_table.add_column("Default", style="white")
    for spec in component.inputs:
        inputs_table.add_row(spec.name, spec.nickname, str(spec.default))
    console.print(inputs_table)


@app.command()
def build(
    width: float = typer.Option(36.0, "--width", "-W", help="Width of the cabinet"),
    depth: float = typer.Option(24.0, "--depth", "-D", help="Depth of the cabinet"),
    height: float = typer.Option(36.0, "--height", "-H", help="Height of the cabinet"),
    thickness: float = typer.Option(0.75, "--thickness", "-T", help="Thickness of the cabinet sides"),
    step: Optional[str] = typer.Option(None, "--step", help="Write the combined solid to a STEP file"),
    manifest: Optional[str] = typer.Option(None, "--manifest", help="Write a JSON manifest"),
    log_env: str = typer.Option("testing", "--log-env", help="Logging preset"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
) -> None:
    """Build a box skeleton and optionally export it."""
    _setup_logging(log_env, verbose)

    outputs = CabinetBoxSkeleton().solve(
        {"Width": width, "Depth": depth, "Height": height, "Thickness": thickness}
    )
    skeleton = outputs["Cabinet"]
    if skeleton is None:
        _display_error("Component produced no skeleton")
        raise typer.Exit(1)

    _display_skeleton(skeleton)
    if not skeleton.parts:
        _display_warning("No panels were built; check the dimensions")

    try:
        if step:
            combined = skeleton.cast_to(ConversionShape.COMBINED_SOLID)
            path = write_step(combined.value, step)
            _display_success(f"STEP written to: {path}")

        if manifest:
            path = dump_json(skeleton, manifest)
            _display_success(f"Manifest written to: {path}")

    except (StepExportError, GeometryKernelError, OSError) as e:
        _display_error("Failed to export skeleton", e)
        raise typer.Exit(1)


@app.command()
def inspect(
    path: str = typer.Argument(..., help="Path to STEP file"),
    manifest: Optional[str] = typer.Option(None, "--manifest", help="Write a JSON manifest"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
) -> None:
    """Load a STEP file into a skeleton and describe it."""
    _setup_logging("testing", verbose)

    try:
        console.print(f"🔄 Loading STEP file: {path}")
        loaded_model = load_step(Path(path))
    except StepImportError as e:
        _display_error("Failed to load STEP file", e)
        raise typer.Exit(1)

    skeleton: CabinetSkeleton = CabinetSkeleton()
    if not skeleton.cast_from(loaded_model.occt_shape):
        _display_error("STEP file contains no solid geometry")
        raise typer.Exit(1)

    _display_skeleton(skeleton)

    if manifest:
        written = dump_json(skeleton, manifest)
        _display_success(f"Manifest written to: {written}")


if __name__ == "__main__":
    app()
