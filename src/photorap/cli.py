"""CLI entry point for photorap.

Usage:
    photorap opensfm --reconstruction reconstruction.json --out scene.rap
    photorap opensfm -r reconstruction.json -o scene.rap --mesh merged.ply
    photorap info reconstruction.json      # Summarize cameras and shots
    photorap inspect scene.rap             # Summarize a written recording
"""

from __future__ import annotations

import zipfile
from pathlib import Path
from typing import NoReturn, Optional, Tuple

import typer
from rich.console import Console
from rich.table import Table

from photorap.core.errors import PhotorapError
from photorap.core.logging import setup_logging

app = typer.Typer(name="photorap", help="Photogrammetry reconstructions to recordings")
console = Console()

DEFAULT_CONFIG = Path("configs/opensfm_convert.yaml")


def _fail(exc: Exception) -> NoReturn:
    console.print(f"Error: {exc}", style="red", markup=False)
    raise typer.Exit(1)


@app.command()
def opensfm(
    reconstruction: Path = typer.Option(..., "--reconstruction", "-r", help="Path to OpenSfM reconstruction file"),
    out: Path = typer.Option(..., "--out", "-o", help="Path to output recording file"),
    mesh: Optional[list[Path]] = typer.Option(None, "--mesh", "-m", help="PLY mesh or point cloud to embed (repeatable)"),
    mesh_scale: Optional[Tuple[float, float, float]] = typer.Option(
        None, "--mesh-scale", help="Per-axis scale for --mesh files (overrides config)"
    ),
    config: Optional[Path] = typer.Option(None, help="Step config YAML (defaults used if missing)"),
    log_level: str = typer.Option("INFO", help="Logging level"),
) -> None:
    """Convert an OpenSfM reconstruction to a recording."""
    setup_logging(log_level)
    from photorap.core.config import load_step_config
    from photorap.steps.s01_opensfm_convert.config import OpenSfmConvertConfig
    from photorap.steps.s01_opensfm_convert.contracts import OpenSfmConvertInput
    from photorap.steps.s01_opensfm_convert.step import OpenSfmConvertStep

    try:
        config_path = config or DEFAULT_CONFIG
        if config is not None or config_path.exists():
            step_config = load_step_config(config_path, OpenSfmConvertConfig)
        else:
            step_config = OpenSfmConvertConfig()
        if mesh_scale is not None:
            step_config = step_config.model_copy(update={"mesh_scale": list(mesh_scale)})

        step = OpenSfmConvertStep(config=step_config)
        output = step.execute(OpenSfmConvertInput(
            reconstruction_path=reconstruction,
            output_path=out,
            mesh_paths=mesh or [],
        ))
    except (PhotorapError, OSError) as exc:
        _fail(exc)

    console.print("[green]Done. Output:[/green]")
    console.print(output.model_dump_json(indent=2), markup=False)


@app.command()
def info(reconstruction: Path = typer.Argument(..., help="Path to OpenSfM reconstruction file")) -> None:
    """Show cameras of a reconstruction with their intrinsics and shot counts."""
    from photorap.core.contracts import load_reconstruction
    from photorap.steps.s01_opensfm_convert._timestamps import shots_have_timestamp

    try:
        recon = load_reconstruction(reconstruction)
    except (PhotorapError, OSError) as exc:
        _fail(exc)

    table = Table(title=f"Reconstruction: {reconstruction.name}")
    table.add_column("Camera", style="cyan")
    table.add_column("Projection", style="green")
    table.add_column("Size", style="dim")
    table.add_column("Focal", style="yellow")
    table.add_column("K1 / K2", style="dim")
    table.add_column("Shots", style="magenta")

    for camera_id, cam in recon.cameras.items():
        n_shots = sum(1 for s in recon.shots.values() if s.camera == camera_id)
        table.add_row(
            camera_id,
            cam.projection_type or "-",
            f"{cam.width}x{cam.height}",
            f"{cam.focal:.4f}",
            f"{cam.k1:.4f} / {cam.k2:.4f}",
            str(n_shots),
        )
    console.print(table)
    console.print(
        f"{len(recon.shots)} shots, {len(recon.points)} points, "
        f"timestamps: {'capture time' if shots_have_timestamp(recon.shots) else 'inferred from shot ids'}"
    )


@app.command()
def inspect(recording: Path = typer.Argument(..., help="Path to a recording written by 'opensfm'")) -> None:
    """Show the subjects and binaries of a written recording."""
    from photorap.recording.container import read_recording

    try:
        rec = read_recording(recording)
    except (OSError, ValueError, KeyError, zipfile.BadZipFile) as exc:
        _fail(exc)

    table = Table(title=f"Recording: {rec.name} ({rec.id})")
    table.add_column("Subject", style="cyan")
    table.add_column("Collections", style="green")
    table.add_column("Captures", style="yellow")
    for sub in rec.recordings:
        table.add_row(
            sub.id,
            ", ".join(c.name for c in sub.capture_collections),
            ", ".join(str(len(c)) for c in sub.capture_collections),
        )
    console.print(table)
    for b in rec.binaries:
        points = b.metadata["points"].value if "points" in b.metadata else "-"
        console.print(f"binary {b.name}: {len(b.data)} bytes, points={points}", markup=False)


if __name__ == "__main__":
    app()
