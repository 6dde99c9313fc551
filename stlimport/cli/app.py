"""Command-line interface for stlimport."""

from pathlib import Path
from typing import List, Optional

import numpy as np
import typer
from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from stlimport.core import Config, StlImportError, load_config
from stlimport.importer import StlImporter
from stlimport.utils import StructuredLogger, get_logger, setup_logging

app = typer.Typer(
    name="stlimport",
    help="Decode binary STL files into interleaved vertex buffers",
    add_completion=False,
)
console = Console()
logger = get_logger(__name__)


def _config(ctx: typer.Context) -> Config:
    return ctx.obj if isinstance(ctx.obj, Config) else Config()


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
) -> None:
    """Load configuration and set up logging for every command."""
    try:
        cfg = load_config(config)
    except Exception as e:
        console.print(f"[red]Error loading configuration: {e}[/red]")
        raise typer.Exit(2)

    if verbose:
        cfg = cfg.model_copy(
            update={"logging": cfg.logging.model_copy(update={"level": "DEBUG"})}
        )
    setup_logging(cfg.logging)
    ctx.obj = cfg


@app.command()
def info(
    ctx: typer.Context,
    stl_file: Path = typer.Argument(
        ...,
        help="Path to STL file to inspect",
    ),
) -> None:
    """Decode an STL file and display information about it."""
    cfg = _config(ctx)

    try:
        with StlImporter(cfg.importer) as importer:
            importer.open_file(stl_file)
            mesh = importer.mesh()
    except StlImportError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title="Mesh Information", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("File", str(stl_file))
    table.add_row("Primitive", mesh.primitive.value)
    table.add_row("Triangles", f"{mesh.vertex_count // 3:,}")
    table.add_row("Vertices", f"{mesh.vertex_count:,}")
    table.add_row("Vertex Buffer", f"{len(mesh.vertex_data):,} bytes")
    for attribute in mesh.attributes:
        table.add_row(
            attribute.attribute.value.capitalize(),
            f"offset {attribute.offset}, stride {attribute.stride}",
        )

    if mesh.vertex_count:
        positions = mesh.positions
        bounds_min = positions.min(axis=0)
        bounds_max = positions.max(axis=0)
        table.add_row(
            "Bounding Box",
            f"[{bounds_min[0]:.2f}, {bounds_min[1]:.2f}, {bounds_min[2]:.2f}] to "
            f"[{bounds_max[0]:.2f}, {bounds_max[1]:.2f}, {bounds_max[2]:.2f}]"
        )

    console.print(table)


@app.command()
def check(
    ctx: typer.Context,
    stl_files: List[Path] = typer.Argument(
        ...,
        help="STL files to validate",
    ),
) -> None:
    """Validate STL files without decoding them."""
    cfg = _config(ctx)
    importer = StlImporter(cfg.importer)
    failures = 0

    table = Table(title="Validation Results")
    table.add_column("File", style="cyan")
    table.add_column("Status")
    table.add_column("Details")

    for stl_file in tqdm(
        stl_files,
        desc="Checking",
        unit="files",
        disable=not cfg.importer.show_progress,
    ):
        try:
            importer.open_file(stl_file)
        except StlImportError as e:
            failures += 1
            table.add_row(str(stl_file), "[red]invalid[/red]", str(e))
            continue
        table.add_row(
            str(stl_file),
            "[green]ok[/green]",
            f"{importer.triangle_count:,} triangles",
        )
        importer.close()

    console.print(table)
    console.print(f"{len(stl_files) - failures}/{len(stl_files)} files valid")

    if failures:
        raise typer.Exit(1)


@app.command()
def convert(
    ctx: typer.Context,
    stl_file: Path = typer.Argument(
        ...,
        help="Path to STL file",
    ),
    output: Path = typer.Argument(
        ...,
        help="Output file (.npz, or any format trimesh can export)",
    ),
) -> None:
    """Decode an STL file and write it in another format."""
    cfg = _config(ctx)

    try:
        with StructuredLogger(
            logger, "convert", input_file=str(stl_file), output_file=str(output)
        ) as log_ctx:
            with StlImporter(cfg.importer) as importer:
                importer.open_file(stl_file)
                mesh = importer.mesh()
            log_ctx.update_context(vertex_count=mesh.vertex_count)

            output.parent.mkdir(parents=True, exist_ok=True)
            if output.suffix.lower() == ".npz":
                np.savez(output, positions=mesh.positions, normals=mesh.normals)
            else:
                mesh.to_trimesh().export(output)
    except (StlImportError, ValueError, OSError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"💾 Wrote {mesh.vertex_count:,} vertices to [cyan]{output}[/cyan]")


def main() -> None:
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
