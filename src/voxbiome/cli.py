"""Command-line interface for VoxBiome."""

from pathlib import Path
from typing import Optional, Tuple
import math

import typer
from click.core import ParameterSource
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table

from . import __version__
from .config import GenerationConfig, get_preset, list_presets, PRESET_REGIONS
from .generator import WorldGenerator, GenerationProgress, ChunkGenerationError, biome_share
from .log import setup_logging
from .terrain import BIOME_BANDS, biomes_noise, classify_plane, biome_from_code, select_biome
from .terrain.biome import BIOME_SYMBOLS
from .world.chunk import ChunkKey
from .world.shape import DEFAULT_SHAPE
from .world.constants import SEA_LEVEL, HIGH_ALTITUDE_LEVEL
from .world.voxels import voxel_name

app = typer.Typer(
    name="voxbiome",
    help="Generate biome-painted voxel chunks from a world seed.",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"VoxBiome version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    """VoxBiome: chunk-addressed biome generation for voxel worlds."""
    setup_logging(verbose, console)


@app.command()
def generate(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="World name"),
    seed: int = typer.Option(0, "--seed", help="World seed"),
    min_chunk: Tuple[int, int, int] = typer.Option((0, 0, 0), "--from", help="Lowest chunk corner X Y Z"),
    max_chunk: Tuple[int, int, int] = typer.Option((0, 0, 0), "--to", help="Highest chunk corner X Y Z"),
    preset_name: Optional[str] = typer.Option(None, "--preset", "-p", help="Preset region (overrides --from/--to)"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Load settings from a JSON config"),
    parallel: bool = typer.Option(False, "--parallel/--no-parallel", help="Generate chunks in parallel"),
    workers: Optional[int] = typer.Option(None, "--workers", help="Parallel worker count (defaults to all cores)"),
    preview: Optional[Path] = typer.Option(None, "--preview", help="Write a biome map PNG"),
    save_config: Optional[Path] = typer.Option(None, "--save-config", help="Write the effective config as JSON"),
):
    """Generate a region of chunks and report its biome mix.

    Options given on the command line override a loaded --config.

    Example:
        voxbiome generate demo --seed 42 --from -2 0 -2 --to 1 1 1
    """
    if config_path is not None:
        config = GenerationConfig.load(config_path)
    else:
        config = GenerationConfig(name=name)
    config.name = name

    def given(param: str) -> bool:
        return config_path is None or ctx.get_parameter_source(param) is ParameterSource.COMMANDLINE

    if given("seed"):
        config.seed = seed
    if given("min_chunk"):
        config.min_chunk = ChunkKey(*min_chunk)
    if given("max_chunk"):
        config.max_chunk = ChunkKey(*max_chunk)
    if given("parallel"):
        config.parallel = parallel
    if given("workers"):
        config.parallel_workers = workers
    if preset_name is not None:
        region = get_preset(preset_name)
        if region is None:
            console.print(f"[red]Error:[/red] Unknown preset: {preset_name}")
            console.print("Available presets:")
            for p in list_presets():
                console.print(f"  - {p}")
            raise typer.Exit(1)
        config.min_chunk, config.max_chunk = region.min_chunk, region.max_chunk

    try:
        config.validate()
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[bold]Generating world: {config.name}[/bold]")
    console.print(f"  Chunks: {config.min_chunk} to {config.max_chunk} ({config.chunk_count} total)")
    console.print(f"  Seed: {config.seed}")
    console.print()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("[cyan]generate[/cyan]", total=config.chunk_count)

        def progress_callback(p: GenerationProgress):
            progress.update(task, completed=p.current, description=f"[cyan]{p.phase}[/cyan]: {p.message}")

        try:
            result = WorldGenerator(config).run(progress_callback)
        except ChunkGenerationError as e:
            console.print(f"[red]Generation failed:[/red] {e}")
            raise typer.Exit(1)

    table = Table(title=f"Biomes ({result.surface_columns} surface columns)")
    table.add_column("Biome", style="cyan")
    table.add_column("Columns", justify="right")
    table.add_column("Share", justify="right")
    for biome, share in biome_share(result.biome_counts).items():
        table.add_row(biome.name, str(result.biome_counts.get(biome, 0)), f"{share:.1%}")
    console.print(table)

    materials = Table(title="Surface Materials")
    materials.add_column("Voxel", style="cyan")
    materials.add_column("Columns", justify="right")
    for value, n in result.surface_materials.most_common():
        materials.add_row(voxel_name(value), str(n))
    console.print(materials)

    if save_config is not None:
        config.save(save_config)
        console.print(f"Config saved to: {save_config}")

    if preview is not None:
        from .preview import render_biome_map
        path = render_biome_map(config, preview)
        console.print(f"Biome map saved to: {path}")

    console.print(f"[green]Success![/green] Generated {len(result.chunks)} chunks")


@app.command()
def sample(
    x: int = typer.Argument(..., help="Chunk X"),
    y: int = typer.Argument(..., help="Chunk Y"),
    z: int = typer.Argument(..., help="Chunk Z"),
    seed: int = typer.Option(0, "--seed", help="World seed"),
):
    """Print the biome map of one chunk footprint (rows along Z).

    Example:
        voxbiome sample 0 0 0 --seed 42
    """
    key = ChunkKey(x, y, z)
    attrs = biomes_noise(key, seed)
    codes = classify_plane(attrs).reshape(-1)
    edge = DEFAULT_SHAPE.edge

    console.print(f"[bold]Chunk {key}[/bold] seed {seed}")
    console.print(f"  Attribute range: {attrs.min():.4f} to {attrs.max():.4f}")
    for row in range(edge):
        line = "".join(BIOME_SYMBOLS[biome_from_code(c)] for c in codes[row * edge:(row + 1) * edge])
        console.print(line, highlight=False)
    legend = "  ".join(f"{symbol}={biome.name}" for biome, symbol in BIOME_SYMBOLS.items())
    console.print(legend, highlight=False)


@app.command()
def biome(
    value: float = typer.Argument(..., help="Biome attribute value"),
):
    """Show which biome an attribute value selects."""
    try:
        selected = select_biome(value)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    console.print(f"{value} -> {selected.name}", highlight=False)


@app.command()
def bands():
    """List the biome selection bands and height levels."""
    table = Table(title="Biome Bands")
    table.add_column("Biome", style="cyan")
    table.add_column("From", justify="right")
    table.add_column("To", justify="right")

    lower = -math.inf
    for upper, band_biome in BIOME_BANDS:
        table.add_row(band_biome.name, f"{lower:g}", f"{upper:g}")
        lower = upper

    console.print(table)
    console.print(f"Sea level: {SEA_LEVEL}  High altitude: {HIGH_ALTITUDE_LEVEL}")


@app.command("list-presets")
def list_presets_cmd():
    """List available preset regions."""
    table = Table(title="Available Presets")
    table.add_column("Name", style="cyan")
    table.add_column("Region")
    table.add_column("Description")

    for name in list_presets():
        region = PRESET_REGIONS[name]
        table.add_row(name, f"{region.min_chunk} to {region.max_chunk}", region.description)

    console.print(table)


if __name__ == "__main__":
    app()
