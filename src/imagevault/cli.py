"""Click CLI for imagevault: store, fetch and transform images."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, NoReturn

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from imagevault.cache.keys import ImageFormat
from imagevault.config.hierarchy import load_config_hierarchy
from imagevault.errors.exceptions import ImageVaultError

console = Console()
error_console = Console(stderr=True)

_FORMAT_CHOICES = [f.value for f in ImageFormat]


def _resolve_level(verbosity: int, log_level: str | None = None) -> int:
    """Configured log level; -v caps it at INFO, -vv at DEBUG."""
    level = logging.getLevelName(str(log_level or "WARNING").upper())
    if not isinstance(level, int):
        level = logging.WARNING
    if verbosity == 1:
        level = min(level, logging.INFO)
    elif verbosity >= 2:
        level = logging.DEBUG
    return level


def _setup_logging(verbosity: int, log_level: str | None = None) -> None:
    """Configure logging based on config and verbosity level."""
    level = _resolve_level(verbosity, log_level)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
    )


def _fail(message: str) -> NoReturn:
    error_console.print(f"[red]Error:[/red] {escape(message)}")
    sys.exit(1)


def _load_config(verbosity: int = 0, **overrides: Any) -> dict[str, Any]:
    """Resolve the config hierarchy and configure logging from it."""
    config = load_config_hierarchy(**overrides)
    _setup_logging(verbosity, config.get("log_level"))
    return config


def _manager(config: dict[str, Any]):
    from imagevault.cache.manager import ImageManager

    try:
        return ImageManager.from_config(config)
    except ValidationError as e:
        _fail(f"Invalid storage settings: {e}")


storage_dir_option = click.option(
    "--storage-dir", type=click.Path(file_okay=False), default=None, help="Storage directory."
)
verbose_option = click.option(
    "-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)."
)


@click.group()
@click.version_option(package_name="imagevault")
def cli() -> None:
    """imagevault: cached image storage and transforms."""


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--key", type=str, default=None, help="Storage key (generated if omitted).")
@click.option(
    "--format", "fmt", type=click.Choice(_FORMAT_CHOICES), default=ImageFormat.JPEG.value,
    help="Extension for a generated key.",
)
@storage_dir_option
@verbose_option
def save(
    input_path: str, key: str | None, fmt: str, storage_dir: str | None, verbose: int
) -> None:
    """Store an image file and print its key."""
    manager = _manager(_load_config(verbose, storage_dir=storage_dir))
    try:
        used = manager.save(Path(input_path).read_bytes(), key=key, fmt=ImageFormat(fmt))
    except ImageVaultError as e:
        _fail(str(e))
    console.print(used)


@cli.command()
@click.argument("key")
@click.option("-o", "--output", type=click.Path(dir_okay=False), required=True,
              help="Where to write the image.")
@storage_dir_option
@verbose_option
def load(key: str, output: str, storage_dir: str | None, verbose: int) -> None:
    """Write a stored image to a file."""
    manager = _manager(_load_config(verbose, storage_dir=storage_dir))
    try:
        data = manager.load(key)
    except ImageVaultError as e:
        _fail(str(e))
    Path(output).write_bytes(data)
    console.print(f"[green]Written to {output}[/green]")


@cli.command()
@click.argument("key")
@storage_dir_option
@verbose_option
def delete(key: str, storage_dir: str | None, verbose: int) -> None:
    """Delete a stored image."""
    manager = _manager(_load_config(verbose, storage_dir=storage_dir))
    try:
        manager.delete(key)
    except ImageVaultError as e:
        _fail(str(e))
    console.print(f"[green]Deleted {key}[/green]")


@cli.command()
@click.argument("key")
@storage_dir_option
def exists(key: str, storage_dir: str | None) -> None:
    """Exit 0 if KEY is stored, 1 otherwise."""
    manager = _manager(_load_config(storage_dir=storage_dir))
    found = manager.exists(key)
    console.print("yes" if found else "no")
    sys.exit(0 if found else 1)


@cli.command("list")
@storage_dir_option
def list_images(storage_dir: str | None) -> None:
    """List stored images."""
    manager = _manager(_load_config(storage_dir=storage_dir))
    try:
        keys = manager.storage.keys()
    except ImageVaultError as e:
        _fail(str(e))

    table = Table(title="Stored Images", show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Size", justify="right")
    for key in keys:
        size = manager.storage.path_for(key).stat().st_size
        table.add_row(key, f"{size:,}")
    console.print(table)


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--crop-ratio", type=float, default=None, help="Target width/height ratio.")
@click.option("--quality", type=float, default=None, help="JPEG quality, 0.0-1.0.")
@click.option("--max-dimension", type=float, default=None, help="Longest side in pixels.")
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Output file path.")
@click.option("--save", "save_result", is_flag=True, default=False,
              help="Store the result and print its key.")
@storage_dir_option
@verbose_option
def transform(
    input_path: str,
    crop_ratio: float | None,
    quality: float | None,
    max_dimension: float | None,
    output: str | None,
    save_result: bool,
    storage_dir: str | None,
    verbose: int,
) -> None:
    """Crop, resize and re-encode an image as JPEG."""
    from imagevault.config.schema import transform_config_from
    from imagevault.transform.transformer import ImageTransformer

    if not output and not save_result:
        _fail("Pass --output and/or --save")

    config = _load_config(
        verbose,
        crop_ratio=crop_ratio,
        compression_quality=quality,
        max_dimension=max_dimension,
        storage_dir=storage_dir,
    )
    try:
        transform_config = transform_config_from(config)
    except ValidationError as e:
        _fail(f"Invalid transform settings: {e}")

    try:
        result = ImageTransformer().transform(Path(input_path).read_bytes(), transform_config)
    except ImageVaultError as e:
        _fail(str(e))

    if output:
        Path(output).write_bytes(result)
        console.print(f"[green]Written to {output}[/green]")
    if save_result:
        try:
            key = _manager(config).save(result, fmt=ImageFormat.JPEG)
        except ImageVaultError as e:
            _fail(str(e))
        console.print(key)
