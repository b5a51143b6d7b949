"""CLI entry point for keepmd."""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from .config import find_labels_file, load_config, load_valid_labels
from .tags.hashtags import build_valid_tag_set

console = Console()


@click.command()
@click.argument("input_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("output_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option("--config", "-c", "config_path", default=None, help="Path to config file")
@click.option("--labels", "labels_path", default=None, type=click.Path(dir_okay=False, path_type=Path),
              help="Labels file listing the labels whose hashtags stay live")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def cli(input_dir, output_dir, config_path, labels_path, verbose):
    """Convert a Google Keep export in INPUT_DIR into Markdown notes in OUTPUT_DIR."""
    from .converter import NoteConverter

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    try:
        config = load_config(config_path)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Could not load config: {e}")

    input_dir = input_dir.resolve()
    output_dir = output_dir.resolve()

    labels_file = labels_path or config.get("labels_file") or find_labels_file(input_dir)
    valid_tags = build_valid_tag_set(load_valid_labels(labels_file))

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logging.getLogger(__name__).error(f"Cannot create output directory {output_dir}: {e}")
        raise click.ClickException(f"Cannot create output directory: {output_dir}")

    console.print("[blue]Starting Google Keep to Markdown conversion...[/]")
    converter = NoteConverter(output_dir, valid_tags, config)
    result = converter.convert_directory(
        input_dir,
        on_converted=lambda src, dst: console.print(f"  Converted: {escape(src.stem)} → {escape(dst.name)}"),
    )

    console.print(f"[green]✓ Converted {len(result.converted)} out of {result.found} notes.[/]")
    if result.failed:
        console.print(f"  [red]{len(result.failed)} note(s) failed[/]")
    console.print(f"  Output directory: {output_dir}")


if __name__ == "__main__":
    cli()
