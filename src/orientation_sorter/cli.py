"""Command-line interface for image-orientation-sorter."""

import json
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from orientation_sorter import __version__
from orientation_sorter.core.models import CollisionPolicy, OperatingMode
from orientation_sorter.core.report import RunReport
from orientation_sorter.core.sorter import OrientationSorter, SortOptions
from orientation_sorter.utils.config import Config
from orientation_sorter.utils.logger import setup_logger, verbosity_to_level

console = Console()


@click.command()
@click.version_option(version=__version__, prog_name="image-orientation-sorter")
@click.argument(
    "input_dir",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, readable=True, path_type=Path),
)
@click.argument(
    "output_dir",
    required=False,
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
)
@click.option("--recursive", "-r", is_flag=True, help="Recurse into subdirectories.")
@click.option(
    "--copy",
    "-c",
    is_flag=True,
    help="Copy (rather than move) images into the wide/tall/sqr folders of OUTPUT_DIR.",
)
@click.option(
    "--prefix",
    "-p",
    is_flag=True,
    help="Prepend 'wide_', 'tall_', or 'sqr_' to output filenames.",
)
@click.option(
    "--rename",
    is_flag=True,
    help="Rename files where they are, prepending 'wide_', 'tall_', or 'sqr_'. "
    "Cannot be combined with --copy, --prefix, or OUTPUT_DIR.",
)
@click.option(
    "--read-headers",
    is_flag=True,
    help="Detect images by file header rather than extension (slower).",
)
@click.option(
    "--on-collision",
    type=click.Choice([p.value for p in CollisionPolicy], case_sensitive=False),
    help="What to do when the destination file exists: rename (add a number), "
    "overwrite, or skip (default: from config, else rename).",
)
@click.option("--dry-run", "-d", is_flag=True, help="Show what would be done without changing any files.")
@click.option("--skip-hidden", is_flag=True, help="Ignore hidden files and folders.")
@click.option("--no-progress", is_flag=True, help="Do not show a progress bar.")
@click.option("--verbose", "-v", count=True, help="Increase verbosity (-v, -vv).")
@click.option("--quiet", "-q", is_flag=True, help="Do not print anything.")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default: ~/.image-orientation-sorter/config.json)",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write a debug log to this file.",
)
@click.option(
    "--report",
    "report_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Save the run report as JSON.",
)
def cli(
    input_dir: Path,
    output_dir: Optional[Path],
    recursive: bool,
    copy: bool,
    prefix: bool,
    rename: bool,
    read_headers: bool,
    on_collision: Optional[str],
    dry_run: bool,
    skip_hidden: bool,
    no_progress: bool,
    verbose: int,
    quiet: bool,
    config_file: Optional[Path],
    log_file: Optional[Path],
    report_file: Optional[Path],
) -> None:
    """
    Sort images into wide, tall, and square folders by orientation.

    INPUT_DIR holds the images to sort. OUTPUT_DIR receives the orientation
    folders and defaults to INPUT_DIR.

    Example:
        image-orientation-sorter ~/Wallpapers ~/Sorted --copy --recursive
    """
    setup_logger("orientation_sorter", level=verbosity_to_level(verbose, quiet), log_file=log_file)

    config = Config(config_file)

    try:
        mode = OperatingMode.from_flags(copy=copy, rename=rename)
        policy = CollisionPolicy(
            str(on_collision or config.get("collision_policy", "rename")).lower()
        )
    except ValueError as e:
        raise click.UsageError(str(e))

    options = SortOptions(
        input_dir=input_dir,
        output_dir=output_dir,
        mode=mode,
        policy=policy,
        prefix=prefix,
        recursive=recursive,
        read_headers=read_headers or bool(config.get("read_headers", False)),
        dry_run=dry_run,
        skip_hidden=skip_hidden or bool(config.get("skip_hidden", False)),
    )

    try:
        options.validate()
    except (FileNotFoundError, PermissionError) as e:
        if not quiet:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)
    except ValueError as e:
        raise click.UsageError(str(e))

    show_progress = not (quiet or no_progress) and bool(config.get("show_progress", True))
    sorter = OrientationSorter(options, show_progress=show_progress)
    report = sorter.run()

    if report_file:
        _save_report_json(report, report_file)

    if quiet:
        return

    if dry_run:
        _display_planned(report, options)
    if verbose and (report.skipped or report.errors):
        _display_problems(report)

    style = "yellow" if report.error_count else "green"
    console.print(f"[{style}]{report.summary()}[/{style}]")


def _display_planned(report: RunReport, options: SortOptions) -> None:
    """Display the source -> destination mappings of a dry run."""
    if not report.planned:
        console.print("[yellow]Nothing to do.[/yellow]")
        return

    destination_root = options.destination_root or options.input_dir
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column(escape(f"Source ({options.input_dir})"))
    table.add_column(escape(f"Destination ({destination_root})"))
    for source, destination in report.planned:
        table.add_row(
            _relative(source, options.input_dir), _relative(destination, destination_root)
        )
    console.print(table)


def _relative(path: Path, base: Path) -> str:
    try:
        return escape(str(path.relative_to(base)))
    except ValueError:
        return escape(str(path))


def _display_problems(report: RunReport) -> None:
    """Display skipped and failed files."""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("File")
    table.add_column("Outcome")
    table.add_column("Reason")
    for path, reason in report.skipped:
        table.add_row(escape(str(path)), "[yellow]skipped[/yellow]", escape(reason))
    for path, reason in report.errors:
        table.add_row(escape(str(path)), "[red]error[/red]", escape(reason))
    console.print(table)


def _save_report_json(report: RunReport, output_path: Path) -> None:
    """Save the run report to a JSON file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, indent=2)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
