"""Merge a CSV table of region metadata into an SVG map.

This script reads an SVG map and a CSV table (columns ``id``, ``label``,
``value``, ``region``), writes ``long-name``, ``value`` and ``region``
attributes into every ``<path>`` element and saves the edited map. Status
messages and a resolution summary are printed with Rich; diagnostics go to
the standard logging handlers.

Usage
-----
mapmerge --svg map.svg --csv regions.csv [--output mapa_editado.svg] [--report report.csv]
    [--delimiter ,] [--strict] [--keep-self-closing] [--preview] [--log-level INFO]

Notes
-----
Defaults for the delimiter, strictness, self-closing handling and log
level come from environment variables (or a ``.env`` file), see
``mapmerge.pipeline.map_merger.settings``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from mapmerge.config import (
    DEFAULT_OUTPUT_FILENAME,
    PREVIEW_MAX_CHARS,
    RESOLVED_BY_DEFAULT,
    RESOLVED_BY_ID,
    RESOLVED_BY_LABEL,
)
from mapmerge.exceptions import AppError
from mapmerge.pipeline.map_merger.file_handler import (
    default_output_path,
    read_text_file,
)
from mapmerge.pipeline.map_merger.report import summarize_resolutions
from mapmerge.pipeline.map_merger.runner import configure_logging, merge_files
from mapmerge.pipeline.map_merger.settings import MergeSettings

logger = logging.getLogger(__name__)

console = Console()


def parse_arguments(
    argv: list[str] | None = None, settings: MergeSettings | None = None
) -> argparse.Namespace:
    """Parse command-line arguments, taking defaults from ``settings``.

    Parameters
    ----------
    argv : list[str] | None, optional
        Arguments to parse; ``None`` means ``sys.argv[1:]``.
    settings : MergeSettings | None, optional
        Environment-derived defaults. Loaded on demand when omitted.

    Returns
    -------
    argparse.Namespace
        Parsed arguments namespace with paths and settings.
    """
    settings = settings if settings is not None else MergeSettings()
    parser = argparse.ArgumentParser(
        prog="mapmerge",
        description="Insert long-name, value and region attributes from a CSV "
        "table into the <path> elements of an SVG map.",
    )
    parser.add_argument("--svg", type=Path, required=True, help="Input SVG file.")
    parser.add_argument("--csv", type=Path, required=True, help="Input CSV file.")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help=f"Edited SVG to write (default: {DEFAULT_OUTPUT_FILENAME} next to the SVG).",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Optional CSV report with one row per rewritten element.",
    )
    parser.add_argument(
        "--delimiter",
        type=str,
        default=settings.delimiter,
        help="CSV field separator (default: %(default)r).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=settings.strict,
        help="Fail on unterminated quoted CSV fields instead of reading past them.",
    )
    parser.add_argument(
        "--keep-self-closing",
        action="store_true",
        default=settings.keep_self_closing,
        help="Insert attributes before '/>' on self-closing tags without an id.",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help=f"Show the first {PREVIEW_MAX_CHARS} characters of each input.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=settings.log_level,
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    )
    return parser.parse_args(argv)


def status(message: str) -> None:
    """Print a status line for the user."""
    console.print(f"[bold cyan]Status:[/] {escape(message)}")


def preview_panel(title: str, text: str) -> Panel:
    """Return a panel showing at most ``PREVIEW_MAX_CHARS`` of ``text``."""
    return Panel(Text(text[:PREVIEW_MAX_CHARS]), title=title, expand=False)


def build_summary_table(counts: dict[str, int]) -> Table:
    """Render resolution counts as a Rich table."""
    table = Table(title="Merged elements")
    table.add_column("Resolved by")
    table.add_column("Elements", justify="right")
    table.add_row("id", str(counts.get(RESOLVED_BY_ID, 0)))
    table.add_row("inkscape:label", str(counts.get(RESOLVED_BY_LABEL, 0)))
    table.add_row("defaults", str(counts.get(RESOLVED_BY_DEFAULT, 0)))
    table.add_row("[bold]total[/]", f"[bold]{counts.get('total', 0)}[/]")
    return table


def run_merge(args: argparse.Namespace) -> int:
    """Execute the merge described by ``args`` with status output.

    Returns
    -------
    int
        Process exit status: 0 on success, 1 on any failure. The edited
        map is only written once the whole merge has succeeded.
    """
    output_path = (
        args.output
        if args.output is not None
        else default_output_path(args.svg, DEFAULT_OUTPUT_FILENAME)
    )
    try:
        if args.preview:
            for label, path in (("SVG", args.svg), ("CSV", args.csv)):
                console.print(
                    preview_panel(f"{label} input: {path}", read_text_file(path))
                )
        result = merge_files(
            args.svg,
            args.csv,
            output_path,
            report_path=args.report,
            delimiter=args.delimiter,
            strict=args.strict,
            keep_self_closing=args.keep_self_closing,
            on_status=status,
        )
    except (AppError, OSError, UnicodeDecodeError) as exc:
        logger.error("Merge failed: %s", exc)
        console.print(f"[bold red]Error:[/] {escape(str(exc))}")
        return 1

    console.print(build_summary_table(summarize_resolutions(result.resolutions)))
    status(f"Done: edited file written to {output_path}")
    if args.report is not None:
        status(f"Resolution report written to {args.report}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the SVG/CSV merge from CLI arguments.

    Parameters
    ----------
    argv : list[str] | None, optional
        Arguments to parse; ``None`` means ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit status.
    """
    try:
        settings = MergeSettings()
    except AppError as exc:
        console.print(f"[bold red]Error:[/] {escape(str(exc))}")
        return 1
    args = parse_arguments(argv, settings)
    configure_logging(args.log_level, enable_file=not settings.disable_file_logs)
    logger.info("Merging %s into %s", args.csv, args.svg)
    return run_merge(args)


if __name__ == "__main__":  # pragma: no cover - CLI entry
    sys.exit(main())
