"""Map Merger Runner Module.

This module provides the programmatic entrypoint and logging configuration
for merging a CSV table into an SVG map on disk. It is the boundary between
the command-line layer and the pure merge pipeline: it reads both inputs,
delegates all merge logic to ``processor.py``, and writes the result.

The merge is all-or-nothing. The output file and the optional report are
rendered in memory first and then committed together, so a failure never
leaves a partially edited map or a lone report behind.

Examples
--------
>>> from mapmerge.pipeline.map_merger.runner import run_from_config, configure_logging
>>> configure_logging(log_level="INFO", enable_file=False)
>>> ok = run_from_config(Path("map.svg"), Path("regions.csv"))  # doctest: +SKIP
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from mapmerge.config import (
    CSV_DELIMITER,
    DEFAULT_OUTPUT_FILENAME,
    LOG_DIR,
    LOG_FILENAME_MERGE_MAP,
    LOG_FORMAT,
)

from .file_handler import default_output_path, read_text_file, write_text_files
from .processor import MergeResult, run_with_resolutions
from .report import render_resolution_report

logger = logging.getLogger(__name__)


def configure_logging(log_level: str = "INFO", enable_file: bool = True) -> None:
    r"""Configure logging for map merge execution.

    Sets up a console handler and an optional file handler using the log
    format from project configuration. File handler creation errors are
    ignored so that read-only checkouts and tests still get console logs.

    Parameters
    ----------
    log_level : str, optional
        The logging level (e.g., "INFO", "DEBUG"). Defaults to "INFO".
    enable_file : bool, optional
        Whether to also write ``LOG_DIR / LOG_FILENAME_MERGE_MAP``.
        Defaults to True.

    Returns
    -------
    None

    Notes
    -----
    Existing root handlers are removed first, so repeated calls do not
    duplicate output.
    """
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if enable_file:
        try:
            LOG_DIR.mkdir(exist_ok=True)
            handlers.insert(
                0, logging.FileHandler(LOG_DIR / LOG_FILENAME_MERGE_MAP, mode="a")
            )
        except Exception:
            pass
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )


def merge_files(
    svg_path: Path,
    csv_path: Path,
    output_path: Path | None = None,
    *,
    report_path: Path | None = None,
    delimiter: str = CSV_DELIMITER,
    strict: bool = False,
    keep_self_closing: bool = False,
    on_status: Callable[[str], None] | None = None,
) -> MergeResult:
    """Merge ``csv_path`` into ``svg_path`` and write the edited SVG.

    Parameters
    ----------
    svg_path : Path
        Source SVG map.
    csv_path : Path
        Source CSV table.
    output_path : Path | None, optional
        Destination file. Defaults to ``mapa_editado.svg`` next to the SVG.
    report_path : Path | None, optional
        When given, a CSV with one row per rewritten element is written here.
    delimiter, strict, keep_self_closing
        Passed through to ``run_with_resolutions``.
    on_status : Callable[[str], None] | None, optional
        Called with a short message before each stage, for user-facing
        progress output.

    Returns
    -------
    MergeResult
        The merged text and per-element resolutions.

    Raises
    ------
    mapmerge.exceptions.UserInputError
        If an input file is missing or an output path is a directory.
    mapmerge.exceptions.AppError
        For invalid settings or a rejected strict parse.
    OSError, UnicodeDecodeError
        If reading or writing fails.
    """
    svg_path = Path(svg_path)
    output_path = (
        Path(output_path)
        if output_path is not None
        else default_output_path(svg_path, DEFAULT_OUTPUT_FILENAME)
    )
    notify = on_status or (lambda message: None)
    notify("Reading files...")
    svg_text = read_text_file(svg_path)
    csv_text = read_text_file(Path(csv_path))
    result = run_with_resolutions(
        svg_text,
        csv_text,
        delimiter=delimiter,
        strict=strict,
        keep_self_closing=keep_self_closing,
        on_status=notify,
    )
    outputs = [(result.text, output_path)]
    if report_path is not None:
        report_text = render_resolution_report(result.resolutions)
        outputs.append((report_text, Path(report_path)))
    notify("Writing edited map...")
    write_text_files(outputs)
    logger.info("Wrote edited map to %s", output_path)
    if report_path is not None:
        logger.info("Wrote resolution report to %s", report_path)
    return result


def run_from_config(
    svg_path: Path,
    csv_path: Path,
    output_path: Path | None = None,
    *,
    report_path: Path | None = None,
    delimiter: str = CSV_DELIMITER,
    strict: bool = False,
    keep_self_closing: bool = False,
) -> bool:
    """Run the file-level merge and report success as a boolean.

    Returns
    -------
    bool
        True when the edited map was written, False on any failure (the
        exception is logged).
    """
    try:
        merge_files(
            svg_path,
            csv_path,
            output_path,
            report_path=report_path,
            delimiter=delimiter,
            strict=strict,
            keep_self_closing=keep_self_closing,
        )
        return True
    except Exception as exc:
        logger.exception("Failed to merge map: %s", exc)
        return False


__all__ = [
    "configure_logging",
    "merge_files",
    "run_from_config",
]
