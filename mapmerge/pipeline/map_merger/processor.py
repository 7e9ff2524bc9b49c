"""Merge CSV metadata into SVG markup.

Composes the table parser, the lookup index builder and the markup merger
into one text-in, text-out operation. This module focuses on sequencing
the core stages and does not read or write files.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from mapmerge.config import CSV_DELIMITER

from .lookup import build_lookup_index
from .markup import ElementResolution, merge_markup_with_resolutions
from .table_parser import parse_table

logger = logging.getLogger(__name__)


@dataclass
class MergeResult:
    """Merged document text and the per-element resolutions behind it."""

    text: str
    resolutions: list[ElementResolution] = field(default_factory=list)


def run_with_resolutions(
    markup_text: str,
    table_text: str,
    *,
    delimiter: str = CSV_DELIMITER,
    strict: bool = False,
    keep_self_closing: bool = False,
    on_status: Callable[[str], None] | None = None,
) -> MergeResult:
    """Parse the table, index it and merge it into the markup.

    Parameters
    ----------
    markup_text : str
        Raw SVG text containing zero or more ``<path>`` elements.
    table_text : str
        Raw CSV text whose header names ``id``, ``label``, ``value`` and
        ``region`` columns (any subset, any case).
    delimiter : str, optional
        CSV field separator. Defaults to ``,``.
    strict : bool, optional
        Reject unterminated quoted fields instead of reading past them.
    keep_self_closing : bool, optional
        Keep ``/>`` intact on self-closing tags without an ``id``.
    on_status : Callable[[str], None] | None, optional
        Called with a short progress message before parsing and before
        editing the markup.

    Returns
    -------
    MergeResult
        The merged document and one resolution per rewritten element.

    Raises
    ------
    mapmerge.exceptions.ConfigurationError
        If ``delimiter`` is invalid.
    mapmerge.exceptions.DataValidationError
        If ``strict`` is set and the table has broken quoting.
    """
    notify = on_status or (lambda message: None)
    notify("Parsing CSV...")
    records = parse_table(table_text, delimiter=delimiter, strict=strict)
    index = build_lookup_index(records)
    logger.info(
        "Parsed %d table rows (%d ids, %d labels)",
        len(records),
        len(index.by_id),
        len(index.by_label),
    )
    notify("Editing SVG, inserting attributes...")
    text, resolutions = merge_markup_with_resolutions(
        markup_text, index, keep_self_closing=keep_self_closing
    )
    logger.info("Merged attributes into %d elements", len(resolutions))
    return MergeResult(text=text, resolutions=resolutions)


def run(
    markup_text: str,
    table_text: str,
    *,
    delimiter: str = CSV_DELIMITER,
    strict: bool = False,
    keep_self_closing: bool = False,
) -> str:
    """Return ``markup_text`` merged with the metadata in ``table_text``.

    Equivalent to ``merge_markup(markup_text,
    build_lookup_index(parse_table(table_text)))``.

    Examples
    --------
    >>> svg = '<svg><path inkscape:label="Norte" d="M0 0"/></svg>'
    >>> out = run(svg, "label,value,region\\nNorte,5,1\\n")
    >>> 'value="5"' in out and 'region="1"' in out
    True
    """
    return run_with_resolutions(
        markup_text,
        table_text,
        delimiter=delimiter,
        strict=strict,
        keep_self_closing=keep_self_closing,
    ).text
