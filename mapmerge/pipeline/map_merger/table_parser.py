"""Delimited-text parser for the region metadata table.

This module turns raw CSV text into an ordered list of records for the map
merger. It is responsible for line splitting, header normalization and
quote-aware field splitting, and for nothing else: no type coercion and no
trimming of data values happen here.

Parsing is permissive by default. Short rows are padded, extra fields are
ignored and an unterminated quote simply swallows the rest of its line.
Callers that prefer to reject broken quoting pass ``strict=True``.

"""

from __future__ import annotations

import logging

from mapmerge.config import CSV_DELIMITER, CSV_QUOTE_CHAR
from mapmerge.exceptions import ConfigurationError, DataValidationError

logger = logging.getLogger(__name__)


def _split_fields(line: str, delimiter: str) -> tuple[list[str], bool]:
    """Split ``line`` into fields and report whether a quote was left open."""
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    index = 0
    length = len(line)
    while index < length:
        char = line[index]
        if char == CSV_QUOTE_CHAR:
            if in_quotes and index + 1 < length and line[index + 1] == CSV_QUOTE_CHAR:
                current.append(CSV_QUOTE_CHAR)
                index += 1
            else:
                in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        index += 1
    fields.append("".join(current))
    return fields, in_quotes


def split_fields(line: str, delimiter: str = CSV_DELIMITER) -> list[str]:
    """Split one CSV line into raw field values.

    A double quote toggles the "inside quotes" state, a doubled quote
    inside a quoted field yields one literal quote, and ``delimiter`` only
    separates fields outside quotes. Every other character is copied as is.

    Parameters
    ----------
    line : str
        A single line of delimited text, without its line terminator.
    delimiter : str, optional
        Field separator character. Defaults to ``,``.

    Returns
    -------
    list[str]
        The fields of the line; always at least one (possibly empty) field.

    Examples
    --------
    >>> split_fields('1,"Region, North",10,5')
    ['1', 'Region, North', '10', '5']
    >>> split_fields('a,"x""y",c')
    ['a', 'x"y', 'c']
    >>> split_fields('')
    ['']
    """
    fields, _ = _split_fields(line, delimiter)
    return fields


def _non_blank_lines(text: str) -> list[str]:
    lines = text.replace("\r\n", "\n").split("\n")
    return [line for line in lines if line.strip() != ""]


def parse_header(line: str, delimiter: str = CSV_DELIMITER) -> list[str]:
    """Return the trimmed, lower-cased field names of a header line."""
    return [name.strip().lower() for name in split_fields(line, delimiter)]


def parse_table(
    text: str, *, delimiter: str = CSV_DELIMITER, strict: bool = False
) -> list[dict[str, str]]:
    """Parse delimited text into a list of field-name to value records.

    The first non-blank line is the header; every following non-blank line
    becomes one record keyed by the header names. Rows shorter than the
    header are padded with empty strings, and fields beyond the header
    length are ignored.

    Parameters
    ----------
    text : str
        Raw table text. CR-LF line endings are normalized to LF.
    delimiter : str, optional
        Single-character field separator. Defaults to ``,``.
    strict : bool, optional
        When ``True`` an unterminated quoted field fails the whole parse
        instead of being consumed to the end of its line.

    Returns
    -------
    list[dict[str, str]]
        Records in input order. Empty when the text has no non-blank line.

    Raises
    ------
    ConfigurationError
        If ``delimiter`` is not exactly one character or is a quote.
    DataValidationError
        If ``strict`` is set and a line ends inside a quoted field.

    Examples
    --------
    >>> parse_table("ID,Label\\n1,North\\n\\n2\\n")
    [{'id': '1', 'label': 'North'}, {'id': '2', 'label': ''}]
    >>> parse_table("   \\n")
    []
    """
    if len(delimiter) != 1 or delimiter == CSV_QUOTE_CHAR:
        raise ConfigurationError(
            "CSV delimiter must be a single non-quote character",
            context={"delimiter": delimiter},
        )
    lines = _non_blank_lines(text)
    if not lines:
        return []

    headers = parse_header(lines[0], delimiter)
    records: list[dict[str, str]] = []
    for row_number, line in enumerate(lines[1:], start=1):
        values, unterminated = _split_fields(line, delimiter)
        if unterminated:
            if strict:
                raise DataValidationError(
                    f"Unterminated quoted field in data row {row_number}",
                    context={"row": row_number},
                )
            logger.warning(
                "Row %d: unterminated quoted field, reading to end of line",
                row_number,
            )
        if len(values) < len(headers):
            values.extend([""] * (len(headers) - len(values)))
        record: dict[str, str] = {}
        for position, name in enumerate(headers):
            record[name] = values[position]
        records.append(record)
    logger.debug("Parsed %d records with columns %s", len(records), headers)
    return records
