"""Lookup index construction for the map merger.

Builds the two key-to-attributes maps used when resolving SVG elements:
one keyed by element identifier and one keyed by display label. The index
is a plain data holder; all resolution rules live in ``markup.py``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from mapmerge.config import (
    DEFAULT_ATTRIBUTE_VALUE,
    TABLE_ID_COLUMN,
    TABLE_LABEL_COLUMN,
    TABLE_REGION_COLUMN,
    TABLE_VALUE_COLUMN,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntityAttributes:
    """Resolved metadata for one table row.

    Attributes
    ----------
    value : str
        Value written to the element's ``value`` attribute.
    region : str
        Value written to the element's ``region`` attribute.
    label : str | None
        Row label; set on entries of ``LookupIndex.by_id``.
    id : str | None
        Row identifier; set on entries of ``LookupIndex.by_label``.
    """

    value: str
    region: str
    label: str | None = None
    id: str | None = None


@dataclass
class LookupIndex:
    """Row attributes keyed by identifier and by label."""

    by_id: dict[str, EntityAttributes] = field(default_factory=dict)
    by_label: dict[str, EntityAttributes] = field(default_factory=dict)


def _column(record: Mapping[str, str], name: str) -> str:
    value = record.get(name)
    if value is None:
        return ""
    return str(value).strip()


def build_lookup_index(records: Iterable[Mapping[str, str]]) -> LookupIndex:
    """Build the identifier and label maps from parsed table records.

    Each record contributes to ``by_id`` when its trimmed ``id`` is
    non-empty and to ``by_label`` when its trimmed ``label`` is non-empty.
    ``value`` and ``region`` fall back to ``"0"`` when missing or blank.
    Later records overwrite earlier ones that share a key.

    Parameters
    ----------
    records : Iterable[Mapping[str, str]]
        Records as produced by ``parse_table``; missing columns are
        treated as empty strings.

    Returns
    -------
    LookupIndex
        The populated index.

    Examples
    --------
    >>> index = build_lookup_index([{"id": "p1", "label": "North", "value": "7"}])
    >>> index.by_id["p1"]
    EntityAttributes(value='7', region='0', label='North', id=None)
    >>> index.by_label["North"].id
    'p1'
    """
    index = LookupIndex()
    for row_number, record in enumerate(records, start=1):
        element_id = _column(record, TABLE_ID_COLUMN)
        label = _column(record, TABLE_LABEL_COLUMN)
        value = _column(record, TABLE_VALUE_COLUMN) or DEFAULT_ATTRIBUTE_VALUE
        region = _column(record, TABLE_REGION_COLUMN) or DEFAULT_ATTRIBUTE_VALUE
        if element_id:
            index.by_id[element_id] = EntityAttributes(value, region, label=label)
        if label:
            index.by_label[label] = EntityAttributes(value, region, id=element_id)
        if not element_id and not label:
            logger.debug("Row %d: no id or label, ignored", row_number)
    return index
