"""Text-level attribute merging for SVG ``<path>`` elements.

This module rewrites the opening tags of target elements in raw SVG text.
It deliberately works on the text instead of a parsed document tree, so
every byte outside a matched tag (other elements, comments, whitespace,
attribute order) comes back exactly as it went in.

For each matched tag the merger strips previously injected ``long-name``,
``value`` and ``region`` attributes, reads the element's ``id`` and
``inkscape:label``, resolves fresh values through a ``LookupIndex`` and
inserts the three attributes again, one per line. Running the merge twice
with the same index gives the same document as running it once.

Boundaries
----------
- Pure string processing: no file access and no logging side effects
  beyond debug output.
- Total over all string input; missing attributes or unknown keys fall back
  to the defaults in ``mapmerge.config``.

Examples
--------
>>> from mapmerge.pipeline.map_merger.lookup import LookupIndex
>>> print(merge_markup('<path d="M0 0">', LookupIndex()))
<path d="M0 0"
    long-name="None"
    value="0"
    region="0">
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from mapmerge.config import (
    ATTRIBUTE_INDENT,
    DEFAULT_ATTRIBUTE_VALUE,
    DEFAULT_LONG_NAME,
    ID_ATTRIBUTE,
    LONG_NAME_ATTRIBUTE,
    MERGED_ATTRIBUTE_NAMES,
    REGION_ATTRIBUTE,
    RESOLVED_BY_DEFAULT,
    RESOLVED_BY_ID,
    RESOLVED_BY_LABEL,
    STYLE_LABEL_ATTRIBUTE,
    TARGET_TAG_NAME,
    VALUE_ATTRIBUTE,
)

from .lookup import LookupIndex

logger = logging.getLogger(__name__)

TAG_PATTERN = re.compile(rf"<{re.escape(TARGET_TAG_NAME)}\b[^>]*>", re.IGNORECASE)
MERGED_ATTRIBUTE_PATTERNS = [
    re.compile(rf'\s+{re.escape(name)}="[^"]*"', re.IGNORECASE)
    for name in MERGED_ATTRIBUTE_NAMES
]
STYLE_LABEL_PATTERN = re.compile(
    rf'{re.escape(STYLE_LABEL_ATTRIBUTE)}="([^"]*)"', re.IGNORECASE
)
ID_PATTERN = re.compile(rf'\s{re.escape(ID_ATTRIBUTE)}="([^"]*)"', re.IGNORECASE)
ID_INSERTION_PATTERN = re.compile(rf'\s+{re.escape(ID_ATTRIBUTE)}="', re.IGNORECASE)


@dataclass(frozen=True)
class ElementResolution:
    """How the attributes of one rewritten tag were chosen.

    Attributes
    ----------
    element_id : str | None
        The tag's ``id`` attribute, if present.
    style_label : str | None
        The tag's ``inkscape:label`` attribute, if present.
    long_name : str
        Unescaped value written to ``long-name``.
    value : str
        Unescaped value written to ``value``.
    region : str
        Unescaped value written to ``region``.
    source : str
        ``"id"``, ``"label"`` or ``"default"``.
    """

    element_id: str | None
    style_label: str | None
    long_name: str
    value: str
    region: str
    source: str


def escape_attribute_value(value: str) -> str:
    """Escape double quotes for use inside a double-quoted attribute.

    >>> escape_attribute_value('say "hi" & <go>')
    'say &quot;hi&quot; & <go>'
    """
    return str(value).replace('"', "&quot;")


def strip_merged_attributes(tag: str) -> str:
    """Remove every ``long-name``, ``value`` and ``region`` attribute from ``tag``."""
    for pattern in MERGED_ATTRIBUTE_PATTERNS:
        tag = pattern.sub("", tag)
    return tag


def _first_group(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    return match.group(1) if match else None


def resolve_element(
    element_id: str | None, style_label: str | None, index: LookupIndex
) -> ElementResolution:
    """Choose ``long-name``, ``value`` and ``region`` for one element.

    The identifier is tried first, then the style label. An empty
    identifier or label counts as absent.

    Parameters
    ----------
    element_id : str | None
        Value of the element's ``id`` attribute.
    style_label : str | None
        Value of the element's ``inkscape:label`` attribute.
    index : LookupIndex
        Table rows keyed by identifier and by label.

    Returns
    -------
    ElementResolution
        The chosen values and which key produced them.

    Examples
    --------
    >>> from mapmerge.pipeline.map_merger.lookup import EntityAttributes
    >>> idx = LookupIndex(
    ...     by_id={"p1": EntityAttributes("7", "2", label="North")},
    ...     by_label={"Norte": EntityAttributes("99", "99", id="")},
    ... )
    >>> resolve_element("p1", "Norte", idx).long_name
    'North'
    >>> resolve_element(None, "Norte", idx).value
    '99'
    >>> resolve_element(None, None, idx).source
    'default'
    """
    fallback_name = style_label or DEFAULT_LONG_NAME
    if element_id and element_id in index.by_id:
        entry = index.by_id[element_id]
        return ElementResolution(
            element_id=element_id,
            style_label=style_label,
            long_name=entry.label or fallback_name,
            value=entry.value or DEFAULT_ATTRIBUTE_VALUE,
            region=entry.region or DEFAULT_ATTRIBUTE_VALUE,
            source=RESOLVED_BY_ID,
        )
    if style_label and style_label in index.by_label:
        entry = index.by_label[style_label]
        # The row's own id is never written back onto the element.
        return ElementResolution(
            element_id=element_id,
            style_label=style_label,
            long_name=style_label,
            value=entry.value or DEFAULT_ATTRIBUTE_VALUE,
            region=entry.region or DEFAULT_ATTRIBUTE_VALUE,
            source=RESOLVED_BY_LABEL,
        )
    return ElementResolution(
        element_id=element_id,
        style_label=style_label,
        long_name=fallback_name,
        value=DEFAULT_ATTRIBUTE_VALUE,
        region=DEFAULT_ATTRIBUTE_VALUE,
        source=RESOLVED_BY_DEFAULT,
    )


def format_merged_attributes(long_name: str, value: str, region: str) -> str:
    """Render the three merged attributes, each on its own indented line."""
    return "".join(
        f'\n{ATTRIBUTE_INDENT}{name}="{escape_attribute_value(text)}"'
        for name, text in (
            (LONG_NAME_ATTRIBUTE, long_name),
            (VALUE_ATTRIBUTE, value),
            (REGION_ATTRIBUTE, region),
        )
    )


def rewrite_tag(
    tag: str, index: LookupIndex, *, keep_self_closing: bool = False
) -> tuple[str, ElementResolution]:
    """Rewrite one target tag with freshly resolved attributes.

    The new attributes go right before the whitespace that precedes the
    first ``id="`` attribute. Tags without an ``id`` get them appended
    before the final ``>``; with ``keep_self_closing`` a trailing ``/>``
    stays together and the attributes are placed in front of it.

    Parameters
    ----------
    tag : str
        Full opening tag text, from ``<`` through ``>``.
    index : LookupIndex
        Table rows keyed by identifier and by label.
    keep_self_closing : bool, optional
        Insert before ``/>`` instead of splitting it. Defaults to ``False``.

    Returns
    -------
    tuple[str, ElementResolution]
        The rewritten tag and how its values were resolved.
    """
    clean = strip_merged_attributes(tag)
    style_label = _first_group(STYLE_LABEL_PATTERN, clean)
    element_id = _first_group(ID_PATTERN, clean)
    resolution = resolve_element(element_id, style_label, index)
    attributes = format_merged_attributes(
        resolution.long_name, resolution.value, resolution.region
    )

    id_match = ID_INSERTION_PATTERN.search(clean)
    if element_id is not None and id_match is not None:
        position = id_match.start()
        return clean[:position] + attributes + clean[position:], resolution
    if keep_self_closing and clean.endswith("/>"):
        return clean[:-2] + attributes + "/>", resolution
    return clean[:-1] + attributes + ">", resolution


def merge_markup_with_resolutions(
    markup_text: str, index: LookupIndex, *, keep_self_closing: bool = False
) -> tuple[str, list[ElementResolution]]:
    """Rewrite every target tag and collect how each one was resolved.

    Tags are processed left to right in a single scan; text between them is
    copied unchanged.

    Parameters
    ----------
    markup_text : str
        Raw SVG (or other markup) text.
    index : LookupIndex
        Table rows keyed by identifier and by label.
    keep_self_closing : bool, optional
        Passed through to ``rewrite_tag``.

    Returns
    -------
    tuple[str, list[ElementResolution]]
        The merged document and one resolution per rewritten tag, in
        document order.
    """
    resolutions: list[ElementResolution] = []

    def replace_tag(match: re.Match[str]) -> str:
        rewritten, resolution = rewrite_tag(
            match.group(0), index, keep_self_closing=keep_self_closing
        )
        resolutions.append(resolution)
        return rewritten

    merged = TAG_PATTERN.sub(replace_tag, markup_text)
    logger.debug("Rewrote %d <%s> tags", len(resolutions), TARGET_TAG_NAME)
    return merged, resolutions


def merge_markup(
    markup_text: str, index: LookupIndex, *, keep_self_closing: bool = False
) -> str:
    """Return ``markup_text`` with merged attributes on every target tag."""
    merged, _ = merge_markup_with_resolutions(
        markup_text, index, keep_self_closing=keep_self_closing
    )
    return merged
