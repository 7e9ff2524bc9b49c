"""Map merger pipeline package.

This package exposes the public API for merging CSV region metadata into
SVG ``<path>`` elements: table parsing, lookup index construction, markup
rewriting, and the orchestrator that chains them. Consumers (the CLI, other
scripts, notebooks) should import from here rather than from submodules.

Examples
--------
>>> from mapmerge.pipeline.map_merger import build_lookup_index, merge_markup, parse_table
>>> index = build_lookup_index(parse_table("id,value\\np1,3\\n"))
>>> 'value="3"' in merge_markup('<path id="p1"/>', index)
True
"""

from .lookup import EntityAttributes, LookupIndex, build_lookup_index
from .markup import (
    ElementResolution,
    merge_markup,
    merge_markup_with_resolutions,
    resolve_element,
    rewrite_tag,
)
from .processor import MergeResult, run, run_with_resolutions
from .table_parser import parse_header, parse_table, split_fields

__all__ = [
    "ElementResolution",
    "EntityAttributes",
    "LookupIndex",
    "MergeResult",
    "build_lookup_index",
    "merge_markup",
    "merge_markup_with_resolutions",
    "parse_header",
    "parse_table",
    "resolve_element",
    "rewrite_tag",
    "run",
    "run_with_resolutions",
    "split_fields",
]
