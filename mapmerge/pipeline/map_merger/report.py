"""Resolution reporting for merged SVG elements.

Turns the per-element resolutions produced by the merger into a pandas
DataFrame, summary counts for status output, and an optional CSV export.
Contains no merge logic of its own.

Usage
-----
>>> from mapmerge.pipeline.map_merger.markup import ElementResolution
>>> res = [ElementResolution("p1", None, "North", "7", "2", "id")]
>>> summarize_resolutions(res)["id"]
1
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import asdict
from pathlib import Path

import pandas as pd

from mapmerge.config import (
    REPORT_COLUMNS,
    RESOLVED_BY_DEFAULT,
    RESOLVED_BY_ID,
    RESOLVED_BY_LABEL,
)

from .file_handler import write_text_file
from .markup import ElementResolution


def build_resolution_frame(
    resolutions: Iterable[ElementResolution],
) -> pd.DataFrame:
    """Build a DataFrame with one row per rewritten element.

    Parameters
    ----------
    resolutions : Iterable[ElementResolution]
        Resolutions in document order.

    Returns
    -------
    pd.DataFrame
        Columns ``REPORT_COLUMNS``; missing ids and labels are empty
        strings. An empty input still yields the full column set.

    Examples
    --------
    >>> build_resolution_frame([]).columns.tolist()
    ['element_id', 'style_label', 'long_name', 'value', 'region', 'source']
    """
    rows = [asdict(resolution) for resolution in resolutions]
    if not rows:
        return pd.DataFrame(columns=REPORT_COLUMNS)
    frame = pd.DataFrame(rows, columns=REPORT_COLUMNS)
    return frame.fillna({"element_id": "", "style_label": ""})


def summarize_resolutions(resolutions: Iterable[ElementResolution]) -> dict[str, int]:
    """Count rewritten elements in total and per resolution source."""
    counts = Counter(resolution.source for resolution in resolutions)
    return {
        "total": sum(counts.values()),
        RESOLVED_BY_ID: counts.get(RESOLVED_BY_ID, 0),
        RESOLVED_BY_LABEL: counts.get(RESOLVED_BY_LABEL, 0),
        RESOLVED_BY_DEFAULT: counts.get(RESOLVED_BY_DEFAULT, 0),
    }


def render_resolution_report(resolutions: Iterable[ElementResolution]) -> str:
    """Return the resolution table as CSV text without the index column."""
    return build_resolution_frame(resolutions).to_csv(index=False)


def write_resolution_report(
    resolutions: Iterable[ElementResolution], report_path: Path
) -> None:
    """Write the resolution table to ``report_path`` as UTF-8 CSV."""
    write_text_file(render_resolution_report(resolutions), Path(report_path))
