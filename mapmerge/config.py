"""Global configuration constants for the project.

Defines the target markup vocabulary, merge defaults, paths and filenames
used across the pipeline and the command-line program.
"""

from __future__ import annotations

from pathlib import Path

# Project directories
PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
LOG_DIR: Path = PROJECT_ROOT / "logs"

# Markup vocabulary
TARGET_TAG_NAME: str = "path"
STYLE_LABEL_ATTRIBUTE: str = "inkscape:label"
ID_ATTRIBUTE: str = "id"
LONG_NAME_ATTRIBUTE: str = "long-name"
VALUE_ATTRIBUTE: str = "value"
REGION_ATTRIBUTE: str = "region"
MERGED_ATTRIBUTE_NAMES: tuple[str, ...] = (
    LONG_NAME_ATTRIBUTE,
    VALUE_ATTRIBUTE,
    REGION_ATTRIBUTE,
)

# Merge defaults
DEFAULT_ATTRIBUTE_VALUE: str = "0"
DEFAULT_LONG_NAME: str = "None"
ATTRIBUTE_INDENT: str = "    "

# CSV / table defaults
CSV_DELIMITER: str = ","
CSV_QUOTE_CHAR: str = '"'
TABLE_ID_COLUMN: str = "id"
TABLE_LABEL_COLUMN: str = "label"
TABLE_VALUE_COLUMN: str = "value"
TABLE_REGION_COLUMN: str = "region"

# Resolution sources and report layout
RESOLVED_BY_ID: str = "id"
RESOLVED_BY_LABEL: str = "label"
RESOLVED_BY_DEFAULT: str = "default"
REPORT_COLUMNS: list[str] = [
    "element_id",
    "style_label",
    "long_name",
    "value",
    "region",
    "source",
]

# CLI defaults and logging
DEFAULT_OUTPUT_FILENAME: str = "mapa_editado.svg"
PREVIEW_MAX_CHARS: int = 20000
LOG_FILENAME_MERGE_MAP: str = "merge_map.log"
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
TRUTHY_ENV_VALUES: frozenset[str] = frozenset({"1", "true", "yes", "on"})
