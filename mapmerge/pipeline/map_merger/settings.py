"""Environment-driven settings for the map merger.

This module provides ``MergeSettings``, which gathers the runtime defaults
of the command-line program from the process environment and an optional
``.env`` file in the working directory. CLI flags override these values.

Examples
--------
>>> settings = MergeSettings()
>>> settings.delimiter  # doctest: +SKIP
','
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from mapmerge.config import CSV_DELIMITER, CSV_QUOTE_CHAR, TRUTHY_ENV_VALUES
from mapmerge.exceptions import ConfigurationError


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in TRUTHY_ENV_VALUES


class MergeSettings:
    r"""Runtime settings resolved from environment variables.

    Attributes
    ----------
    delimiter : str
        CSV field separator (``MAPMERGE_CSV_DELIMITER``, default ``,``).
    strict : bool
        Reject unterminated quoted fields (``MAPMERGE_STRICT_CSV``).
    keep_self_closing : bool
        Keep ``/>`` intact on tags without an id
        (``MAPMERGE_KEEP_SELF_CLOSING``).
    log_level : str
        Logging level name (``LOG_LEVEL``, default ``INFO``).
    disable_file_logs : bool
        Skip the log file handler (``DISABLE_FILE_LOGS``).

    Parameters
    ----------
    env_file : Path | None, optional
        ``.env`` file to load before reading the environment. Defaults to
        ``.env`` in the current working directory; ``None`` skips loading.

    Raises
    ------
    ConfigurationError
        If the configured delimiter is not a single non-quote character.
    """

    def __init__(self, env_file: Path | None = Path(".env")) -> None:
        if env_file is not None and Path(env_file).is_file():
            load_dotenv(env_file, override=False)
        self.delimiter: str = os.getenv("MAPMERGE_CSV_DELIMITER", CSV_DELIMITER)
        self.strict: bool = _env_flag("MAPMERGE_STRICT_CSV")
        self.keep_self_closing: bool = _env_flag("MAPMERGE_KEEP_SELF_CLOSING")
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")
        self.disable_file_logs: bool = bool(os.getenv("DISABLE_FILE_LOGS"))
        if len(self.delimiter) != 1 or self.delimiter == CSV_QUOTE_CHAR:
            raise ConfigurationError(
                "MAPMERGE_CSV_DELIMITER must be a single non-quote character",
                context={"delimiter": self.delimiter},
            )
