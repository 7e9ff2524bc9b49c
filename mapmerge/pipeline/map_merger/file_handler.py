"""File handling utilities for the map merger.

This module knows how to read the SVG and CSV inputs and save the merged
document. It performs only file I/O and never touches the merge logic.
"""

from pathlib import Path

from mapmerge.exceptions import UserInputError


def read_text_file(path: Path) -> str:
    """Read a UTF-8 text file, dropping a leading byte order mark.

    Parameters
    ----------
    path : Path
        File to read.

    Returns
    -------
    str
        The decoded file content.

    Raises
    ------
    UserInputError
        If ``path`` does not exist or is not a regular file.
    UnicodeDecodeError
        If the file is not valid UTF-8.
    """
    path = Path(path)
    if not path.is_file():
        raise UserInputError(f"File not found: {path}", context={"path": str(path)})
    with path.open("r", encoding="utf-8-sig", newline="") as fh:
        return fh.read()


def write_text_file(text: str, output_path: Path) -> None:
    """Write ``text`` as UTF-8, creating parent directories as needed.

    Parameters
    ----------
    text : str
        Content to write.
    output_path : Path
        Destination file.

    Returns
    -------
    None
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(text)


def default_output_path(svg_path: Path, filename: str) -> Path:
    """Return ``filename`` placed next to the SVG input."""
    return Path(svg_path).parent / filename


def write_text_files(outputs: list[tuple[str, Path]]) -> None:
    """Write several files so that either all of them or none end up on disk.

    Every text is first written to a hidden ``.<name>.partial`` sibling of
    its target. The targets are only replaced once all partial files have
    been written. A failure at any step removes the partial files and any
    target this call already replaced.

    Parameters
    ----------
    outputs : list[tuple[str, Path]]
        ``(text, destination)`` pairs, committed in order.

    Returns
    -------
    None

    Raises
    ------
    UserInputError
        If a destination is an existing directory.
    OSError
        If writing or renaming fails.
    """
    targets = [(text, Path(target)) for text, target in outputs]
    for _, target in targets:
        if target.is_dir():
            raise UserInputError(
                f"Output path is a directory: {target}", context={"path": str(target)}
            )
    staged: list[tuple[Path, Path]] = []
    committed: list[Path] = []
    try:
        for text, target in targets:
            partial = target.with_name(f".{target.name}.partial")
            staged.append((partial, target))
            write_text_file(text, partial)
        for partial, target in staged:
            partial.replace(target)
            committed.append(target)
    except OSError:
        for target in committed:
            target.unlink(missing_ok=True)
        raise
    finally:
        for partial, _ in staged:
            if partial.exists():
                partial.unlink()
