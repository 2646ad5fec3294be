"""Path and size helpers shared by the staging and archive steps."""

import os
import pathlib


FILE_SIZE_UNITS: tuple[str, ...] = ("B", "KB", "MB", "GB", "TB")


def mkdirs(path: pathlib.Path) -> pathlib.Path:
    """Create a directory, including any missing parents.

    An existing directory is left untouched.

    :param path: Directory to create.
    :returns: The directory path.
    :raises OSError: If the directory cannot be created (e.g. a file is in the way).
    """

    if path.is_dir() is True:
        return path
    path.mkdir(parents=True, exist_ok=True)
    return path


def format_file_size(size: int) -> str:
    """Format a byte count using 1024-based units with at most one decimal.

    >>> format_file_size(1500)
    '1.5 KB'

    :param size: Size in bytes.
    :returns: Human-readable size such as ``4 B`` or ``5 MB``.
    """

    if size <= 0:
        return "0 B"

    group: int = 0
    while group < len(FILE_SIZE_UNITS) - 1 and size >= 1024 ** (group + 1):
        group += 1

    text: str = f"{size / 1024 ** group:,.1f}"
    if text.endswith(".0") is True:
        text = text[:-2]
    return f"{text} {FILE_SIZE_UNITS[group]}"


def file_size(path: os.PathLike[str] | str) -> str:
    """Format the size of a file on disk.

    :param path: File path.
    :returns: Human-readable size (``0 B`` if the file does not exist).
    """

    p: pathlib.Path = pathlib.Path(path)
    if p.is_file() is False:
        return "0 B"
    return format_file_size(p.stat().st_size)
