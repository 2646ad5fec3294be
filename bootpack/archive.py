"""Archive creation: pack a staging directory into a store-only zip."""

import logging
import os
import pathlib
import zipfile

from bootpack.manifest import MANIFEST_PATH
from bootpack.staging import META_INF_DIR


class ArchiveError(OSError):
    """Raised when the archive cannot be written."""


def iter_archive_entries(root: pathlib.Path) -> list[tuple[pathlib.Path, str]]:
    """List the entries for a directory tree in archive order.

    ``META-INF/`` and ``META-INF/MANIFEST.MF`` come first, as ``JarInputStream``
    only finds a manifest at the start of the archive. The rest follows with
    each directory ahead of its files, then its subdirectories, all sorted by
    name. Directory entry names end with ``/``.

    :param root: Root directory.
    :returns: ``(path, arcname)`` pairs.
    """

    head: list[tuple[pathlib.Path, str]] = []
    entries: list[tuple[pathlib.Path, str]] = []
    for root_str, dirs, files in os.walk(root, topdown=True):
        dirs.sort()
        root_path: pathlib.Path = pathlib.Path(root_str)
        rel_root: str = root_path.relative_to(root).as_posix()
        if rel_root != ".":
            entries.append((root_path, f"{rel_root}/"))
        for name in sorted(files):
            arcname: str = name if rel_root == "." else f"{rel_root}/{name}"
            entries.append((root_path / name, arcname))

    for leading in (f"{META_INF_DIR}/", MANIFEST_PATH):
        for entry in entries:
            if entry[1] == leading:
                entries.remove(entry)
                head.append(entry)
                break
    return head + entries


def create_archive(
    *,
    staging_dir: pathlib.Path,
    archive_path: pathlib.Path,
    logger: logging.Logger | None = None,
) -> pathlib.Path:
    """Zip ``staging_dir`` into ``archive_path`` without compression.

    The archive is written next to the destination and moved into place, so an
    existing archive is replaced only once the new one is complete.

    :param staging_dir: Fully staged directory.
    :param archive_path: Destination archive path.
    :param logger: Optional logger for per-entry debug output.
    :returns: Absolute archive path.
    :raises ArchiveError: If the archive cannot be written.
    """

    archive_path = archive_path.absolute()
    tmp_path: pathlib.Path = archive_path.with_name(f"{archive_path.name}.tmp")

    try:
        archive_path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(tmp_path, "w", compression=zipfile.ZIP_STORED) as zf:
            for path, arcname in iter_archive_entries(staging_dir):
                zf.write(path, arcname=arcname)
                if logger is not None and logger.isEnabledFor(logging.DEBUG) is True:
                    logger.debug(f"bootpack: added {arcname}")
        tmp_path.replace(archive_path)
    except (OSError, ValueError, zipfile.LargeZipFile) as e:
        if tmp_path.is_file() is True:
            tmp_path.unlink()
        raise ArchiveError(f"Unable to create {archive_path}: {e}") from e

    return archive_path
