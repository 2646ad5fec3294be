"""Staging engine.

Populates a staging directory that mirrors the archive layout::

    <staging>/
        META-INF/MANIFEST.MF
        BOOT-INF/classes/...        (WEB-INF for wars)
        BOOT-INF/lib/*.jar
        WEB-INF/lib-provided/*.jar  (wars only)
        org/springframework/boot/loader/...

Required inputs are checked by :meth:`bootpack.config.BootConfig.validate`
before staging starts. Optional inputs (source directories and libraries)
that are missing at staging time are skipped with a warning.
"""

from collections.abc import Iterable
from dataclasses import dataclass
import logging
import os
import pathlib
import shutil
import zipfile

from bootpack.config import BootConfig
from bootpack.manifest import MANIFEST_PATH
from bootpack.util import mkdirs


CLASSES_DIR: str = "classes"
LIB_DIR: str = "lib"
LIB_PROVIDED_DIR: str = "lib-provided"
META_INF_DIR: str = "META-INF"


class LibraryCollisionError(FileExistsError):
    """Raised when two libraries would be copied to the same destination file."""


class LoaderExtractionError(OSError):
    """Raised when a loader archive cannot be extracted."""


@dataclass(frozen=True, slots=True)
class CopyStats:
    """Stats collected while copying files into the staging directory.

    :ivar files_copied: Number of files copied.
    :ivar bytes_copied: Total bytes copied.
    :ivar skipped: Configured inputs that did not exist and were skipped.
    """

    files_copied: int
    bytes_copied: int
    skipped: int = 0


class StagingEngine:
    """Copy and extract steps shared by the JAR and WAR operations.

    :param config: Assembly configuration.
    :param logger: Logger for progress output and warnings.
    :param silent: Suppress progress output (warnings are still emitted).
    """

    def __init__(self, config: BootConfig, *, logger: logging.Logger, silent: bool = False) -> None:
        self.config: BootConfig = config
        self.logger: logging.Logger = logger
        self.silent: bool = silent

    def _debug(self, message: str) -> None:
        if self.silent is False and self.logger.isEnabledFor(logging.DEBUG) is True:
            self.logger.debug(message)

    def create_inf_directory(self, staging_dir: pathlib.Path, name: str) -> pathlib.Path:
        """Create the ``BOOT-INF``/``WEB-INF`` directory.

        :param staging_dir: Staging root.
        :param name: INF directory name.
        :returns: The INF directory.
        """

        return mkdirs(staging_dir / name)

    def create_classes_directory(self, inf_dir: pathlib.Path) -> pathlib.Path:
        return mkdirs(inf_dir / CLASSES_DIR)

    def create_lib_directory(self, inf_dir: pathlib.Path, name: str = LIB_DIR) -> pathlib.Path:
        return mkdirs(inf_dir / name)

    def copy_source_trees(self, classes_dir: pathlib.Path) -> CopyStats:
        """Merge every configured source directory into ``classes_dir``.

        When two source directories contain the same relative path, the later
        one wins and a warning is logged. Symlinked directories are followed;
        a link back to one of its own parent directories is skipped with a
        warning.

        :param classes_dir: Destination classes directory.
        :returns: Copy statistics.
        """

        mkdirs(classes_dir)
        origins: dict[str, pathlib.Path] = {}
        files_copied: int = 0
        bytes_copied: int = 0
        skipped: int = 0

        for src in self.config.source_directories:
            if src.is_dir() is False:
                self.logger.warning(f"bootpack: directory not found: {src.absolute()}")
                skipped += 1
                continue

            self._debug(f"bootpack: copying classes from {src}")
            top: str = os.fspath(src)
            top_st: os.stat_result = os.stat(top)
            ancestors: dict[str, frozenset[tuple[int, int]]] = {top: frozenset({(top_st.st_dev, top_st.st_ino)})}
            for root_str, dirs, files in os.walk(top, followlinks=True):
                # symlinked directories are followed unless they point back up the tree
                chain: frozenset[tuple[int, int]] = ancestors.pop(root_str)
                for d in sorted(dirs):
                    child: str = os.path.join(root_str, d)
                    child_st: os.stat_result = os.stat(child)
                    key: tuple[int, int] = (child_st.st_dev, child_st.st_ino)
                    if key in chain:
                        self.logger.warning(f"bootpack: skipping directory cycle: {os.path.abspath(child)}")
                        dirs.remove(d)
                    else:
                        ancestors[child] = chain | {key}
                dirs.sort()

                root_path: pathlib.Path = pathlib.Path(root_str)
                rel_root: pathlib.Path = root_path.relative_to(src)
                out_dir: pathlib.Path = classes_dir / rel_root
                out_dir.mkdir(parents=True, exist_ok=True)

                for name in sorted(files):
                    src_path: pathlib.Path = root_path / name
                    dest: pathlib.Path = out_dir / name
                    rel: str = (rel_root / name).as_posix()
                    previous: pathlib.Path | None = origins.get(rel)
                    if previous is not None:
                        self.logger.warning(
                            f"bootpack: {rel} from {src} replaces the copy from {previous}"
                        )
                        dest.unlink()

                    shutil.copy2(src_path, dest)
                    origins[rel] = src
                    files_copied += 1
                    bytes_copied += src_path.stat().st_size

        return CopyStats(files_copied=files_copied, bytes_copied=bytes_copied, skipped=skipped)

    def copy_libraries(self, libs: Iterable[pathlib.Path], lib_dir: pathlib.Path) -> CopyStats:
        """Copy library files into ``lib_dir`` under their base names.

        :param libs: Library files.
        :param lib_dir: Destination directory.
        :returns: Copy statistics.
        :raises LibraryCollisionError: If a destination file already exists.
        """

        mkdirs(lib_dir)
        files_copied: int = 0
        bytes_copied: int = 0
        skipped: int = 0

        for lib in libs:
            if lib.is_file() is False:
                self.logger.warning(f"bootpack: file not found: {lib.absolute()}")
                skipped += 1
                continue

            dest: pathlib.Path = lib_dir / lib.name
            if dest.exists() is True:
                raise LibraryCollisionError(
                    f"Library {lib} collides with an existing file: {dest.relative_to(lib_dir.parent.parent)}"
                )

            self._debug(f"bootpack: copying {lib} -> {lib_dir.name}/{lib.name}")
            shutil.copy2(lib, dest)
            files_copied += 1
            bytes_copied += lib.stat().st_size

        return CopyStats(files_copied=files_copied, bytes_copied=bytes_copied, skipped=skipped)

    def extract_loader(self, staging_dir: pathlib.Path) -> int:
        """Unpack the loader libraries into the staging root.

        Any ``META-INF`` directory the loaders carry is removed so the manifest
        written afterwards is the only one in the archive.

        :param staging_dir: Staging root.
        :returns: Number of loader entries extracted.
        :raises LoaderExtractionError: If a loader archive is corrupt or unsafe.
        """

        root: pathlib.Path = staging_dir.resolve()
        meta_inf_dir: pathlib.Path = staging_dir / META_INF_DIR
        extracted: int = 0

        for jar in self.config.launcher_libs:
            if jar.is_file() is False:
                self.logger.warning(f"bootpack: file not found: {jar.absolute()}")
                continue

            self._debug(f"bootpack: extracting loader {jar}")
            try:
                with zipfile.ZipFile(jar, "r") as zf:
                    for info in zf.infolist():
                        target: pathlib.Path = (root / info.filename).resolve()
                        if target.is_relative_to(root) is False:
                            raise LoaderExtractionError(
                                f"Loader entry escapes the staging directory: {info.filename} ({jar})"
                            )
                    zf.extractall(staging_dir)
                    extracted += len(zf.infolist())
            except zipfile.BadZipFile as e:
                raise LoaderExtractionError(f"Bad loader archive: {jar}") from e

            if meta_inf_dir.is_dir() is True:
                shutil.rmtree(meta_inf_dir)

        return extracted

    def write_manifest(self, staging_dir: pathlib.Path) -> pathlib.Path:
        """Write ``META-INF/MANIFEST.MF`` into the staging root.

        :param staging_dir: Staging root.
        :returns: Manifest path.
        """

        path: pathlib.Path = self.config.manifest().write(staging_dir / MANIFEST_PATH)
        self._debug(f"bootpack: wrote {MANIFEST_PATH}")
        return path
