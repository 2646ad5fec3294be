"""Executable archive builder.

This module assembles Spring Boot style "fat" archives:

- It stages the application classes and resources into ``<INF>/classes``.
- It copies the dependency jars into ``<INF>/lib`` (and, for wars, the
  provided jars into ``WEB-INF/lib-provided``).
- It extracts the loader classes into the archive root and writes the manifest.
- It packs the staging directory into a store-only zip and removes it.

``<INF>`` is ``BOOT-INF`` for executable jars and ``WEB-INF`` for wars.
"""

from dataclasses import dataclass
import logging
import pathlib
import tempfile
import time

from bootpack.archive import create_archive
from bootpack.config import BootConfig
from bootpack.staging import LIB_DIR, LIB_PROVIDED_DIR, CopyStats, StagingEngine
from bootpack.util import format_file_size


@dataclass(frozen=True, slots=True)
class ArchiveLayout:
    """Layout conventions for one archive kind.

    :ivar kind: Display name (``JAR`` or ``WAR``).
    :ivar inf_dir: Top-level directory holding classes and libraries.
    :ivar provided_lib_dir: Directory (under ``inf_dir``) for provided libraries, if any.
    :ivar staging_prefix: Prefix of the temporary staging directory.
    """

    kind: str
    inf_dir: str
    provided_lib_dir: str | None
    staging_prefix: str


JAR_LAYOUT: ArchiveLayout = ArchiveLayout(
    kind="JAR",
    inf_dir="BOOT-INF",
    provided_lib_dir=None,
    staging_prefix="bootjar_",
)

WAR_LAYOUT: ArchiveLayout = ArchiveLayout(
    kind="WAR",
    inf_dir="WEB-INF",
    provided_lib_dir=LIB_PROVIDED_DIR,
    staging_prefix="bootwar_",
)


@dataclass(frozen=True, slots=True)
class ArchiveResult:
    """A produced archive.

    :ivar path: Absolute archive path.
    :ivar size_bytes: Archive size in bytes.
    """

    path: pathlib.Path
    size_bytes: int

    @property
    def size(self) -> str:
        return format_file_size(self.size_bytes)


def _log_copy(logger: logging.Logger, what: str, stats: CopyStats) -> None:
    logger.info(
        f"bootpack: staged {what} ({stats.files_copied} files, {format_file_size(stats.bytes_copied)})"
    )


def assemble(
    config: BootConfig,
    *,
    layout: ArchiveLayout,
    logger: logging.Logger | None = None,
    silent: bool = False,
    work_dir: pathlib.Path | None = None,
) -> ArchiveResult:
    """Assemble an executable archive.

    :param config: Assembly configuration.
    :param layout: Archive layout (:data:`JAR_LAYOUT` or :data:`WAR_LAYOUT`).
    :param logger: Optional logger; defaults to the ``bootpack`` logger.
    :param silent: Suppress progress output (warnings are still emitted).
    :param work_dir: Optional parent directory for the temporary staging directory.
    :returns: The produced archive.
    :raises ConfigurationError: If required inputs are missing (nothing is written).
    :raises OSError: If staging or archiving fails; the staging directory is removed.
    """

    if logger is None:
        logger = logging.getLogger("bootpack")

    config.validate()
    archive_path: pathlib.Path = config.archive_path
    verbose: bool = silent is False

    t_total0: float = time.perf_counter()
    engine: StagingEngine = StagingEngine(config, logger=logger, silent=silent)

    with tempfile.TemporaryDirectory(prefix=layout.staging_prefix, dir=work_dir) as td:
        staging_dir: pathlib.Path = pathlib.Path(td)
        if verbose is True and logger.isEnabledFor(logging.DEBUG) is True:
            logger.debug(
                f"bootpack: staging={staging_dir} destination={config.destination_directory} "
                f"archive={config.destination_file_name} launcher={config.launcher_class}"
            )

        inf_dir: pathlib.Path = engine.create_inf_directory(staging_dir, layout.inf_dir)
        classes_dir: pathlib.Path = engine.create_classes_directory(inf_dir)
        classes_stats: CopyStats = engine.copy_source_trees(classes_dir)
        lib_stats: CopyStats = engine.copy_libraries(
            config.inf_libs,
            engine.create_lib_directory(inf_dir, LIB_DIR),
        )
        if verbose is True:
            _log_copy(logger, f"{layout.inf_dir}/classes", classes_stats)
            _log_copy(logger, f"{layout.inf_dir}/{LIB_DIR}", lib_stats)

        if layout.provided_lib_dir is not None:
            provided_stats: CopyStats = engine.copy_libraries(
                config.provided_libs,
                engine.create_lib_directory(inf_dir, layout.provided_lib_dir),
            )
            if verbose is True:
                _log_copy(logger, f"{layout.inf_dir}/{layout.provided_lib_dir}", provided_stats)

        extracted: int = engine.extract_loader(staging_dir)
        if verbose is True:
            logger.info(f"bootpack: extracted loader ({extracted} entries)")

        engine.write_manifest(staging_dir)

        t_zip0: float = time.perf_counter()
        path: pathlib.Path = create_archive(
            staging_dir=staging_dir,
            archive_path=archive_path,
            logger=logger if verbose is True else None,
        )
        t_zip1: float = time.perf_counter()
        if verbose is True:
            logger.info(f"bootpack: archived in {t_zip1 - t_zip0:.2f}s")

    result: ArchiveResult = ArchiveResult(path=path, size_bytes=path.stat().st_size)
    t_total1: float = time.perf_counter()
    if verbose is True:
        logger.info(
            f"bootpack: the executable {layout.kind} ({config.destination_file_name}) was created in: "
            f"{config.destination_directory} ({result.size}) in {t_total1 - t_total0:.2f}s"
        )
    return result


class _BootOperation:
    """Runs :func:`assemble` with the subclass's :attr:`layout`.

    :param config: Assembly configuration.
    :param logger: Optional logger; defaults to the ``bootpack`` logger.
    :param silent: Suppress progress output.
    :param work_dir: Optional parent directory for the staging directory.
    """

    layout: ArchiveLayout

    def __init__(
        self,
        config: BootConfig,
        *,
        logger: logging.Logger | None = None,
        silent: bool = False,
        work_dir: pathlib.Path | None = None,
    ) -> None:
        self.config: BootConfig = config
        self.logger: logging.Logger = logger if logger is not None else logging.getLogger("bootpack")
        self.silent: bool = silent
        self.work_dir: pathlib.Path | None = work_dir

    def execute(self) -> ArchiveResult:
        return assemble(
            self.config,
            layout=self.layout,
            logger=self.logger,
            silent=self.silent,
            work_dir=self.work_dir,
        )


class BootJarOperation(_BootOperation):
    """Creates an executable Spring Boot JAR."""

    layout: ArchiveLayout = JAR_LAYOUT


class BootWarOperation(_BootOperation):
    """Creates an executable Spring Boot WAR.

    Same pipeline as :class:`BootJarOperation` with the ``WEB-INF`` layout and
    the extra ``WEB-INF/lib-provided`` directory.
    """

    layout: ArchiveLayout = WAR_LAYOUT
