"""Command line interface for bootpack."""

import argparse
import logging
import pathlib
import sys

from bootpack.builder import ArchiveResult, BootJarOperation, BootWarOperation
from bootpack.config import BootConfig, BootConfigBuilder, ConfigurationError
from bootpack.launcher import JAR_LAUNCHER, WAR_LAUNCHER, launcher_class
from bootpack.manifest import ManifestError
from bootpack.project import Project, jar_config_from_project, war_config_from_project


def _configure_logging(*, verbose: int, quiet: int) -> logging.Logger:
    """Configure the bootpack logger.

    :param verbose: Verbosity count (0+).
    :param quiet: Quietness count (0+).
    :returns: Configured logger.
    """

    level: int = logging.INFO
    if quiet >= 2:
        level = logging.ERROR
    elif quiet >= 1:
        level = logging.WARNING
    elif verbose >= 1:
        level = logging.DEBUG

    logger: logging.Logger = logging.getLogger("bootpack")
    logger.setLevel(level)
    logger.propagate = False

    handler: logging.Handler = logging.StreamHandler(stream=sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger.handlers.clear()
    logger.addHandler(handler)
    return logger


def _parse_manifest_attribute(text: str) -> tuple[str, str]:
    """Parse a ``NAME=VALUE`` manifest attribute argument.

    :param text: Raw argument.
    :returns: ``(name, value)``.
    :raises argparse.ArgumentTypeError: If there is no ``=``.
    """

    name, sep, value = text.partition("=")
    if sep == "" or name == "":
        raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got {text!r}")
    return name, value


def _add_common_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--project-dir",
        type=pathlib.Path,
        default=pathlib.Path("."),
        help="Project root containing build/, src/ and lib/ (default: current directory).",
    )
    p.add_argument(
        "--name",
        type=str,
        default=None,
        help="Project name (defaults to the project directory name).",
    )
    p.add_argument(
        "--version",
        type=str,
        required=True,
        help="Project version, used in the archive file name.",
    )
    p.add_argument(
        "--archive-base-name",
        type=str,
        default=None,
        help="Archive base name (defaults to the project name).",
    )
    p.add_argument(
        "--main-class",
        type=str,
        default=None,
        help="Fully-qualified application main class (Start-Class).",
    )
    p.add_argument(
        "--launcher-class",
        type=str,
        default=None,
        help="Fully-qualified loader launcher class (Main-Class). Resolved from the loader jars if omitted.",
    )
    p.add_argument(
        "--launcher-lib",
        type=pathlib.Path,
        action="append",
        default=[],
        help="Loader jar to extract into the archive root (repeatable).",
    )
    p.add_argument(
        "--lib",
        type=pathlib.Path,
        action="append",
        default=[],
        help="Extra library jar for the INF lib directory (repeatable).",
    )
    p.add_argument(
        "--source-dir",
        type=pathlib.Path,
        action="append",
        default=[],
        help="Extra directory merged into the INF classes directory (repeatable).",
    )
    p.add_argument(
        "--manifest-attribute",
        type=_parse_manifest_attribute,
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Extra manifest attribute (repeatable).",
    )
    p.add_argument(
        "--destination-dir",
        type=pathlib.Path,
        default=None,
        help="Directory for the archive (default: build/dist).",
    )
    p.add_argument(
        "--destination-file",
        type=str,
        default=None,
        help="Archive file name (default: <base>-<version>-boot.<jar|war>).",
    )
    p.add_argument(
        "--work-dir",
        type=pathlib.Path,
        default=None,
        help="Parent directory for the temporary staging directory.",
    )
    p.add_argument(
        "--silent",
        action="store_true",
        help="Do not report progress or the created archive.",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Enable verbose logging. Pass multiple times for more detail.",
    )
    p.add_argument(
        "-q",
        "--quiet",
        action="count",
        default=0,
        help="Reduce logging. Pass multiple times to suppress more output.",
    )


def _build_config(ns: argparse.Namespace) -> BootConfig:
    """Layer command line flags over the project conventions.

    :param ns: Parsed arguments.
    :returns: Configuration for the requested archive.
    """

    project_dir: pathlib.Path = ns.project_dir
    project: Project = Project(
        work_directory=project_dir,
        name=ns.name if ns.name is not None else project_dir.resolve().name,
        version=ns.version,
        main_class=ns.main_class,
        archive_base_name=ns.archive_base_name,
    )

    is_war: bool = ns.command == "war"
    builder: BootConfigBuilder
    if is_war is True:
        builder = war_config_from_project(project)
        builder.provided_libs(*ns.provided_lib)
    else:
        builder = jar_config_from_project(project)

    builder.launcher_libs(*ns.launcher_lib)
    builder.inf_libs(*ns.lib)
    builder.source_directories(*ns.source_dir)
    for name, value in ns.manifest_attribute:
        builder.manifest_attribute(name, value)

    if ns.launcher_class is not None:
        builder.launcher_class(ns.launcher_class)
    elif len(ns.launcher_lib) > 0:
        short_name: str = WAR_LAUNCHER if is_war is True else JAR_LAUNCHER
        builder.launcher_class(
            launcher_class([*project.standalone_classpath_jars(), *ns.launcher_lib], short_name)
        )

    if ns.destination_dir is not None:
        builder.destination_directory(ns.destination_dir)
    if ns.destination_file is not None:
        builder.destination_file_name(ns.destination_file)

    return builder.build()


def main(argv: list[str] | None = None) -> int:
    """Run the bootpack CLI.

    :param argv: Optional argv list (excluding program name).
    :returns: Exit code.
    """

    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="bootpack",
        description="Assemble an executable Spring Boot JAR or WAR.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_jar = subparsers.add_parser(
        "jar",
        help="Create an executable JAR (BOOT-INF layout).",
    )
    _add_common_arguments(p_jar)

    p_war = subparsers.add_parser(
        "war",
        help="Create an executable WAR (WEB-INF layout).",
    )
    _add_common_arguments(p_war)
    p_war.add_argument(
        "--provided-lib",
        type=pathlib.Path,
        action="append",
        default=[],
        help="Extra provided library for WEB-INF/lib-provided (repeatable).",
    )

    ns = parser.parse_args(argv)
    if ns.command in ("jar", "war"):
        logger: logging.Logger = _configure_logging(verbose=ns.verbose, quiet=ns.quiet)
        try:
            config: BootConfig = _build_config(ns)
            result: ArchiveResult
            if ns.command == "war":
                result = BootWarOperation(
                    config, logger=logger, silent=ns.silent, work_dir=ns.work_dir
                ).execute()
            else:
                result = BootJarOperation(
                    config, logger=logger, silent=ns.silent, work_dir=ns.work_dir
                ).execute()
        except (ConfigurationError, ManifestError, OSError) as e:
            logger.error(f"bootpack: error: {e}")
            return 1

        if ns.silent is False:
            print(result.path)
        return 0

    raise AssertionError(f"Unhandled command: {ns.command}")
