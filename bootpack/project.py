"""Project layout conventions.

A :class:`Project` describes a conventional build layout::

    <work_directory>/
        build/main/              compiled classes
        build/dist/              distribution output (archives land here)
        src/main/resources/      resources
        lib/compile/*.jar        compile scope
        lib/runtime/*.jar        runtime scope
        lib/standalone/*.jar     loader (spring-boot-loader-X.Y.Z.jar)
        lib/provided/*.jar       provided scope

:func:`jar_config_from_project` and :func:`war_config_from_project` turn it
into a :class:`~bootpack.config.BootConfigBuilder` that callers can adjust
before building.
"""

from dataclasses import dataclass
import pathlib

from bootpack.config import BootConfigBuilder
from bootpack.launcher import JAR_LAUNCHER, WAR_LAUNCHER, launcher_class


_IGNORED_JAR_SUFFIXES: tuple[str, ...] = ("-sources.jar", "-javadoc.jar")
_BOOT_ARCHIVE_SUFFIXES: tuple[str, ...] = ("-boot.jar", "-boot.war")


@dataclass(frozen=True, slots=True)
class Project:
    """A project following the conventional build layout.

    :ivar work_directory: Project root.
    :ivar name: Project name.
    :ivar version: Project version (e.g. ``0.0.1``).
    :ivar main_class: Application main class.
    :ivar archive_base_name: Archive base name; defaults to ``name``.
    """

    work_directory: pathlib.Path
    name: str
    version: str
    main_class: str | None = None
    archive_base_name: str | None = None

    @property
    def build_main_directory(self) -> pathlib.Path:
        return self.work_directory / "build" / "main"

    @property
    def build_dist_directory(self) -> pathlib.Path:
        return self.work_directory / "build" / "dist"

    @property
    def src_main_resources_directory(self) -> pathlib.Path:
        return self.work_directory / "src" / "main" / "resources"

    @property
    def lib_directory(self) -> pathlib.Path:
        return self.work_directory / "lib"

    def archive_file_name(self, extension: str) -> str:
        """Name of the boot archive, e.g. ``demo-0.1.0-boot.jar``.

        :param extension: ``jar`` or ``war``.
        """

        base: str = self.archive_base_name if self.archive_base_name is not None else self.name
        return f"{base}-{self.version}-boot.{extension}"

    def classpath_jars(self, scope: str) -> list[pathlib.Path]:
        """List the jars of a dependency scope folder.

        Source and javadoc jars are left out.

        :param scope: Scope folder under ``lib/`` (``compile``, ``runtime``, ...).
        :returns: Sorted jar paths; empty if the folder does not exist.
        """

        scope_dir: pathlib.Path = self.lib_directory / scope
        if scope_dir.is_dir() is False:
            return []
        return [
            p
            for p in sorted(scope_dir.glob("*.jar"))
            if p.is_file() is True and p.name.endswith(_IGNORED_JAR_SUFFIXES) is False
        ]

    def compile_classpath_jars(self) -> list[pathlib.Path]:
        return self.classpath_jars("compile")

    def runtime_classpath_jars(self) -> list[pathlib.Path]:
        return self.classpath_jars("runtime")

    def standalone_classpath_jars(self) -> list[pathlib.Path]:
        return self.classpath_jars("standalone")

    def provided_classpath_jars(self) -> list[pathlib.Path]:
        return self.classpath_jars("provided")

    def dist_jars(self) -> list[pathlib.Path]:
        """List the jars already in the dist directory, except boot archives."""

        dist: pathlib.Path = self.build_dist_directory
        if dist.is_dir() is False:
            return []
        return [
            p
            for p in sorted(dist.glob("*.jar"))
            if p.is_file() is True and p.name.endswith(_BOOT_ARCHIVE_SUFFIXES) is False
        ]


def _base_builder(project: Project, *, launcher_name: str, extension: str) -> BootConfigBuilder:
    standalone: list[pathlib.Path] = project.standalone_classpath_jars()
    builder: BootConfigBuilder = (
        BootConfigBuilder()
        .launcher_class(launcher_class(standalone, launcher_name))
        .launcher_libs(*standalone)
        .inf_libs(*project.compile_classpath_jars())
        .inf_libs(*project.runtime_classpath_jars())
        .source_directories(project.build_main_directory, project.src_main_resources_directory)
        .destination_directory(project.build_dist_directory)
        .destination_file_name(project.archive_file_name(extension))
    )
    if project.main_class is not None:
        builder.main_class(project.main_class)
    return builder


def jar_config_from_project(project: Project) -> BootConfigBuilder:
    """Configure an executable JAR build from a project.

    :param project: Project.
    :returns: Builder pre-populated from the project conventions.
    """

    return _base_builder(project, launcher_name=JAR_LAUNCHER, extension="jar")


def war_config_from_project(project: Project) -> BootConfigBuilder:
    """Configure an executable WAR build from a project.

    The project's own distribution jars go into ``WEB-INF/lib`` and the
    provided scope into ``WEB-INF/lib-provided``.

    :param project: Project.
    :returns: Builder pre-populated from the project conventions.
    """

    return (
        _base_builder(project, launcher_name=WAR_LAUNCHER, extension="war")
        .inf_libs(*project.dist_jars())
        .provided_libs(*project.provided_classpath_jars())
    )
