"""Assembly configuration.

A :class:`BootConfigBuilder` collects inputs fluently; :meth:`BootConfigBuilder.build`
returns an immutable :class:`BootConfig` that the JAR/WAR operations consume.
"""

from collections.abc import Mapping
from dataclasses import dataclass
import os
import pathlib

from bootpack.manifest import MAIN_CLASS, MANIFEST_VERSION, START_CLASS, Manifest, validate_attribute


class ConfigurationError(ValueError):
    """Raised when required assembly inputs are missing or invalid."""


@dataclass(frozen=True, slots=True)
class BootConfig:
    """Inputs for a single archive build.

    :ivar main_class: Application entry point (``Start-Class``).
    :ivar launcher_class: Loader launcher class (``Main-Class``).
    :ivar launcher_libs: Loader archives extracted into the archive root.
    :ivar inf_libs: Libraries copied into ``BOOT-INF/lib`` or ``WEB-INF/lib``.
    :ivar provided_libs: Libraries copied into ``WEB-INF/lib-provided`` (WAR only).
    :ivar source_directories: Trees merged into the ``classes`` directory.
    :ivar manifest_attributes: Extra manifest attributes, unique names.
    :ivar destination_directory: Directory receiving the archive.
    :ivar destination_file_name: Archive file name.
    """

    main_class: str | None = None
    launcher_class: str | None = None
    launcher_libs: tuple[pathlib.Path, ...] = ()
    inf_libs: tuple[pathlib.Path, ...] = ()
    provided_libs: tuple[pathlib.Path, ...] = ()
    source_directories: tuple[pathlib.Path, ...] = ()
    manifest_attributes: tuple[tuple[str, str], ...] = ()
    destination_directory: pathlib.Path | None = None
    destination_file_name: str | None = None

    @property
    def archive_path(self) -> pathlib.Path:
        """Full path of the archive to create.

        :raises ConfigurationError: If the destination is not configured.
        """

        if self.destination_directory is None:
            raise ConfigurationError("Destination directory required.")
        if not self.destination_file_name:
            raise ConfigurationError("Destination file name required.")
        return self.destination_directory / self.destination_file_name

    def manifest(self) -> Manifest:
        """Build the archive manifest.

        The standard attributes come first; extras with the same name replace them.

        :returns: Manifest for this configuration.
        """

        manifest: Manifest = Manifest()
        manifest[MANIFEST_VERSION] = "1.0"
        manifest[MAIN_CLASS] = self.launcher_class or ""
        manifest[START_CLASS] = self.main_class or ""
        for name, value in self.manifest_attributes:
            manifest[name] = value
        return manifest

    def validate(self) -> None:
        """Verify that everything required to assemble an archive is present.

        Performs no filesystem changes.

        :raises ConfigurationError: On the first missing requirement.
        """

        if not self.main_class:
            raise ConfigurationError("Project main class required.")
        if not self.launcher_class:
            raise ConfigurationError("Spring Boot loader launcher class required.")
        if len(self.launcher_libs) == 0:
            raise ConfigurationError("Spring Boot loader launcher libraries required.")
        if self.destination_directory is None:
            raise ConfigurationError("Destination directory required.")
        if not self.destination_file_name:
            raise ConfigurationError("Destination file name required.")


def _to_paths(paths: tuple[os.PathLike[str] | str, ...]) -> list[pathlib.Path]:
    return [pathlib.Path(p) for p in paths]


class BootConfigBuilder:
    """Fluent builder for :class:`BootConfig`.

    Every setter returns the builder, so calls can be chained::

        config = (
            BootConfigBuilder()
            .main_class("com.example.Application")
            .launcher_class("org.springframework.boot.loader.launch.JarLauncher")
            .launcher_libs("lib/standalone/spring-boot-loader-3.5.4.jar")
            .destination_directory("build/dist")
            .destination_file_name("app-1.0.0-boot.jar")
            .build()
        )
    """

    def __init__(self) -> None:
        self._main_class: str | None = None
        self._launcher_class: str | None = None
        self._launcher_libs: list[pathlib.Path] = []
        self._inf_libs: list[pathlib.Path] = []
        self._provided_libs: list[pathlib.Path] = []
        self._source_directories: list[pathlib.Path] = []
        self._manifest_attributes: dict[str, str] = {}
        self._destination_directory: pathlib.Path | None = None
        self._destination_file_name: str | None = None

    def main_class(self, class_name: str) -> "BootConfigBuilder":
        self._main_class = class_name
        return self

    def launcher_class(self, class_name: str) -> "BootConfigBuilder":
        """Set the fully-qualified launcher class.

        For example ``org.springframework.boot.loader.launch.JarLauncher`` or
        ``org.springframework.boot.loader.WarLauncher``.
        """

        self._launcher_class = class_name
        return self

    def launcher_libs(self, *paths: os.PathLike[str] | str) -> "BootConfigBuilder":
        """Add loader libraries; each one must already exist.

        :raises ConfigurationError: If a library does not exist.
        """

        for p in _to_paths(paths):
            if p.exists() is False:
                raise ConfigurationError(f"Spring Boot loader launcher library not found: {p}")
            self._launcher_libs.append(p)
        return self

    def inf_libs(self, *paths: os.PathLike[str] | str) -> "BootConfigBuilder":
        self._inf_libs.extend(_to_paths(paths))
        return self

    def provided_libs(self, *paths: os.PathLike[str] | str) -> "BootConfigBuilder":
        self._provided_libs.extend(_to_paths(paths))
        return self

    def source_directories(self, *paths: os.PathLike[str] | str) -> "BootConfigBuilder":
        self._source_directories.extend(_to_paths(paths))
        return self

    def manifest_attribute(self, name: str, value: str) -> "BootConfigBuilder":
        """Add (or replace) a manifest attribute.

        :raises ManifestError: If the attribute cannot be written to a manifest.
        """

        validate_attribute(name, value)
        self._manifest_attributes[name] = value
        return self

    def manifest_attributes(self, attributes: Mapping[str, str]) -> "BootConfigBuilder":
        for name, value in attributes.items():
            self.manifest_attribute(name, value)
        return self

    def destination_directory(self, path: os.PathLike[str] | str) -> "BootConfigBuilder":
        self._destination_directory = pathlib.Path(path)
        return self

    def destination_file_name(self, name: str) -> "BootConfigBuilder":
        self._destination_file_name = name
        return self

    def build(self) -> BootConfig:
        """Snapshot the collected inputs.

        :returns: An immutable configuration.
        """

        return BootConfig(
            main_class=self._main_class,
            launcher_class=self._launcher_class,
            launcher_libs=tuple(self._launcher_libs),
            inf_libs=tuple(self._inf_libs),
            provided_libs=tuple(self._provided_libs),
            source_directories=tuple(self._source_directories),
            manifest_attributes=tuple(self._manifest_attributes.items()),
            destination_directory=self._destination_directory,
            destination_file_name=self._destination_file_name,
        )
