"""Launcher class resolution.

Spring Boot moved its launchers from ``org.springframework.boot.loader`` to
``org.springframework.boot.loader.launch`` in 3.2. The loader jar that ends up
in the archive decides which name has to go into ``Main-Class``:

- ``spring-boot-loader-3.2.0.jar`` and later use the new package.
- Older loaders, or jars that do not follow the naming pattern, use the legacy one.
"""

from collections.abc import Iterable
import os
import pathlib
import re


JAR_LAUNCHER: str = "JarLauncher"
WAR_LAUNCHER: str = "WarLauncher"
PROPERTIES_LAUNCHER: str = "PropertiesLauncher"

LEGACY_LAUNCHER_PACKAGE: str = "org.springframework.boot.loader"
LAUNCHER_PACKAGE: str = "org.springframework.boot.loader.launch"

_LOADER_JAR_RE: re.Pattern[str] = re.compile(
    r"spring-boot-loader-(?P<maj>\d+)\.(?P<min>\d+)\.(?P<patch>\d+)\.jar"
)


def parse_loader_version(file_name: str) -> tuple[int, int, int] | None:
    """Extract the version embedded in a loader jar file name.

    :param file_name: Jar file name (e.g. ``spring-boot-loader-3.2.0.jar``).
    :returns: ``(major, minor, patch)`` or ``None`` if the name does not match.
    """

    m = _LOADER_JAR_RE.search(file_name)
    if m is None:
        return None
    return int(m.group("maj")), int(m.group("min")), int(m.group("patch"))


def uses_launch_package(version: tuple[int, int, int]) -> bool:
    """Check whether a loader version ships its launchers in the ``launch`` package.

    :param version: ``(major, minor, patch)``.
    :returns: ``True`` for 3.2 and later.
    """

    major, minor, _ = version
    return (major == 3 and minor >= 2) or major > 3


def launcher_class(loader_libs: Iterable[os.PathLike[str] | str], name: str) -> str:
    """Resolve the fully-qualified launcher class name.

    :param loader_libs: Loader library paths (only file names are inspected).
    :param name: Short launcher class name (e.g. ``JarLauncher``).
    :returns: Fully-qualified class name.
    """

    for lib in loader_libs:
        version: tuple[int, int, int] | None = parse_loader_version(pathlib.Path(lib).name)
        if version is not None and uses_launch_package(version) is True:
            return f"{LAUNCHER_PACKAGE}.{name}"

    return f"{LEGACY_LAUNCHER_PACKAGE}.{name}"
