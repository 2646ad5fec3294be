"""Shared fixtures: a synthetic project with classes, libraries and a loader jar."""
import logging
import pathlib
import zipfile

import pytest


BOOT_VERSION = "3.5.4"
MAIN_CLASS = "com.example.Foo"
SPRING_BOOT = f"spring-boot-{BOOT_VERSION}.jar"
SPRING_BOOT_ACTUATOR = f"spring-boot-actuator-{BOOT_VERSION}.jar"
SPRING_BOOT_LOADER = f"spring-boot-loader-{BOOT_VERSION}.jar"
PROVIDED_LIB = "LatencyUtils-2.0.3.jar"

LOADER_ENTRIES = [
    "org/",
    "org/springframework/",
    "org/springframework/boot/",
    "org/springframework/boot/loader/",
    "org/springframework/boot/loader/jar/",
    "org/springframework/boot/loader/jar/NestedJarFile.class",
    "org/springframework/boot/loader/launch/",
    "org/springframework/boot/loader/launch/JarLauncher.class",
    "org/springframework/boot/loader/launch/WarLauncher.class",
]


def write_jar(path: pathlib.Path, entries: dict[str, bytes]) -> pathlib.Path:
    """Write a zip file; names ending with ``/`` become directory entries."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return path


def loader_jar_entries() -> dict[str, bytes]:
    entries: dict[str, bytes] = {
        "META-INF/": b"",
        "META-INF/MANIFEST.MF": b"Manifest-Version: 1.0\nImplementation-Title: Spring Boot Loader\n",
    }
    for name in LOADER_ENTRIES:
        entries[name] = b"" if name.endswith("/") else b"\xca\xfe\xba\xbe"
    return entries


@pytest.fixture
def make_jar():
    return write_jar


@pytest.fixture
def read_entries():
    def _read(path: pathlib.Path) -> list[str]:
        with zipfile.ZipFile(path) as zf:
            return zf.namelist()

    return _read


@pytest.fixture
def logger(caplog) -> logging.Logger:
    log = logging.getLogger("bootpack_tests")
    caplog.set_level(logging.DEBUG, logger="bootpack_tests")
    return log


@pytest.fixture
def work_dir(tmp_path: pathlib.Path) -> pathlib.Path:
    d = tmp_path / "work"
    d.mkdir()
    return d


@pytest.fixture
def project_dir(tmp_path: pathlib.Path) -> pathlib.Path:
    """A project in the conventional layout."""
    root = tmp_path / "project"

    classes = root / "build" / "main" / "com" / "example"
    classes.mkdir(parents=True)
    (classes / "Foo.class").write_bytes(b"\xca\xfe\xba\xbe foo")
    (classes / "Bar.class").write_bytes(b"\xca\xfe\xba\xbe bar")

    resources = root / "src" / "main" / "resources"
    (resources / "static").mkdir(parents=True)
    (resources / "application.properties").write_text("server.port=8080\n", encoding="utf-8")
    (resources / "static" / "index.html").write_text("<html></html>\n", encoding="utf-8")

    write_jar(root / "lib" / "compile" / SPRING_BOOT, {"org/springframework/boot/SpringApplication.class": b"x"})
    write_jar(root / "lib" / "runtime" / SPRING_BOOT_ACTUATOR, {"org/springframework/boot/actuate/A.class": b"x"})
    write_jar(root / "lib" / "standalone" / SPRING_BOOT_LOADER, loader_jar_entries())
    write_jar(root / "lib" / "provided" / PROVIDED_LIB, {"org/LatencyUtils/L.class": b"x"})
    return root


@pytest.fixture
def loader_jar(project_dir: pathlib.Path) -> pathlib.Path:
    return project_dir / "lib" / "standalone" / SPRING_BOOT_LOADER


@pytest.fixture(autouse=True)
def reset_bootpack_logger():
    """The CLI reconfigures the ``bootpack`` logger; put it back after each test."""
    yield
    log = logging.getLogger("bootpack")
    log.handlers.clear()
    log.propagate = True
    log.setLevel(logging.NOTSET)
