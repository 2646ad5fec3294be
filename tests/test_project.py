"""Unit tests for the project conventions."""
import pathlib

from bootpack.builder import BootJarOperation, BootWarOperation
from bootpack.project import Project, jar_config_from_project, war_config_from_project

from conftest import MAIN_CLASS, PROVIDED_LIB, SPRING_BOOT, SPRING_BOOT_ACTUATOR, SPRING_BOOT_LOADER


def _project(root: pathlib.Path, **kwargs) -> Project:
    return Project(work_directory=root, name="test_project", version="0.0.1", main_class=MAIN_CLASS, **kwargs)


def test_empty_project_defaults(tmp_path):
    project = _project(tmp_path)
    config = jar_config_from_project(project).build()

    assert config.main_class == MAIN_CLASS
    assert config.source_directories == (tmp_path / "build" / "main", tmp_path / "src" / "main" / "resources")
    assert config.manifest().items() == [
        ("Manifest-Version", "1.0"),
        ("Main-Class", "org.springframework.boot.loader.JarLauncher"),
        ("Start-Class", MAIN_CLASS),
    ]
    assert config.destination_directory == tmp_path / "build" / "dist"
    assert config.destination_file_name == "test_project-0.0.1-boot.jar"
    assert config.inf_libs == ()
    assert config.launcher_libs == ()


def test_archive_base_name_overrides_name(tmp_path):
    project = _project(tmp_path, archive_base_name="demo")
    assert war_config_from_project(project).build().destination_file_name == "demo-0.0.1-boot.war"


def test_jar_config_reads_lib_scopes(project_dir, make_jar):
    make_jar(project_dir / "lib" / "compile" / "spring-boot-3.5.4-sources.jar", {"x.java": b""})
    project = _project(project_dir)
    config = jar_config_from_project(project).build()

    assert [p.name for p in config.inf_libs] == [SPRING_BOOT, SPRING_BOOT_ACTUATOR]
    assert [p.name for p in config.launcher_libs] == [SPRING_BOOT_LOADER]
    assert config.launcher_class == "org.springframework.boot.loader.launch.JarLauncher"
    assert config.provided_libs == ()


def test_war_config_adds_dist_and_provided_jars(project_dir, make_jar):
    dist = project_dir / "build" / "dist"
    make_jar(dist / "test_project-0.0.1.jar", {"com/example/Foo.class": b"x"})
    make_jar(dist / "test_project-0.0.1-boot.jar", {"BOOT-INF/": b""})
    project = _project(project_dir)
    config = war_config_from_project(project).build()

    assert config.launcher_class == "org.springframework.boot.loader.launch.WarLauncher"
    assert [p.name for p in config.inf_libs] == [SPRING_BOOT, SPRING_BOOT_ACTUATOR, "test_project-0.0.1.jar"]
    assert [p.name for p in config.provided_libs] == [PROVIDED_LIB]


def test_builder_from_project_can_be_adjusted(project_dir):
    config = (
        jar_config_from_project(_project(project_dir))
        .manifest_attribute("Manifest-Test", "tsst")
        .build()
    )
    assert len(config.manifest()) == 4
    assert config.manifest().items()[3] == ("Manifest-Test", "tsst")


def test_project_jar_execute(project_dir, work_dir, logger, read_entries):
    project = _project(project_dir)
    result = BootJarOperation(jar_config_from_project(project).build(), logger=logger, work_dir=work_dir).execute()

    assert result.path == (project_dir / "build" / "dist" / "test_project-0.0.1-boot.jar").absolute()
    entries = read_entries(result.path)
    assert f"BOOT-INF/lib/{SPRING_BOOT}" in entries
    assert "BOOT-INF/classes/com/example/Foo.class" in entries
    assert "org/springframework/boot/loader/launch/JarLauncher.class" in entries


def test_project_war_execute(project_dir, work_dir, logger, read_entries):
    project = _project(project_dir)
    result = BootWarOperation(war_config_from_project(project).build(), logger=logger, work_dir=work_dir).execute()

    assert result.path.name == "test_project-0.0.1-boot.war"
    entries = read_entries(result.path)
    assert f"WEB-INF/lib-provided/{PROVIDED_LIB}" in entries
    assert f"WEB-INF/lib/{SPRING_BOOT_ACTUATOR}" in entries
