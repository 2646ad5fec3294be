"""Unit tests for the manifest builder."""
import pathlib

import pytest

from bootpack.manifest import Manifest, ManifestError


def test_to_text_one_line_per_attribute():
    m = Manifest({"Manifest-Version": "1.0", "Main-Class": "a.B"})
    m["Start-Class"] = "c.D"
    assert m.to_text("\n") == "Manifest-Version: 1.0\nMain-Class: a.B\nStart-Class: c.D\n"


def test_overwrite_keeps_keys_unique():
    m = Manifest()
    m["Main-Class"] = "first"
    m["Other"] = "x"
    m["Main-Class"] = "second"
    assert len(m) == 2
    assert m["Main-Class"] == "second"
    assert m.items() == [("Main-Class", "second"), ("Other", "x")]


def test_keys_are_case_sensitive():
    m = Manifest({"Main-Class": "a", "main-class": "b"})
    assert len(m) == 2


def test_colon_allowed_in_value():
    m = Manifest({"Implementation-URL": "https://example.com:8443/app"})
    assert m.to_text("\n") == "Implementation-URL: https://example.com:8443/app\n"


@pytest.mark.parametrize("name", ["Bad:Name", "Bad Name", "", "-Leading", "x" * 71])
def test_invalid_names_rejected(name):
    with pytest.raises(ManifestError):
        Manifest()[name] = "value"


@pytest.mark.parametrize("value", ["line\nbreak", "carriage\rreturn", "nul\0"])
def test_values_with_line_breaks_rejected(value):
    with pytest.raises(ManifestError):
        Manifest({"Name": value})


def test_write_creates_meta_inf(tmp_path: pathlib.Path):
    path = tmp_path / "META-INF" / "MANIFEST.MF"
    Manifest({"Manifest-Version": "1.0"}).write(path)
    assert path.read_bytes().decode("utf-8").splitlines() == ["Manifest-Version: 1.0"]
