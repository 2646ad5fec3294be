"""Archive manifest (``META-INF/MANIFEST.MF``) builder."""

from collections.abc import Iterator, Mapping
import os
import pathlib
import re


MANIFEST_PATH: str = "META-INF/MANIFEST.MF"

MANIFEST_VERSION: str = "Manifest-Version"
MAIN_CLASS: str = "Main-Class"
START_CLASS: str = "Start-Class"

_NAME_RE: re.Pattern[str] = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")
_MAX_NAME_LEN: int = 70


class ManifestError(ValueError):
    """Raised when a manifest attribute cannot be represented in the manifest."""


def validate_attribute(name: str, value: str) -> None:
    """Check that an attribute serializes to a single well-formed line.

    Values may contain ``:``, unlike names. Manifest parsers split a line on
    its first ``": "``, so a colon in a value (a URL, for example) reads back
    unchanged. Only line breaks and NUL are rejected in values.

    :param name: Attribute name.
    :param value: Attribute value.
    :raises ManifestError: If the name or value is not representable.
    """

    if len(name) > _MAX_NAME_LEN:
        raise ManifestError(
            f"Manifest attribute name must be {_MAX_NAME_LEN} characters or less: {name!r}"
        )
    if _NAME_RE.match(name) is None:
        raise ManifestError(f"Invalid manifest attribute name: {name!r}")
    for ch in ("\r", "\n", "\0"):
        if ch in value:
            raise ManifestError(
                f"Manifest attribute {name!r} has a value with a line break or NUL: {value!r}"
            )


class Manifest:
    """Ordered, unique-key manifest attributes.

    Setting an existing key replaces its value in place.
    """

    def __init__(self, attributes: Mapping[str, str] | None = None) -> None:
        self._attributes: dict[str, str] = {}
        if attributes is not None:
            self.update(attributes)

    def __setitem__(self, name: str, value: str) -> None:
        validate_attribute(name, value)
        self._attributes[name] = value

    def __getitem__(self, name: str) -> str:
        return self._attributes[name]

    def __contains__(self, name: object) -> bool:
        return name in self._attributes

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Manifest) is False:
            return NotImplemented
        return self._attributes == other._attributes

    def __repr__(self) -> str:
        return f"Manifest({self._attributes!r})"

    def get(self, name: str, default: str | None = None) -> str | None:
        return self._attributes.get(name, default)

    def items(self) -> list[tuple[str, str]]:
        return list(self._attributes.items())

    def update(self, attributes: Mapping[str, str]) -> None:
        for name, value in attributes.items():
            self[name] = value

    def to_text(self, line_separator: str = os.linesep) -> str:
        """Serialize to manifest text, one ``Name: Value`` line per attribute.

        :param line_separator: Line terminator (platform default).
        :returns: Manifest text.
        """

        return "".join(f"{name}: {value}{line_separator}" for name, value in self._attributes.items())

    def write(self, path: pathlib.Path) -> pathlib.Path:
        """Write the manifest to ``path`` (UTF-8, no newline translation).

        :param path: Destination file.
        :returns: The written path.
        """

        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(self.to_text())
        return path
