"""Readers for zone documents and test path files.

This module provides the ZoneReader class for loading zone documents
into domain shapes, and a helper for reading test path text files.
"""

from pathlib import Path

from polyprobe.domain import PathTestPoint, Shape
from polyprobe.exceptions import InputFileError
from polyprobe.io.path_format import parse_path_text
from polyprobe.io.zone_schema import (
    ZoneSchema,
    ZoneTypeDefinition,
    load_zone_schema,
    zone_schema_to_shapes,
)


def _read_text(path: Path) -> str:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputFileError(str(path), str(e)) from e


class ZoneReader:
    """Loads zone documents and exposes their shapes.

    Example:
        reader = ZoneReader(Path("zones.json"))
        reader.load()
        for shape in reader.shapes:
            print(shape.name)
    """

    def __init__(self, zone_path: Path) -> None:
        """Initialize the zone reader.

        Args:
            zone_path: Path to the zone JSON document
        """
        self._zone_path = zone_path
        self._schema: ZoneSchema | None = None
        self._shapes: list[Shape] | None = None

    def load(self) -> None:
        """Load and validate the zone document.

        Raises:
            FileNotFoundError: If the file does not exist
            InputFileError: If the file cannot be read
            ZoneSchemaError: If the document is invalid
        """
        text = _read_text(self._zone_path)
        self._schema = load_zone_schema(text)
        self._shapes = zone_schema_to_shapes(self._schema)

    @property
    def shapes(self) -> list[Shape]:
        """Return the loaded shapes.

        Raises:
            RuntimeError: If the document has not been loaded yet
        """
        if self._shapes is None:
            raise RuntimeError("Zones not loaded. Call load() first.")
        return list(self._shapes)

    @property
    def zone_types(self) -> list[ZoneTypeDefinition]:
        """Return the zone type definitions of the loaded document.

        Raises:
            RuntimeError: If the document has not been loaded yet
        """
        if self._schema is None:
            raise RuntimeError("Zones not loaded. Call load() first.")
        return list(self._schema.zone_types)

    @property
    def zone_count(self) -> int:
        return len(self.shapes)


def read_path_file(path: Path) -> list[PathTestPoint]:
    """Read a test path text file.

    Args:
        path: Path to the text file

    Returns:
        Parsed entries; malformed lines are kept as invalid entries

    Raises:
        FileNotFoundError: If the file does not exist
        InputFileError: If the file cannot be read
    """
    return parse_path_text(_read_text(path))
