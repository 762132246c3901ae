"""Writer for zone documents.

This module provides the ZoneWriter class for saving shapes back to the
zone JSON format.
"""

from collections.abc import Sequence
from pathlib import Path

from polyprobe.domain import Shape
from polyprobe.io.zone_schema import ZoneTypeDefinition, generate_zone_json


class ZoneWriter:
    """Writes shapes as a zone document.

    Example:
        writer = ZoneWriter(shapes, Path("zones-simplified.json"))
        writer.save()
    """

    def __init__(
        self,
        shapes: Sequence[Shape],
        output_path: Path,
        zone_types: Sequence[ZoneTypeDefinition] | None = None,
    ) -> None:
        """Initialize the zone writer.

        Args:
            shapes: Shapes to write
            output_path: Path where the document will be saved
            zone_types: Zone type definitions to include
        """
        self._shapes = list(shapes)
        self._output_path = output_path
        self._zone_types = list(zone_types) if zone_types is not None else None

    def save(self) -> None:
        """Save the zone document to the output path.

        Raises:
            OSError: If file cannot be written
        """
        text = generate_zone_json(self._shapes, self._zone_types)
        self._output_path.write_text(text + "\n", encoding="utf-8")

    @staticmethod
    def get_simplified_path(input_path: Path) -> Path:
        """Generate output path for a simplified zone document.

        Converts: zones.json -> zones-simplified.json

        Args:
            input_path: Original zone document path

        Returns:
            Path with -simplified suffix before extension
        """
        return input_path.parent / f"{input_path.stem}-simplified{input_path.suffix}"
