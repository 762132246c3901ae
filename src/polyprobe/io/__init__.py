"""Annotation I/O layer for polyprobe.

This module handles the text and JSON formats an annotation editor
round-trips. It keeps file handling and parsing out of the geometry engine.

Key responsibilities:
- Parse and format test path text ("[IN] x, y" lines)
- Export classified paths as JSON or CSV reports
- Load and save zone documents
- Parse legacy SVG and Python coordinate strings

Key classes:
- ZoneReader: Load zone documents into shapes
- ZoneWriter: Save shapes as zone documents
"""

from polyprobe.io.path_format import (
    export_path_csv,
    export_path_json,
    format_path_text,
    parse_path_text,
)
from polyprobe.io.reader import ZoneReader, read_path_file
from polyprobe.io.writer import ZoneWriter
from polyprobe.io.zone_schema import (
    ZoneSchema,
    ZoneTypeDefinition,
    generate_svg_string,
    generate_zone_json,
    parse_python_string,
    parse_svg_string,
    parse_zone_json,
)

__all__ = [
    "ZoneReader",
    "ZoneSchema",
    "ZoneTypeDefinition",
    "ZoneWriter",
    "export_path_csv",
    "export_path_json",
    "format_path_text",
    "generate_svg_string",
    "generate_zone_json",
    "parse_path_text",
    "parse_python_string",
    "parse_svg_string",
    "parse_zone_json",
    "read_path_file",
]
