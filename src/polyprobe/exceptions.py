"""Exception hierarchy for Polyprobe.

The geometry engine itself never raises for numeric input; these errors
belong to the format readers and the CLI.
"""


class PolyprobeError(Exception):
    """Base exception for all Polyprobe errors."""

    pass


class FormatError(PolyprobeError):
    """Errors related to reading or writing annotation formats."""

    pass


class ZoneSchemaError(FormatError):
    """Invalid zone schema document."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid zone schema: {reason}")


class InputFileError(PolyprobeError):
    """Error reading an input file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read '{path}': {reason}")
