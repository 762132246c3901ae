"""Configuration settings for Polyprobe."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from polyprobe.domain import DEFAULT_SNAP_ANGLES, ViewMode


class ClassifierConfig(BaseModel):
    """Configuration for point classification.

    The edge threshold is measured in image pixels and is not divided by the
    zoom scale, unlike the snap threshold.
    """

    edge_threshold: float = Field(
        default=3.0,
        ge=0.0,
        le=100.0,
        description="Maximum distance (px) from an edge still classified as edge",
    )


class SimplifierConfig(BaseModel):
    """Configuration for polygon simplification."""

    tolerance: float = Field(
        default=5.0,
        ge=0.0,
        le=100.0,
        description="Maximum perpendicular deviation (px) of dropped points",
    )


class SnapConfig(BaseModel):
    """Configuration for line straightening and image-bounds snapping."""

    snap_angles: tuple[float, ...] = Field(
        default=DEFAULT_SNAP_ANGLES,
        description="Directions (degrees) a straightened segment may snap to",
    )
    angle_tolerance: float = Field(
        default=22.5,
        ge=0.0,
        le=180.0,
        description="Maximum angular distance (degrees) for straightening",
    )
    snap_to_edge: bool = Field(
        default=True,
        description="Snap placed points to the image bounds",
    )
    snap_threshold_px: float = Field(
        default=20.0,
        ge=0.0,
        le=100.0,
        description="On-screen snap distance (px), divided by the zoom scale",
    )
    view_mode: ViewMode = Field(
        default=ViewMode.SINGLE,
        description="Vertical layout of the image",
    )

    @field_validator("snap_angles")
    @classmethod
    def _angles_not_empty(cls, value: tuple[float, ...]) -> tuple[float, ...]:
        if not value:
            raise ValueError("snap_angles must contain at least one angle")
        return value


class PathTestingConfig(BaseModel):
    """Limits applied to interactively drawn test paths."""

    max_points: int = Field(
        default=1000,
        ge=1,
        le=100_000,
        description="Maximum number of points in a test path",
    )
    min_point_distance: float = Field(
        default=8.0,
        ge=0.0,
        description="Minimum spacing (px) between freehand path samples",
    )


class ProcessingConfig(BaseModel):
    """Configuration for batch processing of zone documents."""

    max_workers: int | None = Field(
        default=1,
        ge=1,
        description="Max worker processes (None = auto, 1 = in-process)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class PolyprobeSettings(BaseModel):
    """Main application settings."""

    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)
    simplifier: SimplifierConfig = Field(default_factory=SimplifierConfig)
    snap: SnapConfig = Field(default_factory=SnapConfig)
    path_testing: PathTestingConfig = Field(default_factory=PathTestingConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> PolyprobeSettings:
    """Get default application settings."""
    return PolyprobeSettings()
