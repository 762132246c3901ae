"""Configuration management for polyprobe.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- ClassifierConfig: Point classification settings
- SimplifierConfig: Polygon simplification settings
- SnapConfig: Straightening and bounds-snapping settings
- PathTestingConfig: Test path limits
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- PolyprobeSettings: Main application settings
"""

from polyprobe.config.settings import (
    ClassifierConfig,
    LoggingConfig,
    PathTestingConfig,
    PolyprobeSettings,
    ProcessingConfig,
    SimplifierConfig,
    SnapConfig,
    get_default_settings,
)

__all__ = [
    "ClassifierConfig",
    "LoggingConfig",
    "PathTestingConfig",
    "PolyprobeSettings",
    "ProcessingConfig",
    "SimplifierConfig",
    "SnapConfig",
    "get_default_settings",
]
