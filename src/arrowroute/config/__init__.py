"""Configuration management for arrowroute.

This module provides configuration management using Pydantic models.
Configuration can be provided via scene files, CLI arguments or defaults.

Key classes:
- RouteConfig: Route computation settings
- ArrowConfig: Arrow head and label settings
- LabelFontConfig: Font used for distance labels
- LoggingConfig: Logging settings
- ArrowRouteSettings: Main application settings
"""

from arrowroute.config.settings import (
    ARROW_PRESETS,
    ArrowConfig,
    ArrowRouteSettings,
    LabelFontConfig,
    LineStyle,
    LoggingConfig,
    RouteConfig,
    RoutingMode,
    get_default_settings,
)

__all__ = [
    "ARROW_PRESETS",
    "ArrowConfig",
    "ArrowRouteSettings",
    "LabelFontConfig",
    "LineStyle",
    "LoggingConfig",
    "RouteConfig",
    "RoutingMode",
    "get_default_settings",
]
