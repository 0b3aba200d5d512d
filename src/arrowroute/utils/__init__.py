"""Utility functions for arrowroute.

This module provides utility functions including:

- Logging setup and configuration
- Routing statistics tracking
"""

from arrowroute.utils.logging import (
    RoutingLogger,
    RoutingStats,
    configure_logging,
)

__all__ = [
    "RoutingLogger",
    "RoutingStats",
    "configure_logging",
]
