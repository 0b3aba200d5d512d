"""Arrowroute - Obstacle-avoiding arrow routing and rendering.

Arrowroute computes routes for diagram arrows between two endpoints while
steering around rectangular obstacles, then renders the route, its arrowhead
glyphs and an optional measurement label as SVG path data.

Example:
    $ arrowroute render scene.json -o arrows.svg

This routes every arrow in scene.json around the scene's obstacles and writes
the resulting paths to arrows.svg.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
