"""Polyprobe - Geometry engine for image-annotation editors.

Polyprobe provides the analysis side of a polygon annotation editor: it
classifies test points against annotated zones (inside, outside or on an
edge), simplifies polygon outlines with Ramer-Douglas-Peucker, and constrains
interactively placed points to canonical directions or to an image's bounds.

Example:
    $ polyprobe classify zones.json path.txt

This prints every path point with its containment status and the zones
that contain it.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
