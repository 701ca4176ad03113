"""Isoliner - Trace isocontours of scalar fields into vector paths.

Isoliner is a CLI tool and library that runs marching squares over a grid
of samples (typically a grayscale heightmap), stitches the per-cell
crossings into continuous paths, closes paths that leave the grid along
its border, and renders the result as SVG.

Example:
    $ isoliner heightmap.tif

This will create heightmap-contours.svg with 15 evenly spaced contour levels.
"""

__version__ = "0.1.0"
__author__ = "Isoliner contributors"

__all__ = ["__author__", "__version__"]
