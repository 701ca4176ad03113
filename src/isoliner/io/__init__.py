"""Image and SVG I/O layer for isoliner.

This module handles decoding raster images with Pillow and rendering
contour paths to SVG. It provides a clean abstraction layer between file
formats and the domain models.

Key responsibilities:
- Decode images and sample them into scalar fields
- Convert paths to SVG path data
- Write SVG documents with one group per contour level

Key classes:
- FieldReader: Load images and build scalar fields
- SvgWriter: Render and save contour levels
"""

from isoliner.io.reader import FieldReader
from isoliner.io.writer import SvgWriter

__all__ = [
    "FieldReader",
    "SvgWriter",
]
