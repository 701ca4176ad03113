"""SVG writer for rendering contour paths.

This module provides the SvgWriter class for rendering the paths of one
or more contour levels into a single SVG document.
"""

from pathlib import Path as FilePath
from xml.sax.saxutils import quoteattr

from isoliner.config import RenderConfig
from isoliner.domain import Path
from isoliner.exceptions import OutputWriteError
from isoliner.io.converter import path_to_svg_d

DEFAULT_STROKE = "black"


class SvgWriter:
    """Accumulates contour levels and writes them as an SVG document.

    Each level becomes a <g> group holding one <path> per contour path.

    Example:
        writer = SvgWriter(width=512, height=512)
        writer.add_level(threshold, paths)
        writer.save(FilePath("contours.svg"))
    """

    def __init__(self, width: int, height: int, config: RenderConfig | None = None) -> None:
        """Initialize the writer.

        Args:
            width: Document width (field width in samples)
            height: Document height (field height in samples)
            config: Rendering settings (defaults if None)
        """
        self.width = width
        self.height = height
        self.config = config or RenderConfig()
        self._groups: list[str] = []
        self._path_count = 0

    @property
    def path_count(self) -> int:
        """Number of path elements added so far."""
        return self._path_count

    def add_level(self, threshold: float, paths: list[Path], stroke: str = DEFAULT_STROKE) -> None:
        """Add the paths of one contour level.

        Args:
            threshold: Contour level the paths belong to
            paths: Paths to render (already filtered for length)
            stroke: Stroke color for the level
        """
        elements: list[str] = []
        for path in paths:
            d = path_to_svg_d(path, use_interpolated=self.config.use_interpolated)
            if not d:
                continue
            elements.append(
                f"    <path stroke={quoteattr(stroke)} "
                f'stroke-width="{self.config.stroke_width:g}" '
                f"fill={quoteattr(self.config.fill)} "
                f'd="{d}" />'
            )

        self._groups.append(
            f'  <g data-threshold="{threshold:g}">\n'
            + "".join(f"{e}\n" for e in elements)
            + "  </g>"
        )
        self._path_count += len(elements)

    def to_svg(self) -> str:
        """Render the document.

        Returns:
            SVG document text
        """
        lines = [
            f'<svg width="{self.width}" height="{self.height}" '
            f'viewBox="0 0 {self.width - 1} {self.height - 1}" '
            'version="1.1" xmlns="http://www.w3.org/2000/svg">',
            *self._groups,
            "</svg>",
        ]
        return "\n".join(lines) + "\n"

    def save(self, output_path: FilePath) -> None:
        """Write the document to a file.

        Args:
            output_path: Destination path

        Raises:
            OutputWriteError: If the file cannot be written
        """
        try:
            output_path.write_text(self.to_svg(), encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(str(output_path), str(e)) from e

    @staticmethod
    def get_output_path(input_path: FilePath) -> FilePath:
        """Generate the default output path for an input image.

        Converts: heightmap.tif -> heightmap-contours.svg

        Args:
            input_path: Input image path

        Returns:
            Path with -contours suffix and .svg extension
        """
        return input_path.parent / f"{input_path.stem}-contours.svg"
