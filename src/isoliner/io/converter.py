"""Converters between external representations and domain models.

This module handles the conversion between Pillow images and ScalarField,
and between Path and SVG path data.
"""

import numpy as np
from PIL import Image

from isoliner.config import SampleMode
from isoliner.domain import Path, ScalarField

# Pillow modes holding samples in the 16-bit range
WIDE_MODES = ("I;16", "I;16B", "I;16L", "I", "F")

# 8-bit to 16-bit luminance scale (0xFF * 257 == 0xFFFF)
LUMA8_TO_LUMA16 = 257.0

# Stroke ramp from the lowest to the highest level
PALETTE: list[tuple[int, int, int]] = [
    (44, 123, 182),
    (171, 217, 233),
    (255, 255, 191),
    (253, 174, 97),
    (215, 25, 28),
]


def image_to_field(image: Image.Image, mode: SampleMode = SampleMode.LUMA16) -> ScalarField:
    """Convert a Pillow image to a ScalarField of luminance samples.

    Color images are reduced to 8-bit luminance first. In LUMA16 mode,
    8-bit luminance is widened to the 16-bit range; images already holding
    wide integer or float samples keep their values. In LUMA8 mode, wide
    samples are scaled down from the 16-bit range and rounded.

    Args:
        image: Decoded Pillow image
        mode: Pixel format to sample

    Returns:
        ScalarField with one sample per pixel, row-major

    Raises:
        FieldShapeError: If the image is smaller than 2x2 pixels
    """
    if image.mode in WIDE_MODES:
        samples = np.asarray(image, dtype=np.float64)
        if mode is SampleMode.LUMA8:
            # Pillow's convert("L") clips wide samples at 255 instead of scaling
            samples = np.clip(np.rint(samples / LUMA8_TO_LUMA16), 0.0, 255.0)
    else:
        luma = image if image.mode == "L" else image.convert("L")
        samples = np.asarray(luma, dtype=np.float64)
        if mode is SampleMode.LUMA16:
            samples = samples * LUMA8_TO_LUMA16

    height, width = samples.shape[:2]
    return ScalarField(
        width=width,
        height=height,
        values=tuple(samples.reshape(-1).tolist()),
    )


def _format_number(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def path_to_svg_d(path: Path, use_interpolated: bool = True) -> str:
    """Convert a path to SVG path data.

    Closed paths end with "Z" instead of repeating their first point.

    Args:
        path: Path to convert
        use_interpolated: Use interpolated crossings instead of raw anchors

    Returns:
        SVG path data string, empty for an empty path

    Examples:
        An open path through (0, 0.5) and (0.5, 0) gives "M0 0.5 L0.5 0".
    """
    points = list(path.points)
    if path.closed and len(points) > 1 and points[-1].raw == points[0].raw:
        points = points[:-1]
    if not points:
        return ""

    coords = [p.interpolated if use_interpolated else p.raw for p in points]
    commands = [f"M{_format_number(coords[0].x)} {_format_number(coords[0].y)}"]
    commands.extend(f"L{_format_number(c.x)} {_format_number(c.y)}" for c in coords[1:])
    if path.closed:
        commands.append("Z")
    return " ".join(commands)


def level_color(index: int, count: int) -> str:
    """Pick a stroke color for a contour level from the palette ramp.

    Args:
        index: Level index, 0 for the lowest level
        count: Total number of levels

    Returns:
        Hex color string like "#2c7bb6"
    """
    if count <= 1:
        r, g, b = PALETTE[0]
        return f"#{r:02x}{g:02x}{b:02x}"

    position = (index / (count - 1)) * (len(PALETTE) - 1)
    low = min(int(position), len(PALETTE) - 2)
    frac = position - low
    start = PALETTE[low]
    end = PALETTE[low + 1]
    r, g, b = (round(s + (e - s) * frac) for s, e in zip(start, end, strict=True))
    return f"#{r:02x}{g:02x}{b:02x}"
